"""
Extractor settings.

Dataclasses so callers (and tests) can pin any value explicitly; whatever is
left as None is filled from the environment for the chosen provider, then
handed to the LLM client factory.
"""

import os
from dataclasses import dataclass
from typing import Optional

# provider -> (api key var, model var, default model, endpoint var)
PROVIDER_ENV = {
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL", "gemini-2.0-flash", None),
    "azure": ("OPENAI_KEY", "OPENAI_DEPLOYMENT", None, "OPENAI_ENDPOINT"),
    "openai": ("OPENAI_API_KEY", "OPENAI_MODEL", "gpt-4o-2024-08-06", None),
}


@dataclass
class ExtractorConfig:
    """
    Model connection and generation settings.

    llm_model is the model name for Gemini and OpenAI and the deployment
    name on Azure.
    """
    llm_provider: Optional[str] = None  # "gemini" (default), "azure" or "openai"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None
    llm_endpoint: Optional[str] = None  # Azure only
    llm_api_version: str = "2024-08-01-preview"  # Azure only

    temperature: float = 0.0
    max_tokens: Optional[int] = None

    def __post_init__(self):
        self.llm_provider = (self.llm_provider or os.getenv("LLM_PROVIDER", "gemini")).lower()

        env = PROVIDER_ENV.get(self.llm_provider)
        if env is None:
            return

        key_var, model_var, default_model, endpoint_var = env
        if self.llm_api_key is None:
            self.llm_api_key = os.getenv(key_var)
        if self.llm_model is None:
            self.llm_model = os.getenv(model_var, default_model)
        if endpoint_var and self.llm_endpoint is None:
            self.llm_endpoint = os.getenv(endpoint_var)

    def validate(self) -> bool:
        """True when the provider is known and its credentials are present."""
        if self.llm_provider not in PROVIDER_ENV:
            return False
        required = [self.llm_api_key, self.llm_model]
        if self.llm_provider == "azure":
            required.append(self.llm_endpoint)
        return all(required)


@dataclass
class QuestionExtractorConfig(ExtractorConfig):
    """Adds segmentation, concurrency and explanation-fallback settings."""
    # Segmentation: trimmed pieces at or below this length are noise
    min_segment_length: int = 20

    # Extraction calls in flight per document (MAX_CONCURRENCY, default 4)
    max_concurrency: Optional[int] = None

    # Second call for questions whose explanation came back missing or too short
    generate_missing_explanations: bool = False
    min_explanation_length: int = 10

    def __post_init__(self):
        super().__post_init__()
        if self.max_concurrency is None:
            self.max_concurrency = int(os.getenv("MAX_CONCURRENCY", "4"))
        self.max_concurrency = max(1, self.max_concurrency)
