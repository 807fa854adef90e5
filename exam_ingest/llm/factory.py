"""Builds the LLM client named by an ExtractorConfig."""

from .client import BaseLLMClient, GeminiLLMClient, AzureLLMClient, OpenAIClient

# Settings each provider cannot work without
REQUIRED_SETTINGS = {
    "gemini": ("llm_api_key", "llm_model"),
    "azure": ("llm_endpoint", "llm_api_key", "llm_model"),
    "openai": ("llm_api_key", "llm_model"),
}


def create_llm_client(config) -> BaseLLMClient:
    """ Return a client for config.llm_provider, checking its credentials first. """
    provider = (config.llm_provider or "").lower()

    if provider not in REQUIRED_SETTINGS:
        raise ValueError(
            f"Unknown LLM provider: {provider}. Use 'gemini', 'azure' or 'openai'"
        )

    missing = [name for name in REQUIRED_SETTINGS[provider] if not getattr(config, name, None)]
    if missing:
        raise ValueError(f"{provider.capitalize()} provider requires: {', '.join(missing)}")

    if provider == "gemini":
        return GeminiLLMClient(api_key=config.llm_api_key)

    if provider == "azure":
        return AzureLLMClient(
            azure_endpoint=config.llm_endpoint,
            api_key=config.llm_api_key,
            api_version=config.llm_api_version,
        )

    return OpenAIClient(api_key=config.llm_api_key)
