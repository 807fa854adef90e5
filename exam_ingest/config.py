# config.py
"""
Service settings read from the environment.

On Azure Functions the values come from application settings; for local runs
a .env.local file at the repository root is loaded first (without overriding
variables that are already set). LLM credentials are resolved separately by
ExtractorConfig in extractors/base/config.py.
"""

import os
from pathlib import Path
from typing import Optional

TRUTHY = ("true", "1", "yes")


class Config:
    """One property per setting; values are read on access."""

    def __init__(self, env_file: Optional[Path] = None):
        self._load_env_file(env_file or Path(__file__).parent.parent / ".env.local")

    def _load_env_file(self, env_file: Path):
        """Copy KEY=VALUE lines into os.environ unless the key is already set."""
        if not env_file.exists():
            return
        try:
            lines = env_file.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            print(f"Warning: Could not load {env_file.name}: {e}")
            return

        for line in lines:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key.strip(), value.strip())

    # Question bank
    @property
    def database_url(self) -> str:
        """DATABASE_URL, or DB_CONNECTION_STRING as set by Azure."""
        return os.environ.get("DATABASE_URL") or os.environ.get("DB_CONNECTION_STRING", "")

    @property
    def insert_chunk_size(self) -> int:
        """Rows per flush when saving reviewed questions."""
        return int(os.environ.get("INSERT_CHUNK_SIZE", "200"))

    # Text extraction
    @property
    def document_parser(self) -> str:
        """pymupdf (default), pymupdf_markdown or azure."""
        return os.environ.get("DOCUMENT_PARSER", "pymupdf").lower()

    @property
    def di_endpoint(self) -> str:
        return os.environ.get("DI_ENDPOINT", "")

    @property
    def di_key(self) -> str:
        return os.environ.get("DI_KEY", "")

    # Question extraction
    @property
    def llm_provider(self) -> str:
        """gemini (default), azure or openai."""
        return os.environ.get("LLM_PROVIDER", "gemini").lower()

    @property
    def gemini_api_key(self) -> str:
        return os.environ.get("GEMINI_API_KEY", "")

    @property
    def openai_endpoint(self) -> str:
        """Azure OpenAI resource endpoint."""
        return os.environ.get("OPENAI_ENDPOINT", "")

    @property
    def openai_key(self) -> str:
        """OPENAI_API_KEY for the openai provider, the Azure OPENAI_KEY otherwise."""
        if self.llm_provider == "openai":
            return os.environ.get("OPENAI_API_KEY", "")
        return os.environ.get("OPENAI_KEY", "")

    @property
    def max_concurrency(self) -> int:
        """Extraction calls in flight per document."""
        return int(os.environ.get("MAX_CONCURRENCY", "4"))

    # Runtime
    @property
    def local_mode(self) -> bool:
        return os.environ.get("LOCAL_MODE", "false").lower() in TRUTHY

    @property
    def log_level(self) -> str:
        return os.environ.get("LOG_LEVEL", "INFO").upper()

    def validate(self) -> tuple[bool, list[str]]:
        """
        Check the settings the selected parser and provider need.

        Returns:
            Tuple of (is_valid, list of missing keys)
        """
        missing = []

        if not self.database_url:
            missing.append("DATABASE_URL or DB_CONNECTION_STRING")

        if self.document_parser == "azure":
            missing += [name for name, value in (("DI_ENDPOINT", self.di_endpoint), ("DI_KEY", self.di_key))
                        if not value]

        if self.llm_provider == "gemini":
            required = [("GEMINI_API_KEY", self.gemini_api_key)]
        elif self.llm_provider == "azure":
            required = [("OPENAI_ENDPOINT", self.openai_endpoint), ("OPENAI_KEY", self.openai_key)]
        elif self.llm_provider == "openai":
            required = [("OPENAI_API_KEY", self.openai_key)]
        else:
            required = [("LLM_PROVIDER (gemini, azure or openai)", "")]
        missing += [name for name, value in required if not value]

        return len(missing) == 0, missing

    def print_config(self, hide_secrets: bool = True):
        """Print current settings, masking secrets unless told otherwise."""
        def secret(value: str) -> str:
            return self._mask(value) if hide_secrets else value

        settings = [
            ("Local Mode", self.local_mode),
            ("Log Level", self.log_level),
            ("Database URL", secret(self.database_url)),
            ("Insert Chunk Size", self.insert_chunk_size),
            ("Document Parser", self.document_parser),
            ("DI Endpoint", self.di_endpoint),
            ("DI Key", secret(self.di_key)),
            ("LLM Provider", self.llm_provider),
            ("Gemini Key", secret(self.gemini_api_key)),
            ("OpenAI Endpoint", self.openai_endpoint),
            ("OpenAI Key", secret(self.openai_key)),
            ("Max Concurrency", self.max_concurrency),
        ]

        print("=" * 60)
        print("Configuration:")
        print("=" * 60)
        for label, value in settings:
            print(f"{label}: {value}")
        print("=" * 60)

    @staticmethod
    def _mask(value: str, show_chars: int = 4) -> str:
        """Keep the first and last few characters of a secret."""
        if not value or len(value) <= show_chars * 2:
            return "***"
        return value[:show_chars] + "..." + value[-show_chars:]


# Global config instance
config = Config()
