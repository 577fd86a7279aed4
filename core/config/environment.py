"""
Environment Configuration Module

Loads provider credentials, model choices and runtime switches from
environment variables. A ``.env`` file at the project root is read first
when present; variables already set in the process win.
"""
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

TRUE_VALUES = {"1", "true", "yes", "on"}


def load_environment(env_path: Optional[Path] = None) -> bool:
    """Load variables from a .env file into ``os.environ``.

    Args:
        env_path: File to load (defaults to ``<project root>/.env``)

    Returns:
        True if a file was found and loaded
    """
    path = env_path or PROJECT_ROOT / '.env'
    if not path.exists():
        return False
    return load_dotenv(dotenv_path=path, override=False)


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUE_VALUES


def _int(value: Optional[str], default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: Optional[str], default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _text(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class EnvironmentConfig:
    """Environment configuration loaded from environment variables."""

    # OpenAI Configuration
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"

    # Gemini Configuration
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"

    # Anthropic Configuration
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = "claude-3-5-sonnet"

    # Ollama Configuration
    ollama_enabled: bool = False
    ollama_endpoint: str = "http://localhost:11434"
    ollama_model: str = "llama3.2:3b"

    # Shared LLM settings
    llm_timeout: int = 60
    llm_max_retries: int = 2
    llm_temperature: float = 0.7
    llm_max_tokens: int = 4000
    default_provider: Optional[str] = None

    # Parsing
    parse_tags_and_priority: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EnvironmentConfig':
        """Create config from environment variables.

        Args:
            environ: Variable mapping to read; ``os.environ`` after loading
                ``.env`` when omitted

        Returns:
            EnvironmentConfig with defaults for unset or malformed values
        """
        if environ is None:
            load_environment()
            environ = os.environ
        defaults = cls()
        get = environ.get

        log_format = (get("LOG_FORMAT") or defaults.log_format).strip().lower()
        if log_format not in ("json", "text"):
            log_format = defaults.log_format

        default_provider = _text(get("DEFAULT_PROVIDER"))

        return cls(
            openai_api_key=_text(get("OPENAI_API_KEY")),
            openai_model=_text(get("OPENAI_MODEL")) or defaults.openai_model,
            gemini_api_key=_text(get("GEMINI_API_KEY")),
            gemini_model=_text(get("GEMINI_MODEL")) or defaults.gemini_model,
            anthropic_api_key=_text(get("ANTHROPIC_API_KEY")),
            anthropic_model=_text(get("ANTHROPIC_MODEL")) or defaults.anthropic_model,
            ollama_enabled=_flag(get("OLLAMA_ENABLED"), defaults.ollama_enabled),
            ollama_endpoint=_text(get("OLLAMA_ENDPOINT")) or defaults.ollama_endpoint,
            ollama_model=_text(get("OLLAMA_MODEL")) or defaults.ollama_model,
            llm_timeout=_int(get("LLM_TIMEOUT"), defaults.llm_timeout),
            llm_max_retries=_int(get("LLM_MAX_RETRIES"), defaults.llm_max_retries),
            llm_temperature=_float(get("LLM_TEMPERATURE"), defaults.llm_temperature),
            llm_max_tokens=_int(get("LLM_MAX_TOKENS"), defaults.llm_max_tokens),
            default_provider=default_provider.lower() if default_provider else None,
            parse_tags_and_priority=_flag(get("PARSE_TAGS_AND_PRIORITY"), defaults.parse_tags_and_priority),
            log_level=(_text(get("LOG_LEVEL")) or defaults.log_level).upper(),
            log_format=log_format,
        )

    def get_llm_api_key(self, provider_type: str) -> Optional[str]:
        """Get the API key for an LLM provider.

        Args:
            provider_type: Provider name (openai, gemini/google, anthropic/claude)
        """
        provider = provider_type.lower()
        if provider == "gemini" or provider == "google":
            return self.gemini_api_key
        elif provider == "anthropic" or provider == "claude":
            return self.anthropic_api_key
        elif provider == "openai":
            return self.openai_api_key
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Configuration as a dictionary with API keys masked."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("_api_key"):
                value = _mask(value)
            data[f.name] = value
        return data


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return None
    if len(secret) <= 8:
        return "****"
    return f"{secret[:4]}...{secret[-4:]}"
