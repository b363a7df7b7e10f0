import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_MODEL = "claude-3-5-sonnet-20240620"
DEFAULT_MAX_TOKENS = 4096
DEFAULT_SANDBOX_TIMEOUT = 600  # 10 minutes


@dataclass(frozen=True)
class Settings:
    """Per-request configuration for the model client and the sandbox service."""

    anthropic_api_key: str
    e2b_api_key: str
    anthropic_api_url: str | None = None
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    sandbox_timeout: int = DEFAULT_SANDBOX_TIMEOUT


def _require(environ, key: str) -> str:
    value = environ.get(key)
    if not value:
        raise RuntimeError(f"{key} must be set")
    return value


def _int(environ, key: str, default: int) -> int:
    value = environ.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


def load_settings(environ=None) -> Settings:
    """Read settings from the environment (and .env when reading os.environ)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        anthropic_api_key=_require(environ, "ANTHROPIC_API_KEY"),
        e2b_api_key=_require(environ, "E2B_API_KEY"),
        # Optional alternate endpoint for the Anthropic API
        anthropic_api_url=environ.get("ANTHROPIC_API_URL") or None,
        model=environ.get("MODEL_NAME") or DEFAULT_MODEL,
        max_tokens=_int(environ, "MAX_TOKENS", DEFAULT_MAX_TOKENS),
        sandbox_timeout=_int(environ, "SANDBOX_TIMEOUT", DEFAULT_SANDBOX_TIMEOUT),
    )
