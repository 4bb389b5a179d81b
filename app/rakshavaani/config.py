"""Runtime settings for RakshaVaani services."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_TEST_API_KEY = "sk_test_123456789"

DEFAULT_VOICE_MODELS = (
    "gemini-2.0-flash-lite-001",
    "gemini-2.0-flash",
    "gemini-1.5-flash",
)
DEFAULT_CHAT_MODELS = (
    "gemini-2.0-flash-lite",
    "gemini-2.0-flash",
    "gemini-exp-1206",
)


def _as_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_models(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    models = tuple(item.strip() for item in value.split(",") if item.strip())
    return models or default


def _first_env(*names: str) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class Settings:
    app_name: str = field(default_factory=lambda: os.getenv("RAKSHAVAANI_APP_NAME", "rakshavaani-api"))

    gemini_api_key: str | None = field(
        default_factory=lambda: _first_env(
            "GEMINI_API_KEY",
            "VITE_GEMINI_API_KEY",
            "Gemini_API_Key",
        )
    )
    gemini_base_url: str = field(
        default_factory=lambda: os.getenv(
            "RAKSHAVAANI_GEMINI_BASE_URL",
            "https://generativelanguage.googleapis.com/v1beta",
        )
    )
    # Well-known key accepted alongside the deployment secret.
    test_api_key: str | None = field(
        default_factory=lambda: os.getenv("RAKSHAVAANI_TEST_API_KEY", DEFAULT_TEST_API_KEY)
    )

    # Candidate order is a priority ranking, earliest first.
    voice_models: tuple[str, ...] = field(
        default_factory=lambda: _as_models(os.getenv("RAKSHAVAANI_VOICE_MODELS"), DEFAULT_VOICE_MODELS)
    )
    chat_models: tuple[str, ...] = field(
        default_factory=lambda: _as_models(os.getenv("RAKSHAVAANI_CHAT_MODELS"), DEFAULT_CHAT_MODELS)
    )
    chat_max_attempts: int = field(
        default_factory=lambda: int(os.getenv("RAKSHAVAANI_CHAT_MAX_ATTEMPTS", "2"))
    )
    chat_retry_pause_sec: float = field(
        default_factory=lambda: float(os.getenv("RAKSHAVAANI_CHAT_RETRY_PAUSE_SEC", "1.5"))
    )

    request_timeout_sec: float = field(
        default_factory=lambda: float(os.getenv("RAKSHAVAANI_REQUEST_TIMEOUT_SEC", "30"))
    )

    # Persistence
    local_storage_dir: str = field(
        default_factory=lambda: os.getenv("RAKSHAVAANI_LOCAL_STORAGE_DIR", ".rakshavaani_local_store")
    )
    history_enabled: bool = field(
        default_factory=lambda: _as_bool(os.getenv("RAKSHAVAANI_HISTORY_ENABLED"), default=True)
    )

    def allowed_api_keys(self) -> frozenset[str]:
        keys = {key for key in (self.gemini_api_key, self.test_api_key) if key}
        return frozenset(keys)


def get_settings() -> Settings:
    return Settings()
