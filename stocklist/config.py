from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

_DEFAULT_ENV = "development"
_ENV_KEY = "FLASK_ENV"
_VALID_ENVS = {"development", "testing", "production"}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_DEFAULT_SECRET_KEY = "devkey-please-change-in-production"

DEFAULT_CATEGORIES = ("Electronics", "Books", "Groceries", "Clothing", "Other")


@dataclass(frozen=True)
class EnvironmentInfo:
    name: str
    source: str
    raw_value: str


class EnvReader:
    def __init__(self, data: Mapping[str, str] | None = None):
        self._data = dict(os.environ if data is None else data)
        self.warnings: list[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def _value(self, key: str) -> str | None:
        value = self._data.get(key)
        if value is None:
            return None
        stripped = value.strip()
        return stripped if stripped else None

    def str(self, key: str, default: str | None = None) -> str | None:
        value = self._value(key)
        return value if value is not None else default

    def bool(self, key: str, default: bool = False) -> bool:
        value = self._value(key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        self.warn(f"{key} expected boolean but received {value!r}; falling back to {default}.")
        return default

    def list(self, key: str, default: tuple[str, ...] = ()) -> tuple[str, ...]:
        """Comma-separated values, blanks dropped, order and case preserved."""
        value = self._value(key)
        if value is None:
            return default
        items = tuple(part.strip() for part in value.split(",") if part.strip())
        if not items:
            self.warn(f"{key} did not contain any values; falling back to {list(default)}.")
            return default
        return items


def _normalized_env(value: str | None, *, default: str = _DEFAULT_ENV) -> str:
    if not value:
        return default
    return value.strip().lower() or default


def resolve_environment(reader: EnvReader) -> EnvironmentInfo:
    raw_value = reader.str(_ENV_KEY, _DEFAULT_ENV) or _DEFAULT_ENV
    normalized = _normalized_env(raw_value)
    if normalized not in _VALID_ENVS:
        raise RuntimeError(
            f"Invalid {_ENV_KEY}={raw_value!r}. Expected one of {sorted(_VALID_ENVS)}."
        )
    return EnvironmentInfo(name=normalized, source=_ENV_KEY, raw_value=raw_value)


env = EnvReader()
ENV_INFO = resolve_environment(env)


class BaseConfig:
    FLASK_ENV = ENV_INFO.name
    SECRET_KEY = env.str("FLASK_SECRET_KEY", _DEFAULT_SECRET_KEY)

    PRODUCT_CATEGORIES = env.list("PRODUCT_CATEGORIES", DEFAULT_CATEGORIES)

    # Browser-session lifetime: the cookie dies with the browser.
    SESSION_PERMANENT = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_KEY_PREFIX = "stocklist:"
    REDIS_URL = env.str("REDIS_URL")

    # The token is checked explicitly by the delete flow, not by CSRFProtect.
    WTF_CSRF_ENABLED = True
    WTF_CSRF_CHECK_DEFAULT = False
    WTF_CSRF_TIME_LIMIT = None

    LOG_LEVEL = env.str("LOG_LEVEL", "WARNING") or "WARNING"
    LOG_REDACT_SECRETS = env.bool("LOG_REDACT_SECRETS", True)

    SECURITY_HEADERS: dict[str, str] = {}
    CONTENT_SECURITY_POLICY = (
        "default-src 'self'; "
        "script-src 'self' https://cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
        "img-src 'self' data:; "
        "object-src 'none'; "
        "form-action 'self'"
    )


class DevelopmentConfig(BaseConfig):
    ENV = "development"
    DEBUG = True
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = env.str("LOG_LEVEL", "DEBUG") or "DEBUG"


class TestingConfig(BaseConfig):
    ENV = "testing"
    TESTING = True
    SESSION_COOKIE_SECURE = False
    SECRET_KEY = "test-secret-key"


class ProductionConfig(BaseConfig):
    ENV = "production"
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    PREFERRED_URL_SCHEME = "https"
    LOG_LEVEL = env.str("LOG_LEVEL", "INFO") or "INFO"


config_map = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def is_default_secret(value: str | None) -> bool:
    return not value or value == _DEFAULT_SECRET_KEY


Config = config_map[ENV_INFO.name]
ENV_DIAGNOSTICS = {
    "active": ENV_INFO.name,
    "source": ENV_INFO.source,
    "variables": {ENV_INFO.source: ENV_INFO.raw_value},
    "warnings": tuple(env.warnings),
}
