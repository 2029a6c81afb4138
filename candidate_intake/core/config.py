import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    progress_every: int
    auto_header_mapping: bool
    min_mapped_fields: int
    fix_email_typos: bool


def load_settings() -> Settings:
    return Settings(
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        progress_every=max(0, _get_env_int("INTAKE_PROGRESS_EVERY", 500)),
        auto_header_mapping=_get_env_bool("INTAKE_AUTO_HEADER_MAPPING", False),
        min_mapped_fields=max(1, _get_env_int("INTAKE_MIN_MAPPED_FIELDS", 2)),
        fix_email_typos=_get_env_bool("INTAKE_FIX_EMAIL_TYPOS", True),
    )


settings = load_settings()
