import logging
import os

from pydantic import BaseModel, ConfigDict

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class AlignmentSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: str = "WARNING"
    max_padding: int = 50
    debounce_ms: int = 100
    respect_existing_padding: bool = True


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _log_level_env(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper() or default
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"{name} must be a logging level name, got {level!r}")
    return level


def get_settings() -> AlignmentSettings:
    return AlignmentSettings(
        log_level=_log_level_env("ALIGNMENT_SANITY_LOG_LEVEL", "WARNING"),
        max_padding=_int_env("ALIGNMENT_SANITY_MAX_PADDING", 50),
        debounce_ms=_int_env("ALIGNMENT_SANITY_DEBOUNCE_MS", 100),
        respect_existing_padding=_bool_env("ALIGNMENT_SANITY_RESPECT_EXISTING_PADDING", True),
    )
