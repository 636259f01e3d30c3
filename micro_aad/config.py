"""
Engine configuration.

A single module-level EngineConfig is consulted by the reverse pass and the
package logger. Values can come from code or from the environment:

    MICRO_AAD_CHECK_CYCLES   "0"/"false"/"no"/"off" disables the cycle check
    MICRO_AAD_LOG_LEVEL      any logging level name, e.g. "DEBUG"

Log level names are case-insensitive and stored upper-cased. An unknown name
raises ValueError when given in code; from the environment it is ignored
with a warning and "WARNING" is used.
"""

import logging
import os
import warnings
from dataclasses import dataclass, replace

_FALSY = ("0", "false", "no", "off")
_DEFAULT_LEVEL = "WARNING"


def _normalize_level(name) -> str:
    level = str(name).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"unknown log level {name!r}")
    return level


@dataclass(frozen=True)
class EngineConfig:
    """Shared configuration for the reverse pass"""
    check_cycles: bool = __debug__
    log_level: str = _DEFAULT_LEVEL

    def __post_init__(self):
        object.__setattr__(self, "log_level", _normalize_level(self.log_level))

    @staticmethod
    def from_env(environ=None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        cfg = EngineConfig()
        if "MICRO_AAD_CHECK_CYCLES" in env:
            flag = env["MICRO_AAD_CHECK_CYCLES"].strip().lower() not in _FALSY
            cfg = replace(cfg, check_cycles=flag)
        if "MICRO_AAD_LOG_LEVEL" in env:
            raw = env["MICRO_AAD_LOG_LEVEL"]
            try:
                cfg = replace(cfg, log_level=raw)
            except ValueError:
                warnings.warn(f"MICRO_AAD_LOG_LEVEL={raw!r} is not a log level, "
                              f"using {_DEFAULT_LEVEL}", RuntimeWarning)
        return cfg


_active = EngineConfig.from_env()


def get_config() -> EngineConfig:
    return _active


def set_config(config: EngineConfig = None, **overrides) -> EngineConfig:
    """
    Replace the active config, or update fields of it:
        set_config(check_cycles=False)
    Returns the previous config so callers can restore it. An invalid value
    raises ValueError and leaves the active config unchanged.
    """
    global _active
    prev = _active
    base = config if config is not None else _active
    new = replace(base, **overrides) if overrides else base
    from .utils.logger import get_logger
    get_logger("micro_aad").setLevel(new.log_level)
    _active = new
    return prev
