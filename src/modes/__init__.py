"""Modes — конфигурация десятичной арифметики и её scoped-переопределения.

- DecimalConfig: лимит точности, правило округления, флаги исключений
- Scopes: save_exception_mode / save_rounding_mode / save_limit / local_config
"""

from .config import (
    ALL_EXCEPTION_FLAGS,
    DEFAULT_CONFIG,
    DecimalConfig,
    ExceptionFlag,
    config_from_dict,
    exception_mode,
    get_config,
    limit,
    reset_config,
    rounding_mode,
    set_config,
)
from .scopes import (
    ConfigScope,
    local_config,
    save_exception_mode,
    save_limit,
    save_rounding_mode,
)

__all__ = [
    "ALL_EXCEPTION_FLAGS",
    "DEFAULT_CONFIG",
    "DecimalConfig",
    "ExceptionFlag",
    "config_from_dict",
    "exception_mode",
    "get_config",
    "limit",
    "reset_config",
    "rounding_mode",
    "set_config",
    "ConfigScope",
    "local_config",
    "save_exception_mode",
    "save_limit",
    "save_rounding_mode",
]
