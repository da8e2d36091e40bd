"""
DecimalConfig — конфигурация десятичной арифметики

Immutable Pydantic модель, описывающая режим работы BigDecimal:
- precision_limit: максимум значащих цифр результатов (0 = без ограничения)
- rounding_mode: правило округления по умолчанию
- exception_flags: условия, при которых операция падает вместо sentinel

Текущая конфигурация хранится в ContextVar: каждый поток и каждая
asyncio-задача видят собственный снимок, поэтому scoped-переопределения
не требуют блокировок. Новые потоки стартуют с DEFAULT_CONFIG.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Снимок конфигурации никогда не мутирует (frozen=True)
2. Любое изменение проходит валидацию (with_changes → model_validate)
"""

import logging
from contextvars import ContextVar
from enum import Enum
from typing import Any, Final, Iterable

from pydantic import BaseModel, Field, field_validator

from src.core.contracts.validators import validate_decimal_config
from src.core.math.rounding import DEFAULT_ROUNDING_MODE, RoundingMode

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class ExceptionFlag(str, Enum):
    """Условия, поведение которых переключается между исключением и sentinel."""

    NAN = "nan"
    INFINITY = "infinity"
    UNDERFLOW = "underflow"
    OVERFLOW = "overflow"
    ZERO_DIVIDE = "zero_divide"


ALL_EXCEPTION_FLAGS: Final[frozenset[ExceptionFlag]] = frozenset(ExceptionFlag)


# =============================================================================
# CONFIG MODEL
# =============================================================================


class DecimalConfig(BaseModel):
    """
    Снимок конфигурации десятичной арифметики.

    Immutable модель (frozen=True). Изменения создают новый экземпляр
    через with_changes.
    """

    precision_limit: int = Field(
        0, ge=0, description="Максимум значащих цифр результата (0 = без ограничения)"
    )
    rounding_mode: RoundingMode = Field(
        DEFAULT_ROUNDING_MODE, description="Правило округления по умолчанию"
    )
    exception_flags: frozenset[ExceptionFlag] = Field(
        default_factory=frozenset,
        description="Условия, при которых операция поднимает исключение",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("rounding_mode", mode="before")
    @classmethod
    def parse_rounding_alias(cls, v: Any) -> Any:
        """Алиасы правил округления (banker, truncate, ceil, default)."""
        if isinstance(v, str):
            return RoundingMode.parse(v)
        return v

    def is_enabled(self, flag: ExceptionFlag) -> bool:
        """Включён ли флаг исключения."""
        return flag in self.exception_flags

    def with_changes(self, **changes: Any) -> "DecimalConfig":
        """
        Новый снимок с изменёнными полями.

        Raises:
            pydantic.ValidationError: Если новые значения невалидны
        """
        data = {
            "precision_limit": self.precision_limit,
            "rounding_mode": self.rounding_mode,
            "exception_flags": self.exception_flags,
        }
        data.update(changes)
        return DecimalConfig.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Сериализуемая форма (контракт decimal_config)."""
        return {
            "precision_limit": self.precision_limit,
            "rounding_mode": self.rounding_mode.value,
            "exception_flags": sorted(flag.value for flag in self.exception_flags),
        }


DEFAULT_CONFIG: Final[DecimalConfig] = DecimalConfig()

_CURRENT_CONFIG: ContextVar[DecimalConfig] = ContextVar(
    "decimal_config", default=DEFAULT_CONFIG
)


def config_from_dict(data: dict[str, Any]) -> DecimalConfig:
    """
    Загрузка DecimalConfig из сериализованной формы.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют контракту
    """
    validate_decimal_config(data)
    return DecimalConfig.model_validate(data)


# =============================================================================
# ДОСТУП К ТЕКУЩЕЙ КОНФИГУРАЦИИ
# =============================================================================


def get_config() -> DecimalConfig:
    """Текущий снимок конфигурации."""
    return _CURRENT_CONFIG.get()


def set_config(config: DecimalConfig) -> DecimalConfig:
    """
    Установка текущего снимка конфигурации.

    Args:
        config: Новый снимок

    Returns:
        Предыдущий снимок
    """
    if not isinstance(config, DecimalConfig):
        raise TypeError(f"config must be DecimalConfig, got {type(config).__name__}")

    previous = _CURRENT_CONFIG.get()
    if config != previous:
        logger.debug("decimal config changed: %s -> %s", previous.to_dict(), config.to_dict())
    _CURRENT_CONFIG.set(config)
    return previous


def reset_config() -> None:
    """Возврат к DEFAULT_CONFIG."""
    set_config(DEFAULT_CONFIG)


def _parse_flags(flags: "ExceptionFlag | str | Iterable[ExceptionFlag | str]") -> frozenset[ExceptionFlag]:
    if isinstance(flags, str):
        return frozenset({ExceptionFlag(flags)})
    return frozenset(ExceptionFlag(flag) for flag in flags)


def exception_mode(
    flags: "ExceptionFlag | str | Iterable[ExceptionFlag | str]",
    enabled: bool | None = None,
) -> bool:
    """
    Запрос или изменение флагов исключений.

    Args:
        flags: Флаг или набор флагов
        enabled: None — только запрос; True/False — включить/выключить

    Returns:
        True если все указанные флаги включены (после изменения)

    Examples:
        >>> exception_mode(ExceptionFlag.ZERO_DIVIDE, True)
        True
        >>> exception_mode("zero_divide")
        True
    """
    selected = _parse_flags(flags)
    config = get_config()

    if enabled is not None:
        if enabled:
            updated = config.exception_flags | selected
        else:
            updated = config.exception_flags - selected
        config = config.with_changes(exception_flags=updated)
        set_config(config)

    return selected <= config.exception_flags


def rounding_mode(mode: RoundingMode | str | None = None) -> RoundingMode:
    """
    Запрос или изменение правила округления по умолчанию.

    Returns:
        Текущее правило (после изменения)
    """
    config = get_config()
    if mode is not None:
        config = config.with_changes(rounding_mode=RoundingMode.parse(mode))
        set_config(config)
    return config.rounding_mode


def limit(digits: int | None = None) -> int:
    """
    Запрос или изменение лимита значащих цифр.

    Args:
        digits: Новый лимит (0 = без ограничения) или None — только запрос

    Returns:
        Предыдущий лимит

    Raises:
        pydantic.ValidationError: Если digits < 0
    """
    config = get_config()
    previous = config.precision_limit
    if digits is not None:
        set_config(config.with_changes(precision_limit=digits))
    return previous
