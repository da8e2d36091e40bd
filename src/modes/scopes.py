"""
Scopes — временные переопределения конфигурации

Context manager'ы, которые снимают копию конфигурации на входе и
восстанавливают её на выходе из блока, в том числе при исключении:

    with save_rounding_mode():
        rounding_mode(RoundingMode.FLOOR)
        ...
    # rounding_mode восстановлен

save_* восстанавливают только своё поле: изменения других полей внутри
блока сохраняются. local_config восстанавливает весь снимок.
"""

from types import TracebackType
from typing import Any, Iterable

from src.core.math.rounding import RoundingMode
from src.modes.config import (
    DecimalConfig,
    ExceptionFlag,
    _parse_flags,
    get_config,
    set_config,
)


class ConfigScope:
    """
    Scoped-переопределение DecimalConfig.

    Args:
        fields: Имена восстанавливаемых полей (None — весь снимок)
        changes: Изменения, применяемые на входе в блок
    """

    def __init__(self, fields: tuple[str, ...] | None = None, **changes: Any):
        self._fields = fields
        self._changes = changes
        self._saved: DecimalConfig | None = None

    def __enter__(self) -> DecimalConfig:
        self._saved = get_config()
        if self._changes:
            set_config(self._saved.with_changes(**self._changes))
        return get_config()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        saved = self._saved
        if saved is None:
            return

        if self._fields is None:
            set_config(saved)
        else:
            restored = {name: getattr(saved, name) for name in self._fields}
            set_config(get_config().with_changes(**restored))
        self._saved = None


def save_exception_mode(
    flags: ExceptionFlag | str | Iterable[ExceptionFlag | str] | None = None,
) -> ConfigScope:
    """
    Сохранение флагов исключений на время блока.

    Args:
        flags: Если задано — флаг или набор флагов, устанавливаемый на входе
    """
    if flags is None:
        return ConfigScope(("exception_flags",))
    return ConfigScope(("exception_flags",), exception_flags=_parse_flags(flags))


def save_rounding_mode(mode: RoundingMode | str | None = None) -> ConfigScope:
    """Сохранение правила округления на время блока."""
    if mode is None:
        return ConfigScope(("rounding_mode",))
    return ConfigScope(("rounding_mode",), rounding_mode=RoundingMode.parse(mode))


def save_limit(digits: int | None = None) -> ConfigScope:
    """Сохранение лимита значащих цифр на время блока."""
    if digits is None:
        return ConfigScope(("precision_limit",))
    return ConfigScope(("precision_limit",), precision_limit=digits)


def local_config(**changes: Any) -> ConfigScope:
    """
    Полный снимок конфигурации на время блока.

    Examples:
        >>> with local_config(precision_limit=10, rounding_mode="half_even"):
        ...     pass
    """
    return ConfigScope(None, **changes)
