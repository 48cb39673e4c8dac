"""
Weekend Validator
"""

import calendar
from typing import Any, FrozenSet, Iterable, Optional

from ....core.exceptions import ConfigurationError
from ....core.models import Trade, ValidationResult
from ....core.validator import TradeValidator


_DAY_NAMES = {name.upper(): index for index, name in enumerate(calendar.day_name)}


def parse_weekdays(days: Iterable[Any]) -> FrozenSet[int]:
    """Convert day names ('SATURDAY') or numbers (Monday=0) to weekday numbers."""
    weekdays = set()
    for day in days:
        if isinstance(day, int) and 0 <= day <= 6:
            weekdays.add(day)
            continue
        key = str(day).strip().upper()
        if key not in _DAY_NAMES:
            raise ConfigurationError(f"Unknown weekday: {day!r}")
        weekdays.add(_DAY_NAMES[key])
    return frozenset(weekdays)


class WeekendValidator(TradeValidator):
    """Rejects value dates that fall on a weekend day."""

    def __init__(self, weekend_days: Optional[Iterable[Any]] = None):
        super().__init__()
        self._weekend_days = parse_weekdays(weekend_days or [calendar.SATURDAY, calendar.SUNDAY])

    @property
    def weekend_days(self) -> FrozenSet[int]:
        return self._weekend_days

    @weekend_days.setter
    def weekend_days(self, value: Iterable[Any]) -> None:
        parsed = parse_weekdays(value)
        with self._config_lock:
            self._weekend_days = parsed

    def evaluate(self, trade: Trade) -> ValidationResult:
        result = ValidationResult()

        if trade.value_date is not None and trade.value_date.weekday() in self._weekend_days:
            self.logger.warning(f"valueDate {trade.value_date} falls on a weekend for trade {trade}")
            result.with_error('valueDate', "valueDate falls on a weekend")

        return result
