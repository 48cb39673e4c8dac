"""
Spot / Forward Validator

Value date conventions relative to a configured reference date:
Spot settles exactly ``spot_days`` calendar days after the reference
date, Forward settles strictly later than that.
"""

from datetime import date, timedelta
from typing import Any, Optional

from ....core.exceptions import ConfigurationError
from ....core.models import Trade, ValidationResult
from ....core.validator import TradeValidator


SPOT = 'Spot'
FORWARD = 'Forward'


def parse_reference_date(value: Any) -> date:
    """Accept a date or an ISO formatted string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Invalid reference date: {value!r}")


class SpotForwardValidator(TradeValidator):
    """Checks value dates of Spot and Forward trades."""

    def __init__(self, reference_date: Optional[Any] = None, spot_days: int = 2):
        """
        Initialize spot/forward validator.

        Args:
            reference_date: Business date the value dates are measured
                            from; defaults to today
            spot_days: Calendar days between reference date and spot
        """
        super().__init__()
        self._reference_date = date.today() if reference_date is None else parse_reference_date(reference_date)
        self.spot_days = int(spot_days)

    @property
    def reference_date(self) -> date:
        return self._reference_date

    @reference_date.setter
    def reference_date(self, value: Any) -> None:
        parsed = parse_reference_date(value)
        with self._config_lock:
            self._reference_date = parsed
        self.logger.info(f"Reference date set to {parsed.isoformat()}")

    def evaluate(self, trade: Trade) -> ValidationResult:
        result = ValidationResult()

        if trade.value_date is None or trade.type not in (SPOT, FORWARD):
            return result

        spot_date = self._reference_date + timedelta(days=self.spot_days)

        if trade.type == SPOT and trade.value_date != spot_date:
            self.logger.warning(f"Spot valueDate {trade.value_date} should be {spot_date} for trade {trade}")
            result.with_error('valueDate', f"Spot valueDate should be tradeDate + {self.spot_days} days")

        elif trade.type == FORWARD and trade.value_date <= spot_date:
            self.logger.warning(f"Forward valueDate {trade.value_date} should be after {spot_date} for trade {trade}")
            result.with_error('valueDate', f"Forward valueDate should be more than tradeDate + {self.spot_days} days")

        return result
