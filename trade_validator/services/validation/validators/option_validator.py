"""
Option Validator

Checks style and date consistency of option trades:
- the style must be one of the configured European or American names
- expiry date and premium date must both fall before the delivery date
- American options need an exercise start date between trade date and
  expiry date
"""

from datetime import date
from typing import Any, FrozenSet, Iterable, Optional

from ....core.models import Trade, ValidationResult
from ....core.validator import TradeValidator
from .utils import is_blank, parse_name_set


def _upper_set(values: Any) -> FrozenSet[str]:
    return frozenset(name.upper() for name in parse_name_set(values))


class OptionValidator(TradeValidator):
    """Validates option specific fields."""

    def __init__(self,
                 european_styles: Optional[Iterable[str]] = None,
                 american_styles: Optional[Iterable[str]] = None,
                 option_types: Optional[Iterable[str]] = None,
                 excercise_start_inclusive_lower: bool = True,
                 excercise_start_inclusive_upper: bool = True):
        """
        Initialize option validator.

        Args:
            european_styles: Names accepted as European style
            american_styles: Names accepted as American style
            option_types: Trade types this rule applies to
            excercise_start_inclusive_lower: Allow exercise start on trade date
            excercise_start_inclusive_upper: Allow exercise start on expiry date
        """
        super().__init__()
        self._european_styles = _upper_set(european_styles or ['EUROPEAN'])
        self._american_styles = _upper_set(american_styles or ['AMERICAN'])
        self.option_types = parse_name_set(option_types or ['VanillaOption'])
        self.excercise_start_inclusive_lower = excercise_start_inclusive_lower
        self.excercise_start_inclusive_upper = excercise_start_inclusive_upper

    @property
    def european_styles(self) -> FrozenSet[str]:
        return self._european_styles

    @european_styles.setter
    def european_styles(self, value: Any) -> None:
        with self._config_lock:
            self._european_styles = _upper_set(value)

    @property
    def american_styles(self) -> FrozenSet[str]:
        return self._american_styles

    @american_styles.setter
    def american_styles(self, value: Any) -> None:
        with self._config_lock:
            self._american_styles = _upper_set(value)

    def evaluate(self, trade: Trade) -> ValidationResult:
        result = ValidationResult()

        if trade.type not in self.option_types:
            return result

        style = None if is_blank(trade.style) else trade.style.strip().upper()
        is_american = style in self._american_styles
        if style is None or not (is_american or style in self._european_styles):
            self.logger.warning(f"Style {trade.style!r} is not valid for trade {trade}")
            result.with_error('style', "Style is not valid")

        self._check_before_delivery(trade, trade.expiry_date, 'expiryDate', result)
        self._check_before_delivery(trade, trade.premium_date, 'premiumDate', result)

        if is_american:
            self._check_excercise_start(trade, result)

        return result

    def _check_before_delivery(self, trade: Trade, value: Optional[date], field_name: str,
                               result: ValidationResult) -> None:
        if value is None:
            self.logger.warning(f"{field_name} is missing for trade {trade}")
            result.with_error(field_name, f"{field_name} is missing")
            return

        if trade.delivery_date is None:
            # Reported once, by the expiry date check
            if field_name == 'expiryDate':
                self.logger.warning(f"deliveryDate is missing for trade {trade}")
                result.with_error('deliveryDate', "deliveryDate is missing")
            return

        if value >= trade.delivery_date:
            self.logger.warning(f"{field_name} should be before deliveryDate for trade {trade}")
            result.with_error(field_name, f"{field_name} should be before deliveryDate")

    def _check_excercise_start(self, trade: Trade, result: ValidationResult) -> None:
        start = trade.excercise_start_date
        if start is None:
            self.logger.warning(f"excerciseStartDate is missing for trade {trade}")
            result.with_error('excerciseStartDate', "excerciseStartDate is missing")
            return

        if trade.trade_date is None:
            self.logger.warning(f"tradeDate is missing for trade {trade}")
            result.with_error('tradeDate', "tradeDate is missing")
            return

        # Missing expiry date is already reported by the delivery check
        if trade.expiry_date is None:
            return

        if not self.is_within_excercise_window(start, trade.trade_date, trade.expiry_date):
            self.logger.warning(f"excerciseStartDate {start} is outside the exercise window for trade {trade}")
            result.with_error('excerciseStartDate', "excerciseStartDate should be between tradeDate and expiryDate")

    def is_within_excercise_window(self, start: date, trade_date: date, expiry_date: date) -> bool:
        after_lower = start >= trade_date if self.excercise_start_inclusive_lower else start > trade_date
        before_upper = start <= expiry_date if self.excercise_start_inclusive_upper else start < expiry_date
        return after_lower and before_upper
