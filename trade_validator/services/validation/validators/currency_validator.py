"""
Currency Validator

Checks the currency pair of a trade and whether the value date falls on a
holiday of either currency.
"""

from datetime import date
from typing import FrozenSet, Optional

from ....core.holiday_service import CurrencyHolidayService
from ....core.models import Trade, ValidationResult
from ....core.validator import TradeValidator
from ....configs import load_currency_codes
from .utils import is_blank


class CurrencyValidator(TradeValidator):
    """Currency pair validator and currency holiday checker."""

    FIELD = 'ccyPair'

    def __init__(self, holiday_service: Optional[CurrencyHolidayService] = None,
                 currency_codes: Optional[FrozenSet[str]] = None):
        """
        Initialize currency validator.

        Args:
            holiday_service: Holiday lookup; holiday checks are skipped if None
            currency_codes: Accepted ISO 4217 codes, loaded from
                            currencies.yaml if omitted
        """
        super().__init__()
        self.holiday_service = holiday_service
        self.currency_codes = frozenset(currency_codes) if currency_codes is not None else load_currency_codes()

    def evaluate(self, trade: Trade) -> ValidationResult:
        result = ValidationResult()

        ccy_pair = trade.ccy_pair
        if is_blank(ccy_pair):
            self.logger.warning(f"ccyPair is blank for trade {trade}")
            return result.with_error(self.FIELD, "ccyPair is blank")

        # Two 3 letter ISO codes
        if len(ccy_pair) != 6:
            self.logger.warning(f"ccyPair length should be 6 for trade {trade}")
            return result.with_error(self.FIELD, "ccyPair length should be 6")

        for position, code in ((1, ccy_pair[:3]), (2, ccy_pair[3:])):
            if code not in self.currency_codes:
                self.logger.warning(f"Currency {position} is not valid for trade {trade}")
                result.with_error(self.FIELD, f"Currency {position} is not valid")
                continue

            if trade.value_date is not None and self.is_holiday(trade.value_date, code):
                self.logger.warning(f"valueDate matches to holiday for Currency {position} for trade {trade}")
                result.with_error(self.FIELD, f"valueDate matches to holiday for Currency {position}")

        return result

    def is_holiday(self, value_date: date, currency: str) -> bool:
        """Check a date against the currency calendar, failing open."""
        if self.holiday_service is None:
            self.logger.warning("Currency holiday service not set")
            return False

        try:
            holidays = self.holiday_service.fetch_holidays(currency)
        except Exception as e:
            self.logger.warning(f"Holiday lookup error for {currency}, skipping check: {e}")
            return False

        if not holidays:
            self.logger.debug(f"No holidays known for {currency}")
            return False

        return value_date in holidays
