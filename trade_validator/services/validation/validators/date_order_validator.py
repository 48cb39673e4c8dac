"""
Date Order Validator
"""

from ....core.models import Trade, ValidationResult
from ....core.validator import TradeValidator


class DateOrderValidator(TradeValidator):
    """Value date is required and cannot precede the trade date."""

    def evaluate(self, trade: Trade) -> ValidationResult:
        result = ValidationResult()

        if trade.value_date is None:
            self.logger.warning(f"valueDate is missing for trade {trade}")
            return result.with_error('valueDate', "valueDate is missing")

        if trade.trade_date is not None and trade.value_date < trade.trade_date:
            self.logger.warning(f"valueDate {trade.value_date} is before tradeDate {trade.trade_date} for trade {trade}")
            result.with_error('valueDate', "valueDate cannot be before tradeDate")

        return result
