"""
Trade Validation Models

Data structures shared by the validation core and the individual rules:
the immutable trade record, per-rule results and the aggregated outcome.
"""

from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal, InvalidOperation


@dataclass(frozen=True)
class Trade:
    """
    FX trade record submitted for validation.

    No field is mandatory at the type level; rules are responsible for
    reporting missing or blank values. Field values are coerced on
    construction: dates and decimals are parsed from strings, other fields
    are converted to str, and anything unparsable becomes None.
    """
    customer: Optional[str] = None
    legal_entity: Optional[str] = None
    ccy_pair: Optional[str] = None
    type: Optional[str] = None  # 'Spot', 'Forward', 'VanillaOption'
    direction: Optional[str] = None  # 'BUY' or 'SELL'
    trade_date: Optional[date] = None
    value_date: Optional[date] = None
    amount1: Optional[Decimal] = None
    amount2: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    trader: Optional[str] = None

    # Option specific fields
    style: Optional[str] = None  # 'EUROPEAN' or 'AMERICAN'
    strategy: Optional[str] = None
    delivery_date: Optional[date] = None
    expiry_date: Optional[date] = None
    excercise_start_date: Optional[date] = None
    pay_ccy: Optional[str] = None
    premium: Optional[Decimal] = None
    premium_ccy: Optional[str] = None
    premium_type: Optional[str] = None
    premium_date: Optional[date] = None

    def __post_init__(self):
        # Coerce loosely typed input; values that cannot be parsed become None
        for f in fields(self):
            raw = getattr(self, f.name)
            if raw is None:
                continue
            if f.name in _DATE_FIELDS:
                value = _parse_date(raw)
            elif f.name in _DECIMAL_FIELDS:
                value = _parse_decimal(raw)
            else:
                value = raw if isinstance(raw, str) else str(raw)
            if value is not raw:
                object.__setattr__(self, f.name, value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Trade":
        """
        Build a trade from a plain mapping.

        Accepts both snake_case and the camelCase keys used by upstream
        booking systems (``ccyPair``, ``valueDate``, ...). Unknown keys are
        ignored. Values that cannot be parsed are kept as ``None`` so that
        rules can report them.

        Args:
            data: Raw trade attributes

        Returns:
            Trade instance
        """
        known = {f.name: f for f in fields(cls)}
        aliases = {_camel_case(name): name for name in known}

        values: Dict[str, Any] = {}
        for key, raw in data.items():
            name = key if key in known else aliases.get(key)
            if name is not None:
                values[name] = raw

        return cls(**values)


_DATE_FIELDS = {
    'trade_date', 'value_date', 'delivery_date', 'expiry_date',
    'excercise_start_date', 'premium_date',
}
_DECIMAL_FIELDS = {'amount1', 'amount2', 'rate', 'premium'}


def _camel_case(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(part.capitalize() for part in tail)


def _parse_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def _parse_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


@dataclass(frozen=True)
class ValidationError:
    """One failed rule check, identified by the offending field."""
    field: str
    message: str


@dataclass
class ValidationResult:
    """Result of one rule evaluation. An empty result means the rule passed."""
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def with_error(self, field_name: str, message: str) -> "ValidationResult":
        """Append an error and return self so checks can be chained."""
        self.errors.append(ValidationError(field_name, message))
        return self


@dataclass
class TradeValidationOutcome:
    """
    Aggregated validation report for a single trade.

    Maps field names to the messages collected from every rule. Within a
    field, messages keep the order in which the results were merged.
    """
    trade: Trade
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def merge(self, result: ValidationResult) -> None:
        """Fold one rule result into the outcome."""
        for error in result.errors:
            self.errors.setdefault(error.field, []).append(error.message)

    @classmethod
    def from_results(cls, trade: Trade, results: List[ValidationResult]) -> "TradeValidationOutcome":
        outcome = cls(trade=trade)
        for result in results:
            outcome.merge(result)
        return outcome

    def to_dict(self) -> Dict[str, Any]:
        return {
            'has_errors': self.has_errors,
            'errors': {name: list(messages) for name, messages in self.errors.items()},
        }
