"""
Trade Validation Service

The validation core: fans a trade out to every registered rule on a worker
pool, merges the findings into one outcome, and gates new work behind a
reversible shutdown flag.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, Future
from datetime import datetime
from typing import Dict, Any, List, Optional, Sequence

from ...core.exceptions import ShutdownRejectedError
from ...core.models import Trade, TradeValidationOutcome, ValidationResult
from ...core.registry import RuleRegistry


ACCEPTING = 'ACCEPTING'
SHUTDOWN_REQUESTED = 'SHUTDOWN_REQUESTED'


class TradeValidationService:
    """
    Runs all registered rules against trades.

    Features:
    - Parallel rule fan-out with fan-in that waits for every rule
    - Ordered bulk validation with per-trade shutdown eligibility
    - Reversible shutdown (request / cancel)
    """

    def __init__(self, registry: RuleRegistry, rule_workers: int = 8, bulk_workers: int = 4,
                 service_name: str = "trade_validation_service"):
        """
        Initialize the validation service.

        Args:
            registry: Rule registry the service reads snapshots from
            rule_workers: Worker threads for rule evaluation
            bulk_workers: Worker threads for trades of a bulk request
            service_name: Name used for logging and thread names
        """
        self.service_name = service_name
        self.logger = logging.getLogger(f"{__name__}.{service_name}")
        self.registry = registry

        # Rule tasks never share the bulk pool
        self.rule_executor = ThreadPoolExecutor(max_workers=rule_workers,
                                                thread_name_prefix=f"{service_name}-rule")
        self.bulk_executor = ThreadPoolExecutor(max_workers=bulk_workers,
                                                thread_name_prefix=f"{service_name}-bulk")

        self._shutdown_requested = threading.Event()
        self.shutdown_timestamp: Optional[datetime] = None

        self._stats_lock = threading.Lock()
        self.validated_count = 0
        self.rejected_count = 0

        self.logger.info(f"Trade validation service initialized with {len(registry)} rules")

    # Shutdown control

    def request_shutdown(self) -> None:
        """Stop accepting new validation work. Idempotent."""
        if not self._shutdown_requested.is_set():
            self.shutdown_timestamp = datetime.utcnow()
            self._shutdown_requested.set()
            self.logger.warning("Shutdown requested - new validation requests will be rejected")

    def cancel_shutdown(self) -> None:
        """Resume accepting validation work. Idempotent."""
        if self._shutdown_requested.is_set():
            self._shutdown_requested.clear()
            self.shutdown_timestamp = None
            self.logger.warning("Shutdown cancelled - validation resumed")

    def is_shutdown_requested(self) -> bool:
        return self._shutdown_requested.is_set()

    @property
    def state(self) -> str:
        return SHUTDOWN_REQUESTED if self.is_shutdown_requested() else ACCEPTING

    # Validation

    def validate(self, trade: Trade) -> TradeValidationOutcome:
        """
        Validate one trade against every registered rule.

        Args:
            trade: Trade to validate

        Returns:
            Aggregated outcome for the trade

        Raises:
            ShutdownRejectedError: If shutdown has been requested
        """
        self._check_accepting()
        return self._run_rules(trade)

    def validate_bulk(self, trades: Sequence[Trade]) -> List[TradeValidationOutcome]:
        """
        Validate a batch of independent trades.

        Each trade checks the shutdown flag when its own validation starts,
        so a shutdown requested mid-batch rejects only the trades that had
        not started yet.

        Args:
            trades: Trades to validate

        Returns:
            One outcome per trade, in input order

        Raises:
            ShutdownRejectedError: If any trade was rejected; ``outcomes``
                carries the completed outcomes and None for rejected trades
        """
        trades = list(trades)
        self._check_accepting(outcomes=[None] * len(trades))

        futures: List[Future] = [self.bulk_executor.submit(self._validate_bulk_item, trade) for trade in trades]
        outcomes: List[Optional[TradeValidationOutcome]] = [future.result() for future in futures]

        rejected = sum(1 for outcome in outcomes if outcome is None)
        if rejected:
            self.logger.warning(f"Bulk validation rejected {rejected} of {len(trades)} trades due to shutdown")
            raise ShutdownRejectedError(
                f"Validation service is shutting down: {rejected} of {len(trades)} trades rejected",
                outcomes=outcomes
            )

        self.logger.info(f"Bulk validation completed for {len(trades)} trades")
        return outcomes

    def _validate_bulk_item(self, trade: Trade) -> Optional[TradeValidationOutcome]:
        if self.is_shutdown_requested():
            self._record_rejection()
            return None
        return self._run_rules(trade)

    def _check_accepting(self, outcomes: Optional[List[Optional[TradeValidationOutcome]]] = None) -> None:
        if self.is_shutdown_requested():
            self._record_rejection()
            self.logger.info("Validation request rejected: shutdown requested")
            raise ShutdownRejectedError(outcomes=outcomes)

    def _run_rules(self, trade: Trade) -> TradeValidationOutcome:
        rules = self.registry.list()

        futures = [self.rule_executor.submit(rule.evaluate, trade) for rule in rules]
        # Wait for every rule; results are merged in registry order
        results: List[ValidationResult] = [future.result() for future in futures]

        outcome = TradeValidationOutcome.from_results(trade, results)

        with self._stats_lock:
            self.validated_count += 1

        if outcome.has_errors:
            self.logger.info(f"Trade failed validation on fields {sorted(outcome.errors)}")
        else:
            self.logger.debug(f"Trade passed {len(rules)} rules")

        return outcome

    def _record_rejection(self) -> None:
        with self._stats_lock:
            self.rejected_count += 1

    # Status and lifecycle

    def get_status(self) -> Dict[str, Any]:
        """Get current validation service status."""
        return {
            'service_name': self.service_name,
            'state': self.state,
            'shutdown_requested': self.is_shutdown_requested(),
            'shutdown_timestamp': self.shutdown_timestamp.isoformat() if self.shutdown_timestamp else None,
            'rules': self.registry.names(),
            'validated_count': self.validated_count,
            'rejected_count': self.rejected_count,
            'status_timestamp': datetime.utcnow().isoformat()
        }

    def close(self) -> None:
        """Release worker pools; in-flight work completes first."""
        self.bulk_executor.shutdown(wait=True)
        self.rule_executor.shutdown(wait=True)
        self.logger.info("Trade validation service stopped")

    def __enter__(self) -> "TradeValidationService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
