"""
Test suite for the validation core, bootstrap wiring and admin surface.
"""

import pytest
import unittest
import threading
from datetime import date

from trade_validator.core.exceptions import ConfigurationError, ShutdownRejectedError
from trade_validator.core.holiday_service import StaticHolidayService
from trade_validator.core.models import Trade, ValidationResult
from trade_validator.core.registry import RuleRegistry
from trade_validator.core.validator import TradeValidator
from trade_validator.services.validation.admin import ValidationAdmin
from trade_validator.services.validation.bootstrap import (
    build_default_registry,
    create_validation_service,
)
from trade_validator.services.validation.trade_validation_service import (
    ACCEPTING,
    SHUTDOWN_REQUESTED,
    TradeValidationService,
)
from tests.factories import REFERENCE_DATE, StaticRule, make_option, make_trade


def make_config(**validator_overrides):
    validators = {
        'currency': {'currency_codes': ['EUR', 'USD', 'GBP', 'CHF']},
        'legal_entity': {'legal_entities': 'CS Zurich'},
        'customer': {'customers': ['PLUTO1', 'PLUTO2']},
        'spot_forward': {'reference_date': REFERENCE_DATE.isoformat()},
        'option': {},
        'weekend': {'weekend_days': ['SATURDAY', 'SUNDAY']},
        'date_order': {},
    }
    validators.update(validator_overrides)
    return {
        'service': {'name': 'test_validation_service', 'rule_workers': 4, 'bulk_workers': 2},
        'holiday_service': {'provider': 'none'},
        'validators': validators,
    }


class BarrierRule(TradeValidator):
    """Rule that only completes if its peers run at the same time."""

    def __init__(self, rule_name, barrier):
        super().__init__()
        self.rule_name = rule_name
        self.barrier = barrier

    @property
    def name(self):
        return self.rule_name

    def evaluate(self, trade):
        self.barrier.wait(timeout=5)
        return ValidationResult()


class ShutdownTriggerRule(TradeValidator):
    """Requests shutdown while evaluating the trade for a given customer."""

    def __init__(self, trigger_customer):
        super().__init__()
        self.trigger_customer = trigger_customer
        self.service = None

    def evaluate(self, trade):
        if trade.customer == self.trigger_customer:
            self.service.request_shutdown()
        return ValidationResult()


class FailingRule(TradeValidator):

    def evaluate(self, trade):
        raise RuntimeError("rule defect")


class TestTradeValidationService(unittest.TestCase):
    """Test single trade validation."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = RuleRegistry()
        self.service = TradeValidationService(self.registry, rule_workers=4, bulk_workers=2)

    def tearDown(self):
        self.service.close()

    def test_passing_rules_produce_empty_outcome(self):
        self.registry.replace_all([StaticRule("a"), StaticRule("b")])
        trade = make_trade()

        outcome = self.service.validate(trade)

        self.assertFalse(outcome.has_errors)
        self.assertEqual(outcome.errors, {})
        self.assertIs(outcome.trade, trade)

    def test_every_rule_runs(self):
        rules = [StaticRule("a", [("customer", "bad")]), StaticRule("b"), StaticRule("c", [("rate", "bad")])]
        self.registry.replace_all(rules)

        outcome = self.service.validate(make_trade())

        self.assertEqual([rule.calls for rule in rules], [1, 1, 1])
        self.assertEqual(outcome.errors, {"customer": ["bad"], "rate": ["bad"]})

    def test_messages_for_a_field_follow_rule_order(self):
        self.registry.replace_all([
            StaticRule("first", [("valueDate", "first message")]),
            StaticRule("second", [("valueDate", "second message")]),
            StaticRule("third", [("valueDate", "third message")]),
        ])

        outcome = self.service.validate(make_trade())

        self.assertEqual(outcome.errors["valueDate"], ["first message", "second message", "third message"])

    def test_validation_is_deterministic(self):
        self.registry.replace_all(build_default_registry(make_config()).list())
        trade = make_trade(ccy_pair="XXXUSD", customer="PLUTO3", value_date=date(2016, 9, 11))

        first = self.service.validate(trade)
        second = self.service.validate(trade)

        self.assertEqual(first.errors, second.errors)
        self.assertTrue(first.has_errors)

    def test_rules_run_in_parallel(self):
        barrier = threading.Barrier(3)
        self.registry.replace_all([BarrierRule(f"rule{i}", barrier) for i in range(3)])

        outcome = self.service.validate(make_trade())

        self.assertFalse(outcome.has_errors)

    def test_rule_defect_propagates(self):
        self.registry.replace_all([StaticRule("ok"), FailingRule()])
        with self.assertRaises(RuntimeError):
            self.service.validate(make_trade())

    def test_no_rules(self):
        outcome = self.service.validate(make_trade())
        self.assertFalse(outcome.has_errors)


class TestShutdown(unittest.TestCase):
    """Test the reversible shutdown gate."""

    def setUp(self):
        """Set up test fixtures."""
        self.rule = StaticRule("rule", [("customer", "bad")])
        self.registry = RuleRegistry([self.rule])
        self.service = TradeValidationService(self.registry, rule_workers=2, bulk_workers=1)

    def tearDown(self):
        self.service.close()

    def test_initial_state_accepting(self):
        self.assertFalse(self.service.is_shutdown_requested())
        self.assertEqual(self.service.state, ACCEPTING)

    def test_validate_rejected_after_shutdown(self):
        self.service.request_shutdown()

        with self.assertRaises(ShutdownRejectedError):
            self.service.validate(make_trade())

        self.assertEqual(self.rule.calls, 0)
        self.assertEqual(self.service.state, SHUTDOWN_REQUESTED)

    def test_cancel_shutdown_resumes(self):
        trade = make_trade()
        before = self.service.validate(trade)

        self.service.request_shutdown()
        self.service.cancel_shutdown()
        after = self.service.validate(trade)

        self.assertEqual(before.errors, after.errors)

    def test_request_and_cancel_are_idempotent(self):
        self.service.request_shutdown()
        self.service.request_shutdown()
        self.assertTrue(self.service.is_shutdown_requested())

        self.service.cancel_shutdown()
        self.service.cancel_shutdown()
        self.assertFalse(self.service.is_shutdown_requested())

    def test_shutdown_visible_across_threads(self):
        thread = threading.Thread(target=self.service.request_shutdown)
        thread.start()
        thread.join()

        self.assertTrue(self.service.is_shutdown_requested())

    def test_status_counts(self):
        self.service.validate(make_trade())
        self.service.request_shutdown()
        with self.assertRaises(ShutdownRejectedError):
            self.service.validate(make_trade())

        status = self.service.get_status()

        self.assertEqual(status['validated_count'], 1)
        self.assertEqual(status['rejected_count'], 1)
        self.assertEqual(status['state'], SHUTDOWN_REQUESTED)
        self.assertEqual(status['rules'], ["rule"])
        self.assertIsNotNone(status['shutdown_timestamp'])


class TestBulkValidation(unittest.TestCase):
    """Test bulk validation ordering and shutdown eligibility."""

    def test_outcomes_follow_input_order(self):
        with create_validation_service(make_config()) as service:
            trades = [
                make_trade(customer="PLUTO1"),
                make_trade(customer="PLUTO3"),
                make_trade(ccy_pair="EURUS"),
                make_trade(value_date=date(2016, 9, 13)),
            ]

            outcomes = service.validate_bulk(trades)

            self.assertEqual(len(outcomes), len(trades))
            for trade, outcome in zip(trades, outcomes):
                self.assertIs(outcome.trade, trade)
                self.assertEqual(outcome.errors, service.validate(trade).errors)

    def test_empty_batch(self):
        with TradeValidationService(RuleRegistry()) as service:
            self.assertEqual(service.validate_bulk([]), [])

    def test_rejected_when_shutdown_already_requested(self):
        with TradeValidationService(RuleRegistry([StaticRule("rule")])) as service:
            service.request_shutdown()

            with self.assertRaises(ShutdownRejectedError) as context:
                service.validate_bulk([make_trade(), make_trade(customer="PLUTO2")])

            self.assertEqual(context.exception.outcomes, [None, None])
            self.assertEqual(context.exception.rejected_count, 2)

    def test_single_rejection_has_no_rejected_count(self):
        with TradeValidationService(RuleRegistry([StaticRule("rule")])) as service:
            service.request_shutdown()

            with self.assertRaises(ShutdownRejectedError) as context:
                service.validate(make_trade())

            self.assertIsNone(context.exception.outcomes)
            self.assertIsNone(context.exception.rejected_count)

    def test_shutdown_mid_batch_rejects_unstarted_trades(self):
        trigger = ShutdownTriggerRule(trigger_customer="PLUTO2")
        marker = StaticRule("marker", [("customer", "seen")])
        # One bulk worker runs trades strictly in order
        service = TradeValidationService(RuleRegistry([trigger, marker]), rule_workers=2, bulk_workers=1)
        trigger.service = service
        trades = [
            make_trade(customer="PLUTO1"),
            make_trade(customer="PLUTO2"),
            make_trade(customer="PLUTO1"),
            make_trade(customer="PLUTO1"),
        ]

        try:
            with self.assertRaises(ShutdownRejectedError) as context:
                service.validate_bulk(trades)
        finally:
            service.close()

        outcomes = context.exception.outcomes
        self.assertEqual(len(outcomes), 4)
        self.assertIsNotNone(outcomes[0])
        self.assertIsNotNone(outcomes[1])
        self.assertEqual(outcomes[1].errors, {"customer": ["seen"]})
        self.assertIsNone(outcomes[2])
        self.assertIsNone(outcomes[3])
        self.assertEqual(context.exception.rejected_count, 2)


class TestBootstrap(unittest.TestCase):
    """Test registry construction from configuration."""

    def test_default_registry(self):
        registry = build_default_registry(make_config())
        self.assertEqual(registry.names(), [
            "CurrencyValidator",
            "LegalEntityValidator",
            "CustomerValidator",
            "SpotForwardValidator",
            "OptionValidator",
            "WeekendValidator",
            "DateOrderValidator",
        ])

    def test_disabled_rule(self):
        registry = build_default_registry(make_config(weekend={'enabled': False}))
        self.assertNotIn("WeekendValidator", registry.names())

    def test_valid_trade_passes_all_rules(self):
        with create_validation_service(make_config()) as service:
            self.assertFalse(service.validate(make_trade()).has_errors)
            self.assertFalse(service.validate(make_option(value_date=date(2016, 8, 15))).has_errors)

    def test_invalid_trade_collects_errors_per_field(self):
        trade = make_trade(
            ccy_pair="XXXUSD",
            legal_entity="CS London",
            customer="PLUTO3",
            value_date=date(2016, 9, 11),
        )

        with create_validation_service(make_config()) as service:
            outcome = service.validate(trade)

        self.assertEqual(outcome.errors["ccyPair"], ["Currency 1 is not valid"])
        self.assertEqual(outcome.errors["legalEntity"], ["Legal entity is invalid"])
        self.assertEqual(outcome.errors["customer"], ["Customer is not supported"])
        self.assertEqual(outcome.errors["valueDate"], [
            "Spot valueDate should be tradeDate + 2 days",
            "valueDate falls on a weekend",
        ])

    def test_holiday_service_override(self):
        holidays = StaticHolidayService({"USD": [date(2016, 9, 12)]})

        with create_validation_service(make_config(), holiday_service=holidays) as service:
            outcome = service.validate(make_trade())

        self.assertEqual(outcome.errors, {"ccyPair": ["valueDate matches to holiday for Currency 2"]})


class TestValidationAdmin(unittest.TestCase):
    """Test administrative operations."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = create_validation_service(make_config())
        self.admin = ValidationAdmin(self.service)

    def tearDown(self):
        self.service.close()

    def test_legal_entities(self):
        self.assertEqual(self.admin.get_legal_entities(), frozenset({"CS Zurich"}))

        self.admin.set_legal_entities("CS London,CS Zurich")

        outcome = self.service.validate(make_trade(legal_entity="CS London"))
        self.assertNotIn("legalEntity", outcome.errors)

    def test_customers(self):
        self.admin.set_customers("PLUTO3")
        self.assertEqual(self.admin.get_customers(), frozenset({"PLUTO3"}))
        self.assertIn("customer", self.service.validate(make_trade(customer="PLUTO1")).errors)

    def test_reference_date(self):
        self.assertEqual(self.admin.get_reference_date(), REFERENCE_DATE)

        self.admin.set_reference_date("2016-09-18")

        outcome = self.service.validate(make_trade(value_date=date(2016, 9, 20)))
        self.assertNotIn("valueDate", outcome.errors)

    def test_missing_rule(self):
        self.admin.replace_rules([StaticRule("only")])

        with self.assertRaises(ConfigurationError):
            self.admin.get_legal_entities()

        self.assertEqual(self.admin.list_rules(), ["only"])

    def test_shutdown_controls(self):
        self.assertTrue(self.admin.request_shutdown())
        self.assertTrue(self.admin.is_shutdown_requested())
        self.assertFalse(self.admin.cancel_shutdown())

    def test_status_includes_settings(self):
        status = self.admin.get_status()
        self.assertEqual(status['settings']['legal_entities'], ["CS Zurich"])
        self.assertEqual(status['settings']['reference_date'], "2016-09-10")


if __name__ == '__main__':
    unittest.main(verbosity=2)
