"""
Rule Registry

Holds the active set of validation rules. Writers are serialized on a lock
and publish a new immutable tuple; readers take the current tuple without
locking, so a snapshot is never a half-updated view.
"""

import logging
import threading
from typing import Iterable, List, Optional, Tuple

from .exceptions import RuleRegistrationError
from .validator import TradeValidator


class RuleRegistry:
    """Thread-safe registry of trade validation rules."""

    def __init__(self, rules: Optional[Iterable[TradeValidator]] = None):
        """
        Initialize the registry.

        Args:
            rules: Optional initial rules, registered in order
        """
        self.logger = logging.getLogger(f"{__name__}.RuleRegistry")
        self._lock = threading.Lock()
        self._rules: Tuple[TradeValidator, ...] = ()

        if rules:
            self.replace_all(rules)

    def register(self, rule: TradeValidator) -> None:
        """
        Append a rule.

        Raises:
            RuleRegistrationError: If the object is not a rule or a rule with
                the same name is already registered
        """
        self._check_rule(rule)
        with self._lock:
            if any(existing.name == rule.name for existing in self._rules):
                raise RuleRegistrationError(f"Rule already registered: {rule.name}")
            self._rules = self._rules + (rule,)

        self.logger.info(f"Registered rule {rule.name}")

    def replace(self, rule: TradeValidator) -> Optional[TradeValidator]:
        """
        Swap the rule that has the same name, or append it if none does.

        Returns:
            The rule that was replaced, if any
        """
        self._check_rule(rule)
        with self._lock:
            rules = list(self._rules)
            previous = None
            for index, existing in enumerate(rules):
                if existing.name == rule.name:
                    previous = existing
                    rules[index] = rule
                    break
            else:
                rules.append(rule)
            self._rules = tuple(rules)

        action = "Replaced" if previous is not None else "Registered"
        self.logger.info(f"{action} rule {rule.name}")
        return previous

    def replace_all(self, rules: Iterable[TradeValidator]) -> None:
        """Replace the whole rule set in one step."""
        new_rules = tuple(rules)
        names = set()
        for rule in new_rules:
            self._check_rule(rule)
            if rule.name in names:
                raise RuleRegistrationError(f"Duplicate rule name: {rule.name}")
            names.add(rule.name)

        with self._lock:
            self._rules = new_rules

        self.logger.info(f"Rule set replaced with {len(new_rules)} rules")

    def list(self) -> Tuple[TradeValidator, ...]:
        """Return a snapshot of the registered rules."""
        return self._rules

    def get(self, name: str) -> Optional[TradeValidator]:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def names(self) -> List[str]:
        return [rule.name for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    @staticmethod
    def _check_rule(rule: TradeValidator) -> None:
        if not isinstance(rule, TradeValidator):
            raise RuleRegistrationError(f"Not a TradeValidator: {rule!r}")
