"""
Trade Validator

Validates FX trade records against a set of independent business rules
and aggregates the findings into a per-trade outcome.

The package is organised as:
- core: trade model, rule registry, holiday lookup and exceptions
- services.validation: the validation core, rules and admin surface
- configs: YAML configuration loading
"""

__version__ = "1.0.0"
__author__ = "Trade Validator Team"
