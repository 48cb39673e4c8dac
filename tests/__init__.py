"""
Test Suite for Trade Validator

Unit tests for the trade model, rules, registry and validation core, plus
tests for configuration, holiday lookups and the CLI.
"""
