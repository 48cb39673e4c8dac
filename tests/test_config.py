"""
Test suite for configuration loading.
"""

import os
import pytest
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from trade_validator.configs import (
    ConfigLoader,
    get_validator_config,
    load_currency_codes,
    load_validators_config,
)


class TestConfigLoader(unittest.TestCase):
    """Test configuration loading functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.config_loader = ConfigLoader()

    def test_environment_variable_substitution(self):
        """Test environment variable substitution."""
        content = "test_value: ${TEST_VAR_UNSET_FOR_TESTS:-default_value}"
        result = self.config_loader._substitute_env_vars(content)
        self.assertIn("default_value", result)

    def test_environment_variable_override(self):
        with patch.dict(os.environ, {"TRADE_VALIDATOR_TEST_VAR": "from_env"}):
            result = self.config_loader._substitute_env_vars("value: ${TRADE_VALIDATOR_TEST_VAR:-default}")
        self.assertEqual(result, "value: from_env")

    def test_invalid_environment_variable(self):
        """Test handling of missing required environment variables."""
        content = "test_value: ${TRADE_VALIDATOR_REQUIRED_VAR}"
        with self.assertRaises(ValueError):
            self.config_loader._substitute_env_vars(content)

    def test_missing_config_file(self):
        with self.assertRaises(FileNotFoundError):
            self.config_loader.load_config("non_existent_config")

    def test_custom_config_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "custom.yaml").write_text("service:\n  rule_workers: ${RULES_UNSET_FOR_TESTS:-3}\n")

            config = ConfigLoader(tmp).load_config("custom")

        self.assertEqual(config, {"service": {"rule_workers": 3}})

    def test_empty_config_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "empty.yaml").write_text("")
            self.assertEqual(ConfigLoader(tmp).load_config("empty"), {})


class TestPackagedConfig(unittest.TestCase):
    """Test the configuration files shipped with the package."""

    def test_validators_config(self):
        config = load_validators_config()

        self.assertIn("service", config)
        self.assertIn("legal_entity", config["validators"])
        self.assertTrue(get_validator_config("weekend", config)["enabled"])

    def test_unknown_validator_section(self):
        self.assertEqual(get_validator_config("missing", {"validators": {}}), {})

    def test_currency_codes(self):
        codes = load_currency_codes()

        for code in ("EUR", "USD", "GBP", "CHF", "JPY"):
            self.assertIn(code, codes)
        self.assertNotIn("XXX", codes)


if __name__ == '__main__':
    unittest.main(verbosity=2)
