#!/usr/bin/env python3
"""
Trade Validator CLI

Command-line interface for validating trade files and inspecting the
configured rule set.
"""

import argparse
import json
import sys
from typing import Dict, Any, List, Optional
from pathlib import Path
import yaml

from trade_validator.configs import load_validators_config
from trade_validator.core.exceptions import ShutdownRejectedError, TradeValidatorError
from trade_validator.core.models import Trade, TradeValidationOutcome
from trade_validator.services.validation.bootstrap import create_validation_service


class TradeValidatorCLI:
    """
    Command-line interface for the trade validator.

    Builds a validation service from configuration and runs it in the
    current process.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize the CLI."""
        self.config = config if config is not None else load_validators_config()
        self.service = create_validation_service(self.config)

    def load_trades(self, path: Path) -> List[Trade]:
        """
        Load trades from a YAML or JSON file.

        The file holds either a list of trades or an object with a
        ``trades`` list.
        """
        with open(path, 'r', encoding='utf-8') as file:
            data = yaml.safe_load(file)

        if isinstance(data, dict):
            data = data.get('trades', [data])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of trades in {path}")

        for index, item in enumerate(data, start=1):
            if not isinstance(item, dict):
                raise ValueError(f"Trade #{index} in {path} is not a mapping: {item!r}")

        return [Trade.from_dict(item) for item in data]

    def validate_file(self, path: Path, as_json: bool = False) -> bool:
        """Validate every trade in a file. Returns True if all trades are valid."""
        trades = self.load_trades(path)

        try:
            outcomes = self.service.validate_bulk(trades)
        except ShutdownRejectedError as e:
            print(f"❌ Validation rejected: {e}")
            return False

        if as_json:
            print(json.dumps([outcome.to_dict() for outcome in outcomes], indent=2))
        else:
            self._print_outcomes(outcomes)

        return not any(outcome.has_errors for outcome in outcomes)

    def _print_outcomes(self, outcomes: List[TradeValidationOutcome]) -> None:
        print(f"📊 Validated {len(outcomes)} trades")
        print("=" * 50)

        for index, outcome in enumerate(outcomes, start=1):
            trade = outcome.trade
            label = f"#{index} {trade.customer or '?'} {trade.ccy_pair or '?'} {trade.type or '?'}"
            if not outcome.has_errors:
                print(f"✅ {label}")
                continue

            print(f"❌ {label}")
            for field_name, messages in outcome.errors.items():
                for message in messages:
                    print(f"   {field_name}: {message}")

        invalid = sum(1 for outcome in outcomes if outcome.has_errors)
        print()
        print(f"Valid: {len(outcomes) - invalid}  Invalid: {invalid}")

    def show_rules(self) -> None:
        """Display registered rules."""
        print("📋 Registered rules")
        for name in self.service.registry.names():
            print(f"   {name}")

    def show_config(self) -> None:
        """Display the effective configuration."""
        print(yaml.safe_dump(self.config, default_flow_style=False, sort_keys=False))

    def close(self) -> None:
        self.service.close()


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Trade Validator CLI - Validate FX trades against business rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  trade-validator validate trades.json          # Validate trades from a file
  trade-validator validate trades.yaml --json   # Print outcomes as JSON
  trade-validator rules                         # List registered rules
  trade-validator config                        # Show effective configuration
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate trades from a file")
    validate_parser.add_argument("file", type=Path, help="YAML or JSON file with trades")
    validate_parser.add_argument("--json", action="store_true", help="Print outcomes as JSON")

    subparsers.add_parser("rules", help="List registered rules")
    subparsers.add_parser("config", help="Show effective configuration")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        cli = TradeValidatorCLI()
    except (TradeValidatorError, FileNotFoundError, ValueError) as e:
        print(f"❌ Failed to initialize: {e}")
        sys.exit(2)

    try:
        if args.command == "validate":
            if not args.file.exists():
                print(f"❌ File not found: {args.file}")
                sys.exit(2)
            try:
                success = cli.validate_file(args.file, as_json=args.json)
            except (ValueError, yaml.YAMLError) as e:
                print(f"❌ Invalid trade file: {e}")
                sys.exit(2)
            sys.exit(0 if success else 1)

        elif args.command == "rules":
            cli.show_rules()

        elif args.command == "config":
            cli.show_config()
    finally:
        cli.close()


if __name__ == "__main__":
    main()
