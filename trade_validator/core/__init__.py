"""
Core Components

Shared building blocks used by the validation service and its rules.

Components:
- models: Trade, ValidationError, ValidationResult, TradeValidationOutcome
- registry: thread-safe, snapshot-based rule registry
- holiday_service: currency holiday lookup collaborators
- exceptions: error taxonomy for the validation core
"""
