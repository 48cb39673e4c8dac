"""
Trade Validator Services

Service Categories:
- validation: validation core, business rules and administration
"""
