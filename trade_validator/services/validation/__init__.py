"""
Trade validation service: the validation core, its business rules,
bootstrap wiring and the administrative surface.
"""
