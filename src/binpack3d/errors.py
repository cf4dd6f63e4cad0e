"""Errors raised by the packing engine."""


class ConfigurationError(ValueError):
    """Invalid engine input: wrong types or nonsensical geometry."""
