class ConfigurationError(ValueError):
    """Invalid cache geometry or policy. Raised before any access is
    simulated."""


class TraceFormatError(ValueError):
    """A trace record that cannot be replayed."""
