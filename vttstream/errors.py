"""Exception types raised by vttstream."""


class VTTStreamError(Exception):
    """Base class for vttstream errors."""


class WebVttConfigurationError(VTTStreamError, ValueError):
    """The parser was set up or driven incorrectly."""


class WebVttParseError(VTTStreamError):
    """The input could not be parsed as WebVTT."""
