"""Scene inspector exceptions."""


class InspectorError(Exception):
    """Base exception for the scene inspector."""


class ConfigError(InspectorError):
    """Invalid configuration file or value."""


class WaitTimeoutError(InspectorError):
    """A bounded one-shot wait expired before its event fired."""
