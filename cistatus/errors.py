"""Exception types raised by ci-status collaborators."""


class CIStatusError(Exception):
    """Base class for errors that abort a ci-status run."""
    pass


class ConfigError(CIStatusError):
    """Configuration loading or validation error."""
    pass


class ResolutionError(CIStatusError):
    """A reference could not be resolved to a commit or project."""
    pass


class FetchError(CIStatusError):
    """Check statuses could not be retrieved from the API."""
    pass
