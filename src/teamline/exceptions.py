"""Custom exceptions for Teamline."""


class TeamlineError(Exception):
    """Base exception for all Teamline errors."""

    pass


class ConfigError(TeamlineError):
    """Raised when the configuration file is missing or invalid."""

    pass


class InputError(TeamlineError):
    """Raised when an input file cannot be read or lacks required columns."""

    pass
