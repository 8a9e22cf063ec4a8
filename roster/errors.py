"""Exception types raised by the storage and configuration layers."""


class TeamManagerError(Exception):
    """Base class for all Team Manager errors."""


class StoreError(TeamManagerError):
    """A key-value store could not read or write a value."""


class ConfigError(TeamManagerError):
    """The configuration file or an override is invalid."""
