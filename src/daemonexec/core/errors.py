"""Exceptions for Daemonexec."""


class DaemonExecError(Exception):
    """Base exception for errors raised before any fork."""

    pass


class ConfigError(DaemonExecError):
    """Configuration values are missing or invalid."""

    pass


class UnsupportedPlatformError(DaemonExecError):
    """The platform lacks fork() or setsid()."""

    pass


class ForkError(DaemonExecError):
    """The first fork failed, nothing was started."""

    pass
