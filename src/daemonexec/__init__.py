"""Daemonexec - detach from the launching session and exec a target program."""

__version__ = "0.1.0"
