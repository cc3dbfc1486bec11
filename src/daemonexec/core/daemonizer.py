"""Detach from the launching session and exec a target program."""

import logging
import os
import sys
from typing import Optional, Sequence

from daemonexec.core.config import DaemonizerConfig
from daemonexec.core.detach import DetachResult, detach
from daemonexec.core.errors import DaemonExecError, ForkError
from daemonexec.core.launcher import launch_with_retry
from daemonexec.core.pidfile import write_pid_file
from daemonexec.utils.constants import EXIT_FAILURE

logger = logging.getLogger(__name__)


def build_argv(target_path: str, target_args: Optional[Sequence[str]] = None) -> list[str]:
    """Build the exec argument vector, defaulting argv[0] to the path.

    Raises:
        DaemonExecError: If the path is empty
    """
    if not target_path:
        raise DaemonExecError("Target path must not be empty")
    argv = list(target_args or [])
    if not argv:
        argv = [target_path]
    return argv


class Daemonizer:
    """Turns the calling process into a daemon running the target program."""

    def __init__(self, config: Optional[DaemonizerConfig] = None):
        self.config = config or DaemonizerConfig()

    def daemonize_and_exec(self, target_path: str, target_args: Optional[Sequence[str]] = None) -> bool:
        """Detach and replace the detached process with the target.

        The environment is passed through to the target unchanged.

        Args:
            target_path: Executable to run
            target_args: Argument vector, first item conventionally the path

        Returns:
            True in the original caller, only when config.return_to_parent is
            set. Otherwise never returns: the caller exits once detachment
            completed and the detached process becomes the target.

        Raises:
            DaemonExecError: If the target is invalid or the platform cannot fork
            ForkError: If the first fork failed and config.return_to_parent is set
        """
        argv = build_argv(target_path, target_args)

        result = detach(self.config.return_to_parent, self.config.null_device)

        if result == DetachResult.ERROR:
            logger.error(f"Could not start detaching for {target_path}")
            if self.config.return_to_parent:
                raise ForkError(f"Could not fork to start {target_path}")
            sys.exit(EXIT_FAILURE)

        if result == DetachResult.PARENT:
            return True

        logger.debug(f"Detached as PID {os.getpid()}, launching {target_path}")

        if self.config.pid_file is not None:
            try:
                write_pid_file(self.config.pid_file)
            except OSError as e:
                logger.error(f"Failed to write PID file {self.config.pid_file}: {e}")
                sys.exit(EXIT_FAILURE)

        launch_with_retry(
            target_path,
            argv,
            max_attempts=self.config.max_attempts,
            retry_delay_ms=self.config.retry_delay_ms,
        )


def daemonize_and_exec(
    target_path: str,
    target_args: Optional[Sequence[str]] = None,
    config: Optional[DaemonizerConfig] = None,
) -> bool:
    """Detach and exec the target using a one-off Daemonizer."""
    return Daemonizer(config).daemonize_and_exec(target_path, target_args)
