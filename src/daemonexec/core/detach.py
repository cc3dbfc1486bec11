"""Double-fork detachment from the launching terminal and session."""

import contextlib
import logging
import os
import sys
from enum import IntEnum

from daemonexec.core.errors import UnsupportedPlatformError
from daemonexec.utils.constants import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    NULL_DEVICE,
    STANDARD_STREAMS,
)

logger = logging.getLogger(__name__)


class DetachResult(IntEnum):
    """Outcome of detach() as seen by the process it returns in."""

    ERROR = -1  # first fork failed, nothing was started
    PROCEED = 0  # final detached descendant
    PARENT = 1  # original caller, first child has exited


def is_supported() -> bool:
    """Check if the platform can fork and create sessions."""
    return hasattr(os, "fork") and hasattr(os, "setsid")


def wait_for_exit(pid: int, options: int = 0) -> int:
    """Block until the given child has terminated.

    Stop and continue reports (delivered when options include WUNTRACED or
    WCONTINUED) are not termination and are waited past.

    A child that can no longer be waited for (reaped elsewhere, or reaped by
    the kernel because SIGCHLD is ignored) has terminated too.

    Args:
        pid: Child process to reap
        options: Extra os.waitpid options

    Returns:
        Raw wait status of the terminated child, 0 if it was already reaped
    """
    while True:
        try:
            reaped, status = os.waitpid(pid, options)
        except ChildProcessError:
            return 0
        if reaped != pid:
            continue
        if os.WIFEXITED(status) or os.WIFSIGNALED(status):
            return status


def redirect_standard_streams(null_device: str = NULL_DEVICE) -> None:
    """Rebind stdin, stdout and stderr to the null device."""
    for fd in STANDARD_STREAMS:
        with contextlib.suppress(OSError):
            os.close(fd)

    devnull = os.open(null_device, os.O_RDWR)
    for fd in STANDARD_STREAMS:
        if fd != devnull:
            os.dup2(devnull, fd)

    if devnull in STANDARD_STREAMS:
        # os.open() descriptors are close-on-exec
        os.set_inheritable(devnull, True)
    else:
        os.close(devnull)


def _flush_standard_streams() -> None:
    """Flush Python-level buffers so forked children do not repeat them."""
    for stream in (sys.stdout, sys.stderr):
        if stream is not None and not stream.closed:
            stream.flush()


def _detach_first_child(null_device: str) -> None:
    """Run the first child's half of the sequence.

    Returns only in the second-generation child. The first child itself
    always leaves through os._exit().
    """
    try:
        redirect_standard_streams(null_device)
        os.setsid()
    except OSError as e:
        logger.error(f"Detaching first child failed: {e}")
        os._exit(EXIT_FAILURE)

    try:
        pid = os.fork()
    except OSError as e:
        logger.error(f"Second fork failed: {e}")
        os._exit(EXIT_FAILURE)

    if pid > 0:
        # Abandon the second child so init adopts it
        os._exit(EXIT_SUCCESS)


def detach(return_to_parent: bool = False, null_device: str = NULL_DEVICE) -> DetachResult:
    """Daemonize the process using double fork.

    The first child drops the standard streams, becomes a session leader and
    forks again, then exits without waiting. Its child is reparented to init
    and is the only process that returns PROCEED.

    Args:
        return_to_parent: If False the original caller exits with status 0
            once the first child has exited, instead of returning PARENT.
        null_device: Device the standard streams are rebound to

    Returns:
        PROCEED in the detached process, PARENT in the original caller,
        ERROR in the original caller if the first fork failed

    Raises:
        UnsupportedPlatformError: If fork() or setsid() is unavailable
    """
    if not is_supported():
        raise UnsupportedPlatformError("Detaching requires fork() and setsid()")

    _flush_standard_streams()

    # First fork
    try:
        pid = os.fork()
    except OSError as e:
        logger.error(f"First fork failed: {e}")
        return DetachResult.ERROR

    if pid > 0:
        # The exit status is not inspected, only that the first child is gone
        wait_for_exit(pid)
        if not return_to_parent:
            sys.exit(EXIT_SUCCESS)
        return DetachResult.PARENT

    _detach_first_child(null_device)
    return DetachResult.PROCEED
