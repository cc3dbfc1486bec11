"""Process image replacement with retry on transient permission failures."""

import ctypes
import errno
import logging
import os
import sys
from typing import NoReturn, Optional, Sequence

from daemonexec.utils.constants import (
    EXIT_FAILURE,
    LAUNCH_RETRY_DELAY_MS,
    MAX_LAUNCH_ATTEMPTS,
    MILLISECONDS_PER_SECOND,
    NANOSECONDS_PER_MILLISECOND,
)

logger = logging.getLogger(__name__)


class _Timespec(ctypes.Structure):
    _fields_ = [("tv_sec", ctypes.c_long), ("tv_nsec", ctypes.c_long)]


_libc: Optional[ctypes.CDLL] = None


def _nanosleep():
    global _libc
    if _libc is None:
        _libc = ctypes.CDLL(None, use_errno=True)
        _libc.nanosleep.argtypes = [ctypes.POINTER(_Timespec), ctypes.POINTER(_Timespec)]
        _libc.nanosleep.restype = ctypes.c_int
    return _libc.nanosleep


def remaining_ms(seconds: int, nanoseconds: int) -> int:
    """Convert an unslept timespec to whole milliseconds, at least 1."""
    total = seconds * MILLISECONDS_PER_SECOND + nanoseconds // NANOSECONDS_PER_MILLISECOND
    return max(1, total)


def sleep_ms(milliseconds: int) -> int:
    """Sleep, stopping early if a signal arrives.

    time.sleep() resumes after signal handlers run, so this calls nanosleep()
    directly to find out how much of the interval was left.

    Args:
        milliseconds: Duration to sleep

    Returns:
        0 if the whole duration elapsed, otherwise the remaining milliseconds
        (never less than 1)
    """
    if milliseconds <= 0:
        return 0

    request = _Timespec(
        milliseconds // MILLISECONDS_PER_SECOND,
        (milliseconds % MILLISECONDS_PER_SECOND) * NANOSECONDS_PER_MILLISECOND,
    )
    remaining = _Timespec(0, 0)
    if _nanosleep()(ctypes.byref(request), ctypes.byref(remaining)) == 0:
        return 0

    err = ctypes.get_errno()
    if err != errno.EINTR:
        raise OSError(err, os.strerror(err))
    return remaining_ms(remaining.tv_sec, remaining.tv_nsec)


def launch_with_retry(
    path: str,
    args: Sequence[str],
    max_attempts: int = MAX_LAUNCH_ATTEMPTS,
    retry_delay_ms: int = LAUNCH_RETRY_DELAY_MS,
) -> NoReturn:
    """Replace the current process image with the target program.

    Every failed attempt is retried: early in boot exec() has been seen to
    fail with EACCES for a few milliseconds. Once the attempts are used up
    the process exits with failure status. Does not return.

    Args:
        path: Executable to run
        args: Argument vector, args[0] conventionally equal to path
        max_attempts: Number of exec attempts before giving up
        retry_delay_ms: Sleep between attempts
    """
    last_error: Optional[OSError] = None

    for attempt in range(1, max_attempts + 1):
        try:
            os.execv(path, list(args))
        except OSError as e:
            last_error = e
            logger.debug(f"Launch attempt {attempt}/{max_attempts} for {path} failed: {e}")
            if attempt < max_attempts:
                # Interruption shortens the delay, it is not resumed
                sleep_ms(retry_delay_ms)

    logger.error(f"Launch of {path} failed after {max_attempts} attempts: {last_error}")
    sys.exit(EXIT_FAILURE)
