"""PID file handling for launched daemons."""

import contextlib
import os
from pathlib import Path
from typing import Optional


def write_pid_file(pid_file: Path) -> None:
    """Record the current PID.

    Called just before exec, so the recorded PID is the target program's.
    """
    pid_file.parent.mkdir(parents=True, exist_ok=True)
    pid_file.write_text(str(os.getpid()))


def read_pid(pid_file: Path) -> Optional[int]:
    """Return the recorded PID, or None if the file is missing or unreadable."""
    try:
        content = pid_file.read_text()
    except OSError:
        return None
    content = content.strip()
    return int(content) if content.isdigit() else None


def process_exists(pid: int) -> bool:
    """Probe a PID with signal 0."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Owned by another user
        return True
    return True


def is_running(pid_file: Path) -> bool:
    """Check the daemon recorded in pid_file, removing the file if stale."""
    pid = read_pid(pid_file)
    if pid is None:
        return False
    if process_exists(pid):
        return True
    with contextlib.suppress(FileNotFoundError):
        pid_file.unlink()
    return False
