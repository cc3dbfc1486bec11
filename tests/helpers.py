"""Fork helpers for Daemonexec tests."""

import json
import os
import select
import signal
import time
from typing import Callable

import pytest

requires_fork = pytest.mark.skipif(not hasattr(os, "fork"), reason="fork() not available")

FORK_TIMEOUT_SECONDS = 10.0


def report(write_fd: int, **fields) -> None:
    """Write one JSON line to the report pipe."""
    os.write(write_fd, (json.dumps(fields) + "\n").encode())


def run_forked(func: Callable[[int], None], timeout: float = FORK_TIMEOUT_SECONDS) -> list[dict]:
    """Run func(write_fd) in a forked helper and collect what it reports.

    Every process descended from the helper may report on the pipe. Reading
    stops once all of them have closed it.
    """
    read_fd, write_fd = os.pipe()
    pid = os.fork()
    if pid == 0:
        os.close(read_fd)
        code = 0
        try:
            func(write_fd)
        except SystemExit as e:
            report(write_fd, role="exit", code=e.code)
        except BaseException as e:  # report anything, never return into pytest
            report(write_fd, role="error", error=repr(e))
            code = 1
        finally:
            os._exit(code)

    os.close(write_fd)
    chunks = []
    deadline = time.monotonic() + timeout
    try:
        while True:
            left = deadline - time.monotonic()
            if left <= 0:
                raise TimeoutError("forked helper did not finish")
            ready, _, _ = select.select([read_fd], [], [], left)
            if not ready:
                continue
            data = os.read(read_fd, 4096)
            if not data:
                break
            chunks.append(data)
    except TimeoutError:
        os.kill(pid, signal.SIGKILL)
        raise
    finally:
        os.close(read_fd)
        os.waitpid(pid, 0)

    lines = b"".join(chunks).decode().splitlines()
    return [json.loads(line) for line in lines if line]


def by_role(reports: list[dict], role: str) -> dict:
    """Return the single report with the given role."""
    matches = [r for r in reports if r.get("role") == role]
    assert len(matches) == 1, reports
    return matches[0]
