"""Raw entry point: daemonexec PATH [ARG0 ARGS...].

argv[1] is the executable and argv[1:] its argument vector, following the
exec() calling convention. Configuration comes from DAEMONEXEC_* variables.
"""

import sys
from typing import Optional, Sequence

from daemonexec.core.config import DaemonizerConfig
from daemonexec.core.daemonizer import Daemonizer
from daemonexec.core.errors import DaemonExecError
from daemonexec.utils.constants import EXIT_FAILURE, EXIT_USAGE
from daemonexec.utils.logging import setup_logging

USAGE = "usage: daemonexec PATH [ARG0 [ARGS...]]"


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Daemonize and exec the program named on the command line."""
    if argv is None:
        argv = sys.argv

    if len(argv) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(EXIT_USAGE)

    try:
        config = DaemonizerConfig.from_env()
    except DaemonExecError as e:
        print(f"daemonexec: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    setup_logging(debug=config.debug, log_file=config.log_file)

    try:
        Daemonizer(config).daemonize_and_exec(argv[1], list(argv[1:]))
    except DaemonExecError as e:
        print(f"daemonexec: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
