"""Application-wide constants for Daemonexec."""

# ============================================================================
# Process Constants
# ============================================================================

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# Standard stream descriptor numbers
STDIN_FILENO = 0
STDOUT_FILENO = 1
STDERR_FILENO = 2
STANDARD_STREAMS = (STDIN_FILENO, STDOUT_FILENO, STDERR_FILENO)

NULL_DEVICE = "/dev/null"


# ============================================================================
# Launch Retry Constants
# ============================================================================

# exec() can fail with EACCES for a short while during early boot, until the
# access-control subsystem settles. Three attempts were needed in the worst
# case seen so far.
MAX_LAUNCH_ATTEMPTS = 16

# Delay between launch attempts
LAUNCH_RETRY_DELAY_MS = 16

NANOSECONDS_PER_MILLISECOND = 1_000_000
MILLISECONDS_PER_SECOND = 1000


# ============================================================================
# Environment Variables
# ============================================================================

ENV_PREFIX = "DAEMONEXEC_"
ENV_DEBUG = ENV_PREFIX + "DEBUG"
ENV_LOG_FILE = ENV_PREFIX + "LOG_FILE"
ENV_PID_FILE = ENV_PREFIX + "PID_FILE"
ENV_MAX_ATTEMPTS = ENV_PREFIX + "MAX_ATTEMPTS"
ENV_RETRY_DELAY_MS = ENV_PREFIX + "RETRY_DELAY_MS"

TRUTHY_VALUES = ("1", "true", "yes", "on")


# ============================================================================
# Logging Constants
# ============================================================================

LOGGER_NAME = "daemonexec"
SYSLOG_SOCKET = "/dev/log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SYSLOG_FORMAT = "%(name)s[%(process)d]: %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log file rotation settings
LOG_FILE_MAX_BYTES = 1024 * 1024  # 1MB per log file
LOG_FILE_BACKUP_COUNT = 3
