from __future__ import annotations

"""
Domain Constants.

Centralizes the static defaults shared by the formatter, the sinks and the
logger itself: file naming, flush cadence, line layout and placeholders.
"""

# -----------------------------------------------------------------------------
# FILE OUTPUT
# -----------------------------------------------------------------------------
DEFAULT_LOG_DIR = "logs"
LOG_FILE_PATTERN = "{program}{suffix}.log"
LOG_FILE_ENCODING = "utf-8"
LINE_TERMINATOR = "\n"

# Highest numeric suffix tried before file output is abandoned (logs/app10.log)
DEFAULT_MAX_SUFFIX = 10
DEFAULT_FLUSH_INTERVAL_MS = 1000

# -----------------------------------------------------------------------------
# LINE LAYOUT
# -----------------------------------------------------------------------------
LINE_TEMPLATE = "{time} [{severity}] [{caller}]:{message}"
MESSAGE_SEPARATOR = " "

# Long time-of-day pattern (HH:mm:ss). "%X" switches to the active locale's own.
DEFAULT_TIME_FORMAT = "%H:%M:%S"

CALLER_PLACEHOLDER = "---"
CALLER_UNKNOWN = "???"
CALLER_TYPE_WIDTH = 8
CALLER_METHOD_WIDTH = 14
CALLER_SEPARATOR = "   "

# -----------------------------------------------------------------------------
# FATAL SHUTDOWN
# -----------------------------------------------------------------------------
FATAL_BANNER = "================== FATAL =================="
FATAL_EXIT_STATUS = 1
