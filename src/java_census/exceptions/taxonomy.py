"""Error codes for java-census failures.

Error Code Convention:
    CS1xx - Scanning errors (root, files)
    CS2xx - Pattern errors
    CS3xx - Findings log errors
    CS4xx - Configuration errors
"""

from enum import Enum


class ErrorCode(Enum):
    """Structured error codes for logs and exit reporting."""

    # Scanning errors (CS1xx)
    CS100 = "CS100"  # Root path cannot be visited
    CS101 = "CS101"  # File read error
    CS102 = "CS102"  # File is not valid UTF-8
    CS103 = "CS103"  # Tree-sitter parse failed or tree has syntax errors
    CS104 = "CS104"  # File exceeds size limit

    # Pattern errors (CS2xx)
    CS200 = "CS200"  # Query failed to compile against the grammar

    # Findings log errors (CS3xx)
    CS300 = "CS300"  # Findings log write failed

    # Configuration errors (CS4xx)
    CS400 = "CS400"  # Invalid configuration value
