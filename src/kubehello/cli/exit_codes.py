# topmark:header:start
#
#   project      : KubeHello
#   file         : exit_codes.py
#   file_relpath : src/kubehello/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the KubeHello CLI.

KubeHello aligns with the BSD `sysexits` convention so other tooling can
interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the KubeHello CLI.

    Attributes:
        SUCCESS: Every resolved resource was emitted.
        FAILURE: Generic failure. Prefer a more specific code if available.
        USAGE_ERROR: Invalid flags/arguments. Mirrors BSD ``EX_USAGE (64)``.
        RESOLUTION_ERROR: Some resources could not be resolved while others were
            emitted. Mirrors BSD ``EX_DATAERR (65)``.
        EMPTY_RESULT: Nothing was emitted. Mirrors BSD ``EX_NOINPUT (66)``.
        AUTHORITY_UNAVAILABLE: The API server could not be consulted. Mirrors BSD
            ``EX_UNAVAILABLE (69)``.
        CONFIG_ERROR: Missing/invalid/malformed configuration. Mirrors BSD
            ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    RESOLUTION_ERROR = 65  # EX_DATAERR
    EMPTY_RESULT = 66  # EX_NOINPUT
    AUTHORITY_UNAVAILABLE = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG
