"""Application constants."""

USER_AGENT = "pan-quality/1.0 (+data-quality; contact: configured-email)"
STAGES = (
    "ingest",
    "classify",
    "export",
    "report",
)
SOURCE_TYPES = ("csv", "xlsx", "http")
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20

STATUS_VALID = "Valid"
STATUS_INVALID = "Invalid"
STATUSES = (STATUS_VALID, STATUS_INVALID)

REASON_FORMAT_MISMATCH = "FORMAT_MISMATCH"
REASON_ADJACENT_REPEAT = "ADJACENT_REPEAT"
REASON_SEQUENTIAL_LETTERS = "SEQUENTIAL_LETTERS"
REASON_SEQUENTIAL_DIGITS = "SEQUENTIAL_DIGITS"
REASON_CODES = (
    REASON_FORMAT_MISMATCH,
    REASON_ADJACENT_REPEAT,
    REASON_SEQUENTIAL_LETTERS,
    REASON_SEQUENTIAL_DIGITS,
)

JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "dataset",
    "source",
    "event",
    "status",
    "attempt",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
