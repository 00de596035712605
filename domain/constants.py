DEFAULT_REPEAT_COUNT = 10

# Reference deployment copies back over the RDP client drive mapping.
DEFAULT_DESTINATION = r"\\tsclient\C\Temp"

SIZE_SUFFIXES = ("bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

OUTCOME_COMPLETED = "COMPLETED"
OUTCOME_CANCELLED = "CANCELLED"
OUTCOME_FAILED = "FAILED"