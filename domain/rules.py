import os

from domain.constants import DEFAULT_REPEAT_COUNT
from domain.errors import InvalidInputError
from domain.models import CopyJob


def normalize_repeat_count(value) -> tuple[int, str | None]:
    """Returns (repeat_count, warning). warning is None when value was usable.

    Accepts ints or free text from an input field. Anything missing,
    non-integer or below 1 falls back to DEFAULT_REPEAT_COUNT.
    """

    if isinstance(value, bool):
        value = None

    if isinstance(value, int):
        n = value
    else:
        text = (value or "").strip() if isinstance(value, str) else ""
        try:
            n = int(text)
        except ValueError:
            n = 0

    if n < 1:
        return DEFAULT_REPEAT_COUNT, (
            f"Unable to determine number of times to copy file, defaulting to {DEFAULT_REPEAT_COUNT}."
        )
    return n, None


def build_job(source_path: str | None, destination_dir: str, times) -> tuple[CopyJob, list[str]]:
    """Validate front-end input and return (CopyJob, warnings)."""

    if not source_path or not source_path.strip():
        raise InvalidInputError("Please choose a file to copy.")

    src = source_path.strip()
    if not os.path.isfile(src):
        raise InvalidInputError(f"Source file does not exist: {src}")

    warnings = []
    count, warning = normalize_repeat_count(times)
    if warning:
        warnings.append(warning)

    job = CopyJob(source_path=src, destination_dir=destination_dir, repeat_count=count)

    # Each cycle deletes the target first; it must never be the source.
    if _same_path(job.target_path, src):
        raise InvalidInputError(f"Destination would overwrite the source file: {src}")

    return job, warnings


def _same_path(a: str, b: str) -> bool:
    if os.path.normcase(os.path.abspath(a)) == os.path.normcase(os.path.abspath(b)):
        return True
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False
