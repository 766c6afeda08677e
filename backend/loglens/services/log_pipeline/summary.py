# summary.py - Quick per-file tally of error and warning lines, run as soon as a file is picked.
# It only looks for the bracketed tokens, so its numbers can differ from what the full parser emits.

from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Dict

ERROR_MARKER = "[ERR]"
WARNING_MARKER = "[WRN]"


@dataclass(frozen=True)
class FileSummary:
    file_name: str
    error_count: int = 0
    warning_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize_file(file_name: str, text: str) -> FileSummary:
    errors = 0
    warnings = 0
    for line in text.split("\n"):
        trimmed = line.strip()
        # A line carrying both markers counts once, as an error
        if ERROR_MARKER in trimmed:
            errors += 1
        elif WARNING_MARKER in trimmed:
            warnings += 1
    return FileSummary(file_name=file_name, error_count=errors, warning_count=warnings)
