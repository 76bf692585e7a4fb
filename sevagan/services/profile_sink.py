"""CSV export of signup profiles submitted with OTP requests."""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict

import pandas as pd

PROFILE_COLUMNS = [
    "requestedAt",
    "accountType",
    "recipientKey",
    "name",
    "mobile",
    "email",
    "bloodGroup",
    "gender",
    "dob",
    "city",
    "pincode",
]


class CsvProfileSink:
    """Appends one row per profile; the header is written only for a new file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def append(self, row: Dict[str, Any]) -> None:
        frame = pd.DataFrame([row]).reindex(columns=PROFILE_COLUMNS)
        with self._lock:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            write_header = not self.path.exists() or self.path.stat().st_size == 0
            frame.to_csv(self.path, mode="a", header=write_header, index=False)

    def read(self) -> pd.DataFrame:
        if not self.path.exists():
            return pd.DataFrame(columns=PROFILE_COLUMNS)
        return pd.read_csv(self.path, dtype=str, keep_default_na=False)


class NullProfileSink:
    def append(self, row: Dict[str, Any]) -> None:
        return None
