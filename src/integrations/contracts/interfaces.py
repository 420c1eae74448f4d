from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class FormVariant(str, Enum):
    CONCEPT = "concept"
    PROPOSAL = "proposal"
    COMMUNITY_PROPOSAL = "community_proposal"


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Credential:
    token: str
    expires_at: datetime

    def is_valid(self, now: datetime) -> bool:
        return bool(self.token) and now < self.expires_at


@dataclass(frozen=True)
class SubmissionResult:
    """Uniform outcome of a record-create or file-upload call."""

    success: bool
    message: str
    record_id: Optional[str] = None
    error: Any = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success, "message": self.message}
        if self.record_id is not None:
            out["recordId"] = self.record_id
        if isinstance(self.error, Exception):
            out["error"] = getattr(self.error, "payload", None) or str(self.error)
        elif self.error is not None:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class EligibilityOutcome:
    eligible: bool
    reason: str


@dataclass(frozen=True)
class AutoScore:
    total: int
    organization_age_score: int
    organization_type_score: int
    operational_status_score: int


@dataclass
class UploadedFile:
    """A binary destined for a record field via the upload channel."""

    field_name: str
    file_name: str
    content: bytes
    content_type: str = "application/pdf"


# ---------------------------------------------------------------------------
# Payload access
# ---------------------------------------------------------------------------

def is_binary(value: Any) -> bool:
    """True for raw bytes and file-like objects (e.g. upload handles)."""
    if isinstance(value, (bytes, bytearray, memoryview, UploadedFile)):
        return True
    return hasattr(value, "read") and callable(getattr(value, "read"))


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and value == "":
        return False
    if isinstance(value, (list, tuple)) and not value:
        return False
    return not is_binary(value)


class FormPayload(Mapping[str, Any]):
    """Read-only view over an untrusted form submission.

    Keys may be missing and values may be of any type; the typed accessors
    never raise.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def present(self, key: str) -> bool:
        return is_present(self._data.get(key))

    def value(self, key: str) -> Any:
        """Return the raw value, or None when it would be omitted."""
        raw = self._data.get(key)
        return raw if is_present(raw) else None

    def text(self, key: str) -> str:
        raw = self.value(key)
        return "" if raw is None else str(raw)

    def number(self, key: str) -> float:
        """Leading-numeric parse; anything unusable counts as 0."""
        return parse_number(self._data.get(key))


# ---------------------------------------------------------------------------
# Scalar parsing helpers
# ---------------------------------------------------------------------------

_DATE_FORMATS = ("%Y-%m-%d", "%d-%b-%Y", "%m/%d/%Y", "%Y/%m/%d")


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def parse_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        number = _leading_float(str(value).strip())
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def _leading_float(s: str) -> float:
    end = 0
    seen_digit = seen_dot = False
    for i, ch in enumerate(s):
        if ch.isdigit():
            seen_digit = True
            end = i + 1
        elif ch == "." and not seen_dot:
            seen_dot = True
        elif ch in "+-" and i == 0:
            continue
        else:
            break
    if not seen_digit:
        return 0.0
    try:
        return float(s[:end])
    except ValueError:
        return 0.0
