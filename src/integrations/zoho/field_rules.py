"""
Declarative field-mapping rules.

A rule names one or more Zoho field link names and an extractor that reads
the form payload. Rules are applied in order, so a later rule writing the same
target overrides an earlier one when it has a value.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from src.integrations.contracts.interfaces import FormPayload, is_present, parse_datetime

Extractor = Callable[[FormPayload], Any]

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class FieldRule:
    targets: Tuple[str, ...]
    extract: Extractor

    def apply(self, payload: FormPayload, record: Dict[str, Any]) -> None:
        value = self.extract(payload)
        if not is_present(value):
            return
        for target in self.targets:
            record[target] = value


def apply_rules(payload: FormPayload, rules: Iterable[FieldRule]) -> Dict[str, Any]:
    record: Dict[str, Any] = {}
    for rule in rules:
        rule.apply(payload, record)
    return record


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_date(value: Any) -> Optional[str]:
    """DD-Mon-YYYY, or None when the value is not a recognisable date."""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return f"{parsed.day:02d}-{_MONTHS[parsed.month - 1]}-{parsed.year:04d}"


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def duration_days(start: Any, end: Any) -> Optional[int]:
    start_at = parse_datetime(start)
    end_at = parse_datetime(end)
    if start_at is None or end_at is None:
        return None
    if (start_at.tzinfo is None) != (end_at.tzinfo is None):
        start_at = start_at.replace(tzinfo=None)
        end_at = end_at.replace(tzinfo=None)
    return math.ceil((end_at - start_at).total_seconds() / 86400)


def text_block(payload: FormPayload, parts: Sequence[Tuple[str, str]], *, sep: str = ", ", end: str = "") -> str:
    """'Label: value' pairs; missing values render as empty strings."""
    return sep.join(f"{label}: {payload.text(key)}" for label, key in parts) + end


# ---------------------------------------------------------------------------
# Rule builders
# ---------------------------------------------------------------------------

def copy(source: str, *targets: str) -> FieldRule:
    return FieldRule(tuple(targets), lambda p: p.value(source))


def date(source: str, *targets: str) -> FieldRule:
    return FieldRule(tuple(targets), lambda p: format_date(p.value(source)))


def joined(sources: Sequence[str], target: str, sep: str = "\n") -> FieldRule:
    def extract(p: FormPayload) -> str:
        return sep.join(p.text(key) for key in sources if p.present(key))

    return FieldRule((target,), extract)


def computed(target: str, fn: Extractor) -> FieldRule:
    return FieldRule((target,), fn)


def subform(target: str, builders: Sequence[Callable[[FormPayload], Optional[Dict[str, Any]]]]) -> FieldRule:
    """One list entry per builder that returns a row; the key is omitted when no row is built."""

    def extract(p: FormPayload) -> List[Dict[str, Any]]:
        rows = []
        for build in builders:
            row = build(p)
            if row:
                rows.append(row)
        return rows

    return FieldRule((target,), extract)


def group_row(column: str, keys: Sequence[str], render: Callable[[FormPayload], str]):
    """Build a subform row only when at least one of ``keys`` is present."""

    def build(p: FormPayload) -> Optional[Dict[str, Any]]:
        if not any(p.present(k) for k in keys):
            return None
        return {column: render(p)}

    return build
