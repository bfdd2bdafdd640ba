"""
Input Fields & Normalization
============================
Static description of every input control and the pure function that turns
whatever the user typed into the canonical text shown back in the field.

Classes:
    FieldKind: Which normalization rules apply.
    FieldSpec: Per-control constraints.

Functions:
    normalize: Raw input -> canonical text.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

# 8 integer digits, one point and two fraction digits: "12,345,674.99"
AMOUNT_MAX_LENGTH = 11

_GROUPING_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")


class FieldKind(StrEnum):
    NUMERIC = "numeric"
    ALPHA_NAME = "alpha_name"


@dataclass(frozen=True)
class FieldSpec:
    kind: FieldKind
    max_length: Optional[int]
    # Characters *kept*; everything else is stripped
    allowed_chars_pattern: str


AMOUNT_FIELD = FieldSpec(
    kind=FieldKind.NUMERIC,
    max_length=AMOUNT_MAX_LENGTH,
    allowed_chars_pattern=r"[0-9.]",
)

NAME_FIELD = FieldSpec(
    kind=FieldKind.ALPHA_NAME,
    max_length=None,
    allowed_chars_pattern=r"[a-zA-Z\s]",
)

# Field ids used by the views and the render controller
FIELD_SPECS: dict[str, FieldSpec] = {
    "amount": AMOUNT_FIELD,
    "gender": NAME_FIELD,
    "name": NAME_FIELD,
}


def _strip_disallowed(value: str, spec: FieldSpec) -> str:
    return re.sub(f"(?!{spec.allowed_chars_pattern}).", "", value, flags=re.DOTALL)


def group_thousands(value: str) -> str:
    """Insert commas into the integer part of a plain decimal string ("1234.5" -> "1,234.5")."""
    if not value:
        return ""
    integer, sep, fraction = value.partition(".")
    return _GROUPING_RE.sub(",", integer) + sep + fraction


def _normalize_numeric(raw: str, spec: FieldSpec) -> str:
    value = _strip_disallowed(raw.replace(",", ""), spec)

    # Only the first decimal point survives
    dot = value.find(".")
    if dot != -1:
        value = value[:dot + 1] + value[dot + 1:].replace(".", "")

    if spec.max_length is not None:
        value = value[:spec.max_length]

    return group_thousands(value)


def _normalize_alpha_name(raw: str, spec: FieldSpec) -> str:
    value = _strip_disallowed(raw, spec).upper()
    if spec.max_length is not None:
        value = value[:spec.max_length]
    return value


def normalize(raw_input: Optional[str], spec: FieldSpec) -> str:
    """
    Sanitize raw user input into the canonical text for the given field.

    Malformed input is never rejected, only cleaned up. The function is pure;
    writing the result back into the source control is the caller's job.

    Examples:
        normalize("1234567.8.9", AMOUNT_FIELD) -> "1,234,567.89"
        normalize("J0hn-Doe!", NAME_FIELD) -> "JHNDOE"
    """
    if not raw_input:
        return ""

    match spec.kind:
        case FieldKind.NUMERIC:
            return _normalize_numeric(raw_input, spec)
        case FieldKind.ALPHA_NAME:
            return _normalize_alpha_name(raw_input, spec)
    raise ValueError(f"Unsupported field kind: {spec.kind!r}")
