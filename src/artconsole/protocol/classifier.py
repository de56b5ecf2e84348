"""Line classification: JSON state report or free-form firmware output."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class LineKind(StrEnum):
    """How an inbound line is handled."""
    EMPTY = "empty"
    STRUCTURED = "structured"
    MALFORMED = "malformed"
    TEXT = "text"


@dataclass(frozen=True)
class ClassifiedLine:
    """A trimmed inbound line and what it turned out to be."""

    kind: LineKind
    text: str
    payload: dict[str, Any] = field(default_factory=dict)
    error: str = ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def classify_line(raw: str) -> ClassifiedLine:
    """Classify one framed line.

    Only lines starting with ``{`` are JSON candidates; the firmware prints
    plenty of plain diagnostics that are never parsed.
    """
    line = raw.strip()
    if not line:
        return ClassifiedLine(LineKind.EMPTY, line)

    if not line.startswith("{"):
        return ClassifiedLine(LineKind.TEXT, line)

    try:
        payload = json.loads(line, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        return ClassifiedLine(LineKind.MALFORMED, line, error=str(exc))

    return ClassifiedLine(LineKind.STRUCTURED, line, payload=payload)
