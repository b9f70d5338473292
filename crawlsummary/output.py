"""
JSON emission for summaries.

Timestamps go out as ISO-8601 UTC strings ("2024-03-01T10:00:00.123Z"), not epoch
numbers. Stats already drop None fields, so nothing null reaches the output.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, IO


def iso_utc(ts: datetime) -> str:
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    text = ts.isoformat(timespec="milliseconds") if ts.microsecond else ts.isoformat(timespec="seconds")
    return text + "Z"


def _default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return iso_utc(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps(obj: Any, indent: int = 2) -> str:
    return json.dumps(obj, indent=indent or None, default=_default, ensure_ascii=False)


def write_json(obj: Any, fp: IO[str], indent: int = 2) -> None:
    fp.write(dumps(obj, indent))
    fp.write("\n")
