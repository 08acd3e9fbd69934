from __future__ import annotations

import math
from datetime import datetime, timedelta

from fastapi import HTTPException, status

from hiring_funnel.core.datetime_utils import to_utc_naive


def parse_datetime(raw: str | None, *, field: str) -> datetime | None:
    if not raw or not raw.strip():
        return None
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return to_utc_naive(datetime.fromisoformat(value))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {field} format.") from exc


def expand_end_of_day(raw: str | None, value: datetime | None) -> datetime | None:
    if not raw or value is None:
        return value
    if len(raw.strip()) == 10:
        return value + timedelta(days=1) - timedelta(microseconds=1)
    return value


def parse_job_id(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        job_id = int(raw.strip())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid jobId parameter.") from exc
    if job_id <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid jobId parameter.")
    return job_id


def parse_positive_numbers(values: list[str] | None) -> list[float]:
    """Accepts repeated params and comma lists; non-numeric or non-positive entries are dropped."""
    out: list[float] = []
    for value in values or []:
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                number = float(part)
            except ValueError:
                continue
            if math.isfinite(number) and number > 0:
                out.append(number)
    return out


def parse_id_list(values: list[str] | None) -> list[int]:
    return [int(number) for number in parse_positive_numbers(values) if number.is_integer()]
