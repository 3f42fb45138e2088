from typing import Any

import structlog

from errors import MalformedDataError, NotFoundError
from models import ForecastRecord, HazardRecord

log = structlog.get_logger(__name__)

# elementName -> (ForecastRecord attribute, suffix)
FORECAST_ELEMENTS = {
    "Wx": ("weather", ""),
    "PoP": ("rain", "%"),
    "MinT": ("min_temp", "°C"),
    "MaxT": ("max_temp", "°C"),
    "CI": ("comfort", ""),
    "WS": ("wind_speed", ""),
}


def extract_location(payload: Any) -> dict[str, Any] | None:
    """
    Return records.location[0] from a CWA datastore payload, or None when the
    city matched nothing. Only the first location is used.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("records"), dict):
        raise MalformedDataError("CWA API response has no 'records' object")
    locations = payload["records"].get("location") or []
    if not locations:
        return None
    return locations[0]


# Pairs each slice of an element with its record: by startTime when those are
# usable as keys, otherwise by position.
def _matched_slots(slots, records, by_start):
    if by_start is None:
        yield from zip(records, slots)
        return
    for slot in slots:
        start = slot.get("startTime", "")
        record = by_start.get(start)
        if record is None:
            log.debug("forecast_slot_unmatched", start_time=start)
            continue
        yield record, slot


def transform_forecast(location: dict[str, Any] | None) -> list[ForecastRecord]:
    """
    Flatten the element-oriented 36-hour forecast into one record per period.

    Periods are taken from the first weather element, in upstream order. Values
    from every element are merged by startTime, so an element missing a period
    leaves that field empty for that period only. When the first element's
    startTimes are missing or repeated, values are merged by position instead.
    """
    if location is None:
        raise NotFoundError("No forecast record for the requested city")

    elements = location.get("weatherElement") or []
    if not elements:
        return []

    records = [
        ForecastRecord(start_time=slot.get("startTime", ""), end_time=slot.get("endTime", ""))
        for slot in elements[0].get("time") or []
    ]
    starts = [r.start_time for r in records]
    by_start = None
    if all(starts) and len(set(starts)) == len(starts):
        by_start = {r.start_time: r for r in records}
    else:
        log.debug("forecast_merge_by_position", periods=len(records))

    for element in elements:
        target = FORECAST_ELEMENTS.get(element.get("elementName"))
        if target is None:
            continue
        field, suffix = target
        for record, slot in _matched_slots(element.get("time") or [], records, by_start):
            value = (slot.get("parameter") or {}).get("parameterName")
            if value is None:
                continue
            setattr(record, field, f"{value}{suffix}")

    return records


def transform_hazards(location: dict[str, Any] | None) -> list[HazardRecord]:
    """Flatten hazardConditions.hazards into (phenomena, startTime, endTime) records."""
    if location is None:
        raise NotFoundError("No hazard record for the requested city")

    conditions = location.get("hazardConditions") or {}
    hazards = conditions.get("hazards") or []

    out: list[HazardRecord] = []
    for i, entry in enumerate(hazards):
        info = entry.get("info") if isinstance(entry, dict) else None
        valid_time = entry.get("validTime") if isinstance(entry, dict) else None
        if not isinstance(info, dict) or not isinstance(valid_time, dict):
            log.warning("hazard_entry_malformed", index=i)
            raise MalformedDataError(
                f"Hazard entry {i} is missing 'info' or 'validTime'",
                details=entry,
            )
        out.append(
            HazardRecord(
                phenomena=info.get("phenomena", ""),
                start_time=valid_time.get("startTime", ""),
                end_time=valid_time.get("endTime", ""),
            )
        )
    return out
