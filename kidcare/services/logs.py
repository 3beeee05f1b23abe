"""Helpers for the daily-log write path and for shaping stored rows.

The statistics core only ever sees :class:`DailyLog` objects keyed by date;
this module converts between those and ``daily_logs`` table rows.
"""
import logging
from datetime import date

from fastapi import HTTPException, status
from supabase import AsyncClient

from kidcare.models.logs import DailyLog, DailyLogContent

logger = logging.getLogger(__name__)


def normalize_log_content(content: DailyLogContent) -> DailyLogContent:
    """Tidy a submitted log before it is stored.

    Symptom labels are trimmed, blank labels dropped and duplicates removed
    (first occurrence wins). Temperature readings are sorted by time of day.
    Notes are stripped.
    """
    symptoms = list(
        dict.fromkeys(s.strip() for s in content.symptoms if s and s.strip())
    )
    return DailyLogContent(
        symptoms=symptoms,
        temperatures=sorted(content.temperatures, key=lambda t: t.time),
        medications=content.medications,
        notes=content.notes.strip(),
    )


def is_empty_log(content: DailyLogContent) -> bool:
    """True if the log carries nothing worth storing.

    An empty log is treated as "no log for this date": the write path
    deletes the row instead of saving it.
    """
    return (
        not content.symptoms
        and not content.temperatures
        and not content.medications
        and not content.notes.strip()
    )


def log_to_row(profile_id: str, log_date: date, content: DailyLogContent) -> dict:
    return {
        "profile_id": profile_id,
        "log_date": log_date.isoformat(),
        "symptoms": content.symptoms,
        "temperatures": [t.model_dump() for t in content.temperatures],
        "medications": [m.model_dump() for m in content.medications],
        "notes": content.notes,
    }


def row_to_log(row: dict) -> DailyLog:
    return DailyLog(
        date=row["log_date"],
        symptoms=row.get("symptoms"),
        temperatures=row.get("temperatures"),
        medications=row.get("medications"),
        notes=row.get("notes"),
    )


def logs_by_date(rows: list[dict]) -> dict[str, DailyLog]:
    """Key stored rows by ISO date for the statistics functions.

    Rows that fail validation are logged and skipped (data-integrity
    anomalies, not caller errors). A duplicate date keeps the later row.
    """
    logs: dict[str, DailyLog] = {}
    for row in rows:
        try:
            log = row_to_log(row)
        except (KeyError, ValueError) as exc:
            logger.warning(
                "Skipping malformed daily_logs row %s (data integrity issue): %s",
                row.get("id"),
                exc,
            )
            continue
        key = log.date.isoformat()
        if key in logs:
            logger.warning("Duplicate daily log for %s; keeping the later row", key)
        logs[key] = log
    return logs


async def fetch_log_rows(
    profile_id: str,
    client: AsyncClient,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict]:
    """Fetch a profile's ``daily_logs`` rows, oldest first.

    Date filters are inclusive.

    Raises:
        HTTPException: 500 if the query fails.
    """
    try:
        query = client.table("daily_logs").select("*").eq("profile_id", profile_id)
        if start_date is not None:
            query = query.gte("log_date", start_date.isoformat())
        if end_date is not None:
            query = query.lte("log_date", end_date.isoformat())
        response = await query.order("log_date").execute()
    except Exception as exc:
        logger.error(
            "DB query failed fetching daily logs for profile %s: %s",
            profile_id,
            exc,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve daily logs",
        )
    return response.data or []
