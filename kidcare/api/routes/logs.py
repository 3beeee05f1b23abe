import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Path, Query, Response, status

from kidcare.api.dependencies import OwnedProfile, SupabaseClient
from kidcare.models.logs import DailyLog, DailyLogContent, DailyLogList
from kidcare.services.logs import (
    fetch_log_rows,
    is_empty_log,
    log_to_row,
    logs_by_date,
    normalize_log_content,
    row_to_log,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profiles/{profile_id}/logs", tags=["logs"])


async def _delete_log(profile_id: str, log_date: date, client: SupabaseClient) -> None:
    try:
        await (
            client.table("daily_logs")
            .delete()
            .eq("profile_id", profile_id)
            .eq("log_date", log_date.isoformat())
            .execute()
        )
    except Exception as exc:
        logger.error(
            "DB delete failed for profile %s date %s: %s",
            profile_id,
            log_date,
            exc,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete daily log",
        )


# ---------------------------------------------------------------------------
# GET /api/profiles/{profile_id}/logs
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=DailyLogList,
    status_code=status.HTTP_200_OK,
    summary="List daily logs",
    description="Retrieve a child's daily logs, oldest first, with optional date filtering.",
)
async def list_logs(
    profile: OwnedProfile,
    client: SupabaseClient,
    start_date: date | None = Query(
        default=None, description="Include logs on or after this date (ISO 8601)"
    ),
    end_date: date | None = Query(
        default=None, description="Include logs on or before this date (ISO 8601)"
    ),
) -> DailyLogList:
    """Return the profile's daily logs in chronological order.

    Raises:
        HTTPException: 400 if start_date is after end_date.
        HTTPException: 404 if the profile is not the user's.
        HTTPException: 500 if the database query fails.
    """
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must be on or before end_date",
        )

    rows = await fetch_log_rows(profile.id, client, start_date, end_date)
    logs = sorted(logs_by_date(rows).values(), key=lambda log: log.date)
    logger.info("Retrieved %d daily logs for profile %s", len(logs), profile.id)
    return DailyLogList(logs=logs, count=len(logs))


# ---------------------------------------------------------------------------
# PUT /api/profiles/{profile_id}/logs/{log_date}
# ---------------------------------------------------------------------------


@router.put(
    "/{log_date}",
    response_model=DailyLog,
    status_code=status.HTTP_200_OK,
    summary="Save the log for a day",
    description=(
        "Create or replace a child's log for one date. Saving a log with no "
        "symptoms, temperatures, medications or notes deletes it (204)."
    ),
    responses={204: {"description": "Empty log; any stored log for the date was deleted"}},
)
async def save_log(
    payload: DailyLogContent,
    profile: OwnedProfile,
    client: SupabaseClient,
    log_date: date = Path(description="Calendar date of the log (YYYY-MM-DD)"),
) -> DailyLog | Response:
    """Upsert the log for ``log_date``.

    Symptoms are trimmed and de-duplicated and temperature readings sorted by
    time before storing. One log per profile and date.

    Raises:
        HTTPException: 404 if the profile is not the user's.
        HTTPException: 422 if the payload violates model constraints.
        HTTPException: 500 if the database write fails.
    """
    content = normalize_log_content(payload)

    if is_empty_log(content):
        await _delete_log(profile.id, log_date, client)
        logger.info("Empty log saved; deleted profile=%s date=%s", profile.id, log_date)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    row = log_to_row(profile.id, log_date, content)
    try:
        response = (
            await client.table("daily_logs")
            .upsert(row, on_conflict="profile_id,log_date")
            .execute()
        )
    except Exception as exc:
        logger.error(
            "DB upsert failed for profile %s date %s: %s",
            profile.id,
            log_date,
            exc,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save daily log",
        )

    if not response.data:
        logger.error("Supabase returned no data after upsert for profile %s", profile.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save daily log",
        )

    logger.info("Daily log saved: profile=%s date=%s", profile.id, log_date)
    return row_to_log(response.data[0])


# ---------------------------------------------------------------------------
# DELETE /api/profiles/{profile_id}/logs/{log_date}
# ---------------------------------------------------------------------------


@router.delete(
    "/{log_date}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete the log for a day",
)
async def delete_log(
    profile: OwnedProfile,
    client: SupabaseClient,
    log_date: date = Path(description="Calendar date of the log (YYYY-MM-DD)"),
) -> Response:
    """Delete the log for ``log_date``. Deleting a missing log is not an error.

    Raises:
        HTTPException: 404 if the profile is not the user's.
        HTTPException: 500 if the database delete fails.
    """
    await _delete_log(profile.id, log_date, client)
    logger.info("Daily log deleted: profile=%s date=%s", profile.id, log_date)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
