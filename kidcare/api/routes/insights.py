import logging
from datetime import date

from fastapi import APIRouter, HTTPException, status

from kidcare.api.dependencies import OwnedProfile, SupabaseClient
from kidcare.models.insights import DemoDataResponse, InsightResponse
from kidcare.services.demo import build_demo_logs
from kidcare.services.llm import generate_health_insights
from kidcare.services.logs import fetch_log_rows, log_to_row, logs_by_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profiles/{profile_id}", tags=["insights"])


# ---------------------------------------------------------------------------
# POST /api/profiles/{profile_id}/insights
# ---------------------------------------------------------------------------


@router.post(
    "/insights",
    response_model=InsightResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate health insights",
    description=(
        "Summarise a child's sickness history in plain language. Always returns "
        "text; a fixed message is used when generation is unavailable."
    ),
)
async def create_insights(profile: OwnedProfile, client: SupabaseClient) -> InsightResponse:
    """Generate narrative insights from the profile's sick days.

    Raises:
        HTTPException: 404 if the profile is not the user's.
        HTTPException: 500 if the logs cannot be fetched.
    """
    logs = logs_by_date(await fetch_log_rows(profile.id, client))
    insight = await generate_health_insights(profile.name, logs.values())
    return InsightResponse(profile_id=profile.id, insight=insight)


# ---------------------------------------------------------------------------
# POST /api/profiles/{profile_id}/demo
# ---------------------------------------------------------------------------


@router.post(
    "/demo",
    response_model=DemoDataResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Load demo data",
    description=(
        "Write three sample illness episodes from the last four months into the "
        "child's log, replacing any logs on those dates."
    ),
)
async def load_demo_data(profile: OwnedProfile, client: SupabaseClient) -> DemoDataResponse:
    """Upsert the sample episodes for the profile.

    Raises:
        HTTPException: 404 if the profile is not the user's.
        HTTPException: 500 if the database write fails.
    """
    demo = build_demo_logs(date.today())
    rows = [log_to_row(profile.id, log_date, content) for log_date, content in demo.items()]

    try:
        response = (
            await client.table("daily_logs")
            .upsert(rows, on_conflict="profile_id,log_date")
            .execute()
        )
    except Exception as exc:
        logger.error(
            "DB upsert failed loading demo data for profile %s: %s",
            profile.id,
            exc,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load demo data",
        )

    written = len(response.data or [])
    logger.info("Demo data loaded: profile=%s logs=%d", profile.id, written)
    return DemoDataResponse(profile_id=profile.id, logs_written=written)
