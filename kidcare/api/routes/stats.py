import logging

from fastapi import APIRouter, status

from kidcare.api.dependencies import OwnedProfile, SupabaseClient
from kidcare.models.stats import StatsResponse
from kidcare.services.episodes import segment_episodes
from kidcare.services.logs import fetch_log_rows, logs_by_date
from kidcare.services.stats import aggregate_stats, top_symptom

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profiles/{profile_id}/stats", tags=["stats"])


@router.get(
    "",
    response_model=StatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Illness statistics",
    description=(
        "Return episode count, average episode duration, mean time between "
        "illnesses and symptom frequencies across all of a child's logs."
    ),
)
async def get_stats(profile: OwnedProfile, client: SupabaseClient) -> StatsResponse:
    """Recompute illness statistics from the profile's full log history.

    Raises:
        HTTPException: 404 if the profile is not the user's.
        HTTPException: 500 if the database query fails.
    """
    logs = logs_by_date(await fetch_log_rows(profile.id, client))

    episodes = segment_episodes(logs)
    stats = aggregate_stats(logs, episodes)

    logger.info(
        "Stats: profile=%s logs=%d sick_days=%d episodes=%d",
        profile.id,
        len(logs),
        stats.total_sick_days,
        stats.episodes_count,
    )
    return StatsResponse(
        profile_id=profile.id,
        stats=stats,
        episodes=episodes,
        top_symptom=top_symptom(stats),
    )
