import logging
from datetime import date

from fastapi import APIRouter, HTTPException, status

from kidcare.api.dependencies import CurrentUser, OwnedProfile, SupabaseClient
from kidcare.core.config import settings
from kidcare.models.profiles import (
    AVATAR_COLORS,
    ProfileCreate,
    ProfileList,
    ProfileResponse,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_date_of_birth(dob: date | None) -> None:
    """Raise 400 if date_of_birth is in the future."""
    if dob is not None and dob > date.today():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="date_of_birth cannot be in the future",
        )


# ---------------------------------------------------------------------------
# GET /api/profiles
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=ProfileList,
    status_code=status.HTTP_200_OK,
    summary="List child profiles",
    description="Return the authenticated user's child profiles, oldest first.",
)
async def list_profiles(user_id: CurrentUser, client: SupabaseClient) -> ProfileList:
    """Return every child profile owned by the authenticated user.

    Raises:
        HTTPException: 401 if the request is not authenticated.
        HTTPException: 500 if the database query fails.
    """
    try:
        response = (
            await client.table("profiles")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at")
            .execute()
        )
    except Exception as exc:
        logger.error("DB query failed listing profiles for user %s: %s", user_id, exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve profiles",
        )

    profiles = [ProfileResponse(**row) for row in (response.data or [])]
    return ProfileList(profiles=profiles, count=len(profiles))


# ---------------------------------------------------------------------------
# POST /api/profiles
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a child profile",
    description=(
        "Add a child profile for the authenticated user. Name and avatar colour "
        "default by position when omitted."
    ),
)
async def create_profile(
    payload: ProfileCreate,
    user_id: CurrentUser,
    client: SupabaseClient,
) -> ProfileResponse:
    """Create a child profile, up to ``MAX_PROFILES`` per user.

    Raises:
        HTTPException: 400 if date_of_birth is in the future.
        HTTPException: 401 if the request is not authenticated.
        HTTPException: 409 if the user already has the maximum number of profiles.
        HTTPException: 500 if the database query or insert fails.
    """
    _validate_date_of_birth(payload.date_of_birth)

    try:
        existing = (
            await client.table("profiles").select("id").eq("user_id", user_id).execute()
        )
    except Exception as exc:
        logger.error("DB lookup failed for user %s: %s", user_id, exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create profile",
        )

    count = len(existing.data or [])
    if count >= settings.MAX_PROFILES:
        logger.warning("Profile limit reached for user %s (%d)", user_id, count)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Maximum of {settings.MAX_PROFILES} profiles reached",
        )

    row = {
        "user_id": user_id,
        "name": payload.name or f"Child {count + 1}",
        "avatar_color": payload.avatar_color or AVATAR_COLORS[count % len(AVATAR_COLORS)],
        "date_of_birth": (
            payload.date_of_birth.isoformat() if payload.date_of_birth else None
        ),
    }

    try:
        response = await client.table("profiles").insert(row).execute()
    except Exception as exc:
        logger.error("DB insert failed for user %s: %s", user_id, exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create profile",
        )

    if not response.data:
        logger.error("Supabase returned no data after profile insert for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create profile",
        )

    created = response.data[0]
    logger.info("Profile created: id=%s user=%s", created["id"], user_id)
    return ProfileResponse(**created)


# ---------------------------------------------------------------------------
# PUT /api/profiles/{profile_id}
# ---------------------------------------------------------------------------


@router.put(
    "/{profile_id}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a child profile",
)
async def update_profile(
    payload: ProfileUpdate,
    profile: OwnedProfile,
    client: SupabaseClient,
) -> ProfileResponse:
    """Update name, avatar colour or date of birth.

    Omitted fields are unchanged. ``"date_of_birth": null`` clears the date.

    Raises:
        HTTPException: 400 if date_of_birth is in the future.
        HTTPException: 404 if the profile is not the user's.
        HTTPException: 500 if the database update fails.
    """
    _validate_date_of_birth(payload.date_of_birth)

    # Only date_of_birth may be null here; an explicit null clears it.
    changes = payload.model_dump(exclude_unset=True, mode="json")
    if not changes:
        return profile

    try:
        response = (
            await client.table("profiles")
            .update(changes)
            .eq("id", profile.id)
            .eq("user_id", profile.user_id)
            .execute()
        )
    except Exception as exc:
        logger.error("DB update failed for profile %s: %s", profile.id, exc, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        )

    if not response.data:
        logger.error("Supabase returned no data after update for profile %s", profile.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        )

    logger.info("Profile updated: id=%s fields=%s", profile.id, sorted(changes))
    return ProfileResponse(**response.data[0])
