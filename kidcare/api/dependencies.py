import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Path, status
from supabase import AsyncClient

from kidcare.core.supabase import get_client
from kidcare.models.profiles import ProfileResponse

logger = logging.getLogger(__name__)


SupabaseClient = Annotated[AsyncClient, Depends(get_client)]


async def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
    client: AsyncClient = Depends(get_client),
) -> str:
    """Validate the Bearer JWT and return the authenticated user's UUID.

    Raises:
        HTTPException: 401 if the Authorization header is missing,
            malformed, or the token is invalid or expired.
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format. Expected 'Bearer <token>'",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.removeprefix("Bearer ")

    try:
        response = await client.auth.get_user(token)
        if not response.user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return str(response.user.id)
    except HTTPException:
        raise
    except Exception as exc:
        logger.warning("Token validation failed: %s: %s", type(exc).__name__, exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


CurrentUser = Annotated[str, Depends(get_current_user_id)]


async def get_owned_profile(
    user_id: CurrentUser,
    client: SupabaseClient,
    profile_id: str = Path(description="Child profile ID"),
) -> ProfileResponse:
    """Resolve a child profile that belongs to the authenticated user.

    Profiles owned by someone else are reported as missing so their
    existence is not leaked.

    Raises:
        HTTPException: 404 if the profile does not exist or is not the user's.
        HTTPException: 500 if the profile lookup fails.
    """
    try:
        response = (
            await client.table("profiles")
            .select("*")
            .eq("id", profile_id)
            .eq("user_id", user_id)
            .execute()
        )
    except Exception as exc:
        logger.error(
            "Profile lookup failed for profile %s (user %s): %s",
            profile_id,
            user_id,
            exc,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load profile",
        )

    if not response.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return ProfileResponse(**response.data[0])


OwnedProfile = Annotated[ProfileResponse, Depends(get_owned_profile)]
