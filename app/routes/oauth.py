from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.exceptions.custom_exceptions import FeatureNotAvailable
from app.exceptions.exception_constants import OAUTH_COMING_SOON
from app.schemas.platform_token import PlatformPathRequest
from app.utils.auth import get_authenticated_user, UserClaims
from app.utils.constants import PLATFORM_DISPLAY_NAMES

router = APIRouter()


@router.post(
    "/{platform}",
    status_code=status.HTTP_501_NOT_IMPLEMENTED,
    summary="Connect a platform account with OAuth",
    description="Not available yet, always answers with a coming soon notice",
)
async def start_oauth(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[PlatformPathRequest, Depends()],
):
    raise FeatureNotAvailable(
        reason=OAUTH_COMING_SOON.format(platform=PLATFORM_DISPLAY_NAMES[request.platform])
    )
