from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse

from app.schemas.user import ProfileResponse
from app.services.profile_service import ProfileService
from app.utils import constants
from app.utils.api_response import APIResponse
from app.utils.auth import get_authenticated_user, UserClaims

router = APIRouter()


@router.get(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Get the caller's profile",
)
async def get_profile(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    service: Annotated[ProfileService, Depends(ProfileService.with_dependency)],
) -> JSONResponse:
    profile = await service.get_profile(user_claims=user_claims)

    return APIResponse.success(
        message=constants.RESOURCE_RETRIEVED_SUCCESSFULLY,
        data=ProfileResponse.model_validate(profile),
    )
