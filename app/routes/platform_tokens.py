"""
Platform token routes for the RepoHub Dashboard API.

One token per platform and user. Tokens are stored encrypted and only ever
returned masked.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse

from app.schemas.platform_token import (
    ListRemoteRepositoriesRequest,
    PlatformPathRequest,
    PlatformTokenResponse,
    SavePlatformTokenRequest,
)
from app.services.platform_tokens_service import PlatformTokenService
from app.utils import constants
from app.utils.api_response import APIResponse
from app.utils.auth import get_authenticated_user, UserClaims

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="List saved platform tokens",
    description="Retrieve the caller's platform tokens with masked values",
)
async def list_platform_tokens(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    service: Annotated[PlatformTokenService, Depends(PlatformTokenService.with_dependency)],
) -> JSONResponse:
    results = await service.list_tokens(user_claims=user_claims)

    return APIResponse.success(message=constants.TOKENS_RETRIEVED_SUCCESSFULLY, data=results)


@router.post(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    summary="Save a platform token",
    description="Create or replace the caller's token for a platform",
)
async def save_platform_token(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[SavePlatformTokenRequest, Depends()],
    service: Annotated[PlatformTokenService, Depends(PlatformTokenService.with_dependency)],
) -> JSONResponse:
    saved = await service.save_token(user_claims=user_claims, payload=request.payload)

    return APIResponse.success(
        message=constants.TOKEN_SAVED_SUCCESSFULLY,
        data=PlatformTokenResponse.model_validate(saved),
        status_code=status.HTTP_201_CREATED,
    )


@router.delete(
    "/{platform}",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Delete a platform token",
)
async def delete_platform_token(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[PlatformPathRequest, Depends()],
    service: Annotated[PlatformTokenService, Depends(PlatformTokenService.with_dependency)],
) -> JSONResponse:
    await service.delete_token(user_claims=user_claims, platform=request.platform)

    return APIResponse.success(message=constants.TOKEN_DELETED_SUCCESSFULLY)


@router.post(
    "/{platform}/verify",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Verify a platform token",
    description="Call the platform with the saved token and return the account it belongs to",
)
async def verify_platform_token(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[PlatformPathRequest, Depends()],
    service: Annotated[PlatformTokenService, Depends(PlatformTokenService.with_dependency)],
) -> JSONResponse:
    account = await service.verify_token(user_claims=user_claims, platform=request.platform)

    return APIResponse.success(message=constants.TOKEN_VERIFIED_SUCCESSFULLY, data=account)


@router.get(
    "/{platform}/repositories",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="List repositories visible to a platform token",
)
async def list_remote_repositories(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[ListRemoteRepositoriesRequest, Depends()],
    service: Annotated[PlatformTokenService, Depends(PlatformTokenService.with_dependency)],
) -> JSONResponse:
    results = await service.list_remote_repositories(
        user_claims=user_claims,
        platform=request.platform,
        pagination=request.pagination,
    )

    return APIResponse.success(
        message=constants.REPOSITORIES_RETRIEVED_SUCCESSFULLY, data=results
    )
