"""
Repository routes for the RepoHub Dashboard API.

This module provides endpoints for connecting, listing, refreshing and disconnecting
repositories, and for previewing a repository's metadata before connecting it.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse

from app.schemas.repository import (
    ConnectRepositoryRequest,
    FetchMetadataRequest,
    ListRepositoriesRequest,
    RepositoryIdRequest,
    RepositoryResponse,
)
from app.services.connection_service import RepositoryConnectionService
from app.services.metadata_service import RepositoryMetadataService
from app.services.repository_service import RepositoryService
from app.utils import constants
from app.utils.api_response import APIResponse
from app.utils.auth import get_authenticated_user, UserClaims

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/fetch-metadata",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Fetch repository metadata",
    description="Look a repository up on its platform without connecting it",
)
async def fetch_repository_metadata(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[FetchMetadataRequest, Depends()],
    service: Annotated[
        RepositoryMetadataService, Depends(RepositoryMetadataService.with_dependency)
    ],
) -> JSONResponse:
    """
    Fetch lightweight metadata (stars, forks, language ...) for a repository.

    Uses the caller's saved token for the platform when there is one. Classified
    platform failures are returned as 400 with the platform's message.
    """
    result = await service.fetch_metadata(user_claims=user_claims, payload=request.payload)

    return APIResponse.success(message=constants.METADATA_FETCHED_SUCCESSFULLY, data=result)


@router.get(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="List connected repositories",
    description="Retrieve the caller's repositories, newest first, with dashboard stats",
)
async def list_repositories(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[ListRepositoriesRequest, Depends()],
    service: Annotated[RepositoryService, Depends(RepositoryService.with_dependency)],
) -> JSONResponse:
    results = await service.list_repositories(
        user_claims=user_claims, search=request.search, platform=request.platform
    )

    return APIResponse.success(
        message=constants.REPOSITORIES_RETRIEVED_SUCCESSFULLY, data=results
    )


@router.post(
    "",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
    summary="Connect a repository",
    description="Validate a repository URL, fetch its metadata and save it",
)
async def connect_repository(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[ConnectRepositoryRequest, Depends()],
    service: Annotated[
        RepositoryConnectionService, Depends(RepositoryConnectionService.with_dependency)
    ],
) -> JSONResponse:
    created = await service.connect(user_claims=user_claims, payload=request.payload)

    return APIResponse.success(
        message=constants.REPOSITORY_CONNECTED_SUCCESSFULLY,
        data=RepositoryResponse.model_validate(created),
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "/{repository_id}",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Get a repository",
)
async def get_repository(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[RepositoryIdRequest, Depends()],
    service: Annotated[RepositoryService, Depends(RepositoryService.with_dependency)],
) -> JSONResponse:
    repository = await service.get_repository(
        user_claims=user_claims, repository_id=request.repository_id
    )

    return APIResponse.success(
        message=constants.RESOURCE_RETRIEVED_SUCCESSFULLY,
        data=RepositoryResponse.model_validate(repository),
    )


@router.delete(
    "/{repository_id}",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Disconnect a repository",
    description="Delete one of the caller's repositories",
)
async def disconnect_repository(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[RepositoryIdRequest, Depends()],
    service: Annotated[RepositoryService, Depends(RepositoryService.with_dependency)],
) -> JSONResponse:
    await service.disconnect(user_claims=user_claims, repository_id=request.repository_id)

    return APIResponse.success(message=constants.REPOSITORY_DISCONNECTED_SUCCESSFULLY)


@router.post(
    "/{repository_id}/refresh",
    response_model=Dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Refresh a repository",
    description="Re-fetch metadata; also used to reconnect a failed repository",
)
async def refresh_repository(
    user_claims: Annotated[UserClaims, Depends(get_authenticated_user)],
    request: Annotated[RepositoryIdRequest, Depends()],
    service: Annotated[RepositoryService, Depends(RepositoryService.with_dependency)],
) -> JSONResponse:
    repository = await service.refresh(
        user_claims=user_claims, repository_id=request.repository_id
    )

    return APIResponse.success(
        message=constants.REPOSITORY_REFRESHED_SUCCESSFULLY,
        data=RepositoryResponse.model_validate(repository),
    )
