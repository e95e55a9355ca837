import logging
import uuid
from datetime import datetime, timezone
from typing import Annotated, Iterable, List, Optional

from fastapi import Depends
from tortoise.exceptions import BaseORMException

from app.config import Platform, RepositoryStatus, settings
from app.exceptions.custom_exceptions import RepositoryStoreError, ResourceNotFound
from app.exceptions.exception_constants import REPOSITORY_NOT_FOUND
from app.models import Repository
from app.repositories.repository_store import IRepositoryStore, TortoiseRepositoryStore
from app.schemas.repository import (
    RepositoryListResponse,
    RepositoryResponse,
    RepositoryStats,
)
from app.services.metadata_service import MetadataFetchOutcome, RepositoryMetadataService
from app.utils.auth import UserClaims
from app.utils.constants import REPOSITORY_REFRESH_FAILED

logger = logging.getLogger(__name__)


def filter_repositories(
    repositories: Iterable[Repository],
    search: Optional[str] = None,
    platform: Optional[Platform] = None,
) -> List[Repository]:
    """Case-insensitive substring match on name or owner, optionally one platform only."""
    needle = (search or "").strip().lower()

    def matches(repository) -> bool:
        if platform is not None and repository.platform != platform:
            return False
        if not needle:
            return True
        return (
            needle in (repository.repo_name or "").lower()
            or needle in (repository.repo_owner or "").lower()
        )

    return [repository for repository in repositories if matches(repository)]


def compute_stats(repositories: Iterable[Repository], limit: int) -> RepositoryStats:
    repositories = list(repositories)
    by_status = {status: 0 for status in RepositoryStatus}
    for repository in repositories:
        by_status[RepositoryStatus(repository.status)] += 1

    return RepositoryStats(
        total=len(repositories),
        connected=by_status[RepositoryStatus.CONNECTED],
        failed=by_status[RepositoryStatus.FAILED],
        pending=by_status[RepositoryStatus.PENDING],
        limit=limit,
    )


class RepositoryService:

    def __init__(
        self,
        repository_store: IRepositoryStore,
        metadata_service: RepositoryMetadataService,
    ):
        self.repository_store = repository_store
        self.metadata_service = metadata_service

    @classmethod
    def with_dependency(
        cls,
        repository_store: Annotated[TortoiseRepositoryStore, Depends()],
        metadata_service: Annotated[
            RepositoryMetadataService, Depends(RepositoryMetadataService.with_dependency)
        ],
    ) -> "RepositoryService":
        return cls(repository_store=repository_store, metadata_service=metadata_service)

    async def list_repositories(
        self,
        user_claims: UserClaims,
        search: Optional[str] = None,
        platform: Optional[Platform] = None,
    ) -> RepositoryListResponse:
        repositories = await self.repository_store.find_all(user_claims.sub)

        # stats always describe everything the user connected, not the filtered view
        stats = compute_stats(repositories, settings.MAX_REPOSITORIES_PER_USER)
        visible = filter_repositories(repositories, search=search, platform=platform)

        return RepositoryListResponse(
            items=[RepositoryResponse.model_validate(repository) for repository in visible],
            stats=stats,
        )

    async def get_repository(self, user_claims: UserClaims, repository_id: uuid.UUID) -> Repository:
        repository = await self.repository_store.find_one(user_claims.sub, id=repository_id)
        if not repository:
            raise ResourceNotFound(reason=REPOSITORY_NOT_FOUND)
        return repository

    async def disconnect(self, user_claims: UserClaims, repository_id: uuid.UUID) -> int:
        try:
            deleted = await self.repository_store.delete(user_claims.sub, id=repository_id)
        except BaseORMException as e:
            raise RepositoryStoreError(operation="delete_repository", store_message=str(e)) from e

        if deleted <= 0:
            raise ResourceNotFound(reason=REPOSITORY_NOT_FOUND)

        return deleted

    async def refresh(self, user_claims: UserClaims, repository_id: uuid.UUID) -> Repository:
        """
        Re-fetch metadata for a connected repository.

        A classified platform failure marks the row `failed` with the platform's
        message instead of raising, so the dashboard can show it on the card.
        """
        repository = await self.get_repository(user_claims, repository_id)
        platform = Platform(repository.platform)

        try:
            outcome = await self.metadata_service.fetch(
                user_claims.sub, platform, repository.repo_owner, repository.repo_name
            )
        except Exception:
            logger.exception("Unexpected error while refreshing repository %s", repository_id)
            outcome = MetadataFetchOutcome(error=REPOSITORY_REFRESH_FAILED)

        now = datetime.now(timezone.utc)
        if outcome.ok:
            values = {
                "status": RepositoryStatus.CONNECTED,
                "metadata": outcome.metadata,
                "is_private": bool(outcome.is_private),
                "error_message": None,
                "last_synced_at": now,
            }
        else:
            values = {
                "status": RepositoryStatus.FAILED,
                "error_message": outcome.error,
                "last_synced_at": now,
            }

        try:
            await self.repository_store.update(user_claims.sub, values, id=repository_id)
        except BaseORMException as e:
            raise RepositoryStoreError(operation="update_repository", store_message=str(e)) from e

        return await self.get_repository(user_claims, repository_id)
