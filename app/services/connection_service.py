"""
Repository connection workflow.

    idle -> validating -> checking-duplicate -> fetching-metadata -> persisting -> connected

Any failing step short-circuits to `failed` and raises. The metadata step never
fails the workflow: an unreachable or private repository is connected with empty
metadata.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from fastapi import Depends
from tortoise.exceptions import BaseORMException, IntegrityError

from app.config import RepositoryStatus, settings
from app.exceptions.custom_exceptions import (
    DuplicateRepository,
    RepositoryLimitReached,
    RepositoryStoreError,
    RepositoryUrlFormatError,
    RepositoryUrlParseError,
)
from app.exceptions.exception_constants import (
    INVALID_REPOSITORY_URL,
    REPOSITORY_LIMIT_REACHED,
    UNPARSABLE_REPOSITORY_URL,
)
from app.repositories.repository_store import IRepositoryStore, TortoiseRepositoryStore
from app.schemas.repository import ConnectRepositoryBody, RepositoryDBCreateDTO
from app.services.metadata_service import MetadataFetchOutcome, RepositoryMetadataService
from app.utils.auth import UserClaims
from app.utils.constants import PLATFORM_DISPLAY_NAMES
from app.utils.url_parser import (
    REPOSITORY_URL_EXAMPLES,
    parse_repository_url,
    validate_repository_url,
)

logger = logging.getLogger(__name__)


class ConnectionStep(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    CHECKING_DUPLICATE = "checking-duplicate"
    FETCHING_METADATA = "fetching-metadata"
    PERSISTING = "persisting"
    CONNECTED = "connected"
    FAILED = "failed"


class RepositoryConnectionService:

    def __init__(
        self,
        repository_store: IRepositoryStore,
        metadata_service: RepositoryMetadataService,
    ):
        self.repository_store = repository_store
        self.metadata_service = metadata_service
        self.step = ConnectionStep.IDLE

    @classmethod
    def with_dependency(
        cls,
        repository_store: Annotated[TortoiseRepositoryStore, Depends()],
        metadata_service: Annotated[
            RepositoryMetadataService, Depends(RepositoryMetadataService.with_dependency)
        ],
    ) -> "RepositoryConnectionService":
        return cls(repository_store=repository_store, metadata_service=metadata_service)

    def _advance(self, step: ConnectionStep, repo_url: str) -> None:
        logger.debug("Repository connection %s: %s -> %s", repo_url, self.step.value, step.value)
        self.step = step

    async def connect(self, user_claims: UserClaims, payload: ConnectRepositoryBody):
        try:
            return await self._connect(user_claims, payload)
        except Exception:
            self._advance(ConnectionStep.FAILED, payload.repo_url)
            raise

    async def _connect(self, user_claims: UserClaims, payload: ConnectRepositoryBody):
        user_id = user_claims.sub
        platform = payload.platform
        repo_url = payload.repo_url
        limit = settings.MAX_REPOSITORIES_PER_USER

        # best-effort: two concurrent requests can both pass this check
        current = await self.repository_store.count(user_id)
        if current >= limit:
            raise RepositoryLimitReached(
                reason=REPOSITORY_LIMIT_REACHED.format(limit=limit), limit=limit
            )

        self._advance(ConnectionStep.VALIDATING, repo_url)
        if not validate_repository_url(repo_url, platform):
            raise RepositoryUrlFormatError(
                reason=INVALID_REPOSITORY_URL.format(
                    platform=PLATFORM_DISPLAY_NAMES[platform],
                    example=REPOSITORY_URL_EXAMPLES[platform],
                ),
                log_message=f"Rejected {platform.value} URL: {repo_url}",
            )

        parsed = parse_repository_url(repo_url, platform)
        if parsed is None:
            raise RepositoryUrlParseError(
                reason=UNPARSABLE_REPOSITORY_URL,
                log_message=f"Could not parse {platform.value} URL: {repo_url}",
            )

        self._advance(ConnectionStep.CHECKING_DUPLICATE, repo_url)
        if await self.repository_store.find_one(user_id, repo_url=repo_url):
            raise DuplicateRepository(repo_url=repo_url)

        self._advance(ConnectionStep.FETCHING_METADATA, repo_url)
        outcome = await self._fetch_metadata_best_effort(user_id, platform, parsed.owner, parsed.name)

        self._advance(ConnectionStep.PERSISTING, repo_url)
        values = RepositoryDBCreateDTO(
            platform=platform,
            repo_url=repo_url,
            repo_name=parsed.name,
            repo_owner=parsed.owner,
            is_private=bool(outcome.is_private) if outcome.ok else False,
            status=RepositoryStatus.CONNECTED,
            metadata=outcome.metadata if outcome.ok else {},
            last_synced_at=datetime.now(timezone.utc),
        )

        try:
            created = await self.repository_store.insert(user_id, values.model_dump())
        except IntegrityError as e:
            raise DuplicateRepository(
                repo_url=repo_url, log_message=f"Unique constraint rejected {repo_url}"
            ) from e
        except BaseORMException as e:
            raise RepositoryStoreError(operation="insert_repository", store_message=str(e)) from e

        self._advance(ConnectionStep.CONNECTED, repo_url)
        return created

    async def _fetch_metadata_best_effort(self, user_id, platform, owner, name) -> MetadataFetchOutcome:
        try:
            outcome = await self.metadata_service.fetch(user_id, platform, owner, name)
        except Exception:
            logger.exception(
                "Unexpected error while fetching metadata for %s/%s on %s", owner, name, platform.value
            )
            return MetadataFetchOutcome(error="unexpected", is_private=False)

        if not outcome.ok:
            logger.warning(
                "Connecting %s/%s on %s without metadata: %s", owner, name, platform.value, outcome.error
            )
        return outcome
