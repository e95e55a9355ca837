import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends
from starlette.concurrency import run_in_threadpool

from app.config import Platform
from app.exceptions.custom_exceptions import PlatformFetchFailed
from app.exceptions.exception_constants import PLATFORM_FETCH_FAILED_LOG_MESSAGE
from app.schemas.platform import FetchFailureReason
from app.schemas.repository import FetchMetadataBody, FetchMetadataResponse, metadata_model_for
from app.services.platform_tokens_service import PlatformTokenResolver
from app.utils.auth import UserClaims
from app.utils.platform_adapters import PlatformAdapterRegistry, get_platform_adapter_registry

logger = logging.getLogger(__name__)


@dataclass
class MetadataFetchOutcome:
    metadata: Dict[str, Any] = field(default_factory=dict)
    is_private: Optional[bool] = None
    error: Optional[str] = None
    reason: Optional[FetchFailureReason] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RepositoryMetadataService:

    def __init__(self, token_resolver: PlatformTokenResolver, adapters: PlatformAdapterRegistry):
        self.token_resolver = token_resolver
        self.adapters = adapters

    @classmethod
    def with_dependency(
        cls,
        token_resolver: Annotated[PlatformTokenResolver, Depends(PlatformTokenResolver.with_dependency)],
        adapters: Annotated[PlatformAdapterRegistry, Depends(get_platform_adapter_registry)],
    ) -> "RepositoryMetadataService":
        return cls(token_resolver=token_resolver, adapters=adapters)

    async def fetch(self, user_id: str, platform: Platform, owner: str, repo: str) -> MetadataFetchOutcome:
        """
        Look a repository up on its platform with the caller's saved token, if any.

        Platforms without an adapter resolve to empty metadata and a public repository
        without any outbound call.
        """
        adapter = self.adapters.get(platform)
        if adapter is None:
            return MetadataFetchOutcome(metadata={}, is_private=False)

        token = await self.token_resolver.resolve(user_id, platform)
        result = await run_in_threadpool(adapter.fetch_repo, owner, repo, token)

        if not result.ok:
            logger.info(
                PLATFORM_FETCH_FAILED_LOG_MESSAGE.format(
                    platform=platform.value, owner=owner, repo=repo, reason=result.reason.value
                )
            )
            return MetadataFetchOutcome(
                error=result.error, reason=result.reason, is_private=result.is_private
            )

        raw = adapter.to_metadata(result.data, result.languages)
        metadata = metadata_model_for(platform).model_validate(raw.model_dump())

        return MetadataFetchOutcome(
            metadata=metadata.model_dump(exclude_none=True),
            is_private=bool(result.is_private),
        )

    async def fetch_metadata(
        self, user_claims: UserClaims, payload: FetchMetadataBody
    ) -> FetchMetadataResponse:
        outcome = await self.fetch(user_claims.sub, payload.platform, payload.owner, payload.repo)

        if not outcome.ok:
            raise PlatformFetchFailed(
                reason=outcome.error,
                error_type=outcome.reason.value,
                is_private=outcome.is_private,
            )

        return FetchMetadataResponse(metadata=outcome.metadata, is_private=bool(outcome.is_private))
