import logging
from typing import Annotated, Any, Dict, List, Optional

from fastapi import Depends
from starlette.concurrency import run_in_threadpool
from tortoise.exceptions import BaseORMException

from app.config import Platform, settings
from app.exceptions.custom_exceptions import (
    RepositoryStoreError,
    ResourceNotFound,
    TokenFormatError,
)
from app.exceptions.exception_constants import (
    REMOTE_LISTING_UNSUPPORTED,
    TOKEN_NOT_FOUND,
    TOKEN_TOO_SHORT,
    TOKEN_VERIFICATION_UNSUPPORTED,
)
from app.repositories.platform_token_store import IPlatformTokenStore, TortoisePlatformTokenStore
from app.schemas.basic import PagePaginationParams
from app.schemas.platform_token import (
    PlatformTokenDBUpsertDTO,
    PlatformTokenResponse,
    SavePlatformTokenBody,
)
from app.utils.auth import UserClaims
from app.utils.constants import PLATFORM_DISPLAY_NAMES
from app.utils.encryption import FernetEncryptionHelper, get_encryption_helper, mask_token
from app.utils.platform_adapters import (
    PlatformAdapterRegistry,
    get_platform_adapter_registry,
    retrieve_adapter_or_die,
)

logger = logging.getLogger(__name__)


class PlatformTokenResolver:
    """Looks up and decrypts the caller's saved token for a platform."""

    def __init__(self, token_store: IPlatformTokenStore, crypto_store: FernetEncryptionHelper):
        self.token_store = token_store
        self.crypto_store = crypto_store

    @classmethod
    def with_dependency(
        cls,
        token_store: Annotated[TortoisePlatformTokenStore, Depends()],
        crypto_store: Annotated[FernetEncryptionHelper, Depends(get_encryption_helper)],
    ) -> "PlatformTokenResolver":
        return cls(token_store=token_store, crypto_store=crypto_store)

    async def resolve(self, user_id: str, platform: Platform) -> Optional[str]:
        token = await self.token_store.find_one(user_id, platform=platform)
        if not token:
            return None
        return self.crypto_store.decrypt(token.access_token)

    async def resolve_or_die(self, user_id: str, platform: Platform) -> str:
        access_token = await self.resolve(user_id, platform)
        if not access_token:
            raise ResourceNotFound(reason=TOKEN_NOT_FOUND)
        return access_token


class PlatformTokenService:

    def __init__(
        self,
        token_store: IPlatformTokenStore,
        crypto_store: FernetEncryptionHelper,
        adapters: PlatformAdapterRegistry,
    ):
        self.token_store = token_store
        self.crypto_store = crypto_store
        self.adapters = adapters
        self.token_resolver = PlatformTokenResolver(token_store, crypto_store)

    @classmethod
    def with_dependency(
        cls,
        token_store: Annotated[TortoisePlatformTokenStore, Depends()],
        crypto_store: Annotated[FernetEncryptionHelper, Depends(get_encryption_helper)],
        adapters: Annotated[PlatformAdapterRegistry, Depends(get_platform_adapter_registry)],
    ) -> "PlatformTokenService":
        return cls(token_store=token_store, crypto_store=crypto_store, adapters=adapters)

    async def save_token(self, user_claims: UserClaims, payload: SavePlatformTokenBody):
        """
        Save or overwrite the caller's token for a platform.

        Only the local length rule is checked here, the platform is never called.
        """
        token = payload.access_token.strip()
        if len(token) < settings.MIN_PLATFORM_TOKEN_LENGTH:
            raise TokenFormatError(
                reason=TOKEN_TOO_SHORT,
                log_message=f"Rejected {payload.platform.value} token of length {len(token)}",
            )

        values = PlatformTokenDBUpsertDTO(
            access_token=self.crypto_store.encrypt(token),
            masked_token=mask_token(token),
            token_type=payload.token_type,
            scopes=payload.scopes,
            expires_at=payload.expires_at,
        )

        try:
            return await self.token_store.upsert(
                user_claims.sub, values.model_dump(), platform=payload.platform
            )
        except BaseORMException as e:
            raise RepositoryStoreError(operation="upsert_token", store_message=str(e)) from e

    async def list_tokens(self, user_claims: UserClaims) -> List[PlatformTokenResponse]:
        tokens = await self.token_store.find_all(user_claims.sub)
        return [PlatformTokenResponse.model_validate(token) for token in tokens]

    async def delete_token(self, user_claims: UserClaims, platform: Platform) -> int:
        try:
            deleted = await self.token_store.delete(user_claims.sub, platform=platform)
        except BaseORMException as e:
            raise RepositoryStoreError(operation="delete_token", store_message=str(e)) from e

        if deleted <= 0:
            raise ResourceNotFound(reason=TOKEN_NOT_FOUND)

        return deleted

    async def verify_token(self, user_claims: UserClaims, platform: Platform) -> Dict[str, Any]:
        adapter = retrieve_adapter_or_die(
            self.adapters,
            platform,
            TOKEN_VERIFICATION_UNSUPPORTED.format(platform=PLATFORM_DISPLAY_NAMES[platform]),
        )
        access_token = await self.token_resolver.resolve_or_die(user_claims.sub, platform)

        return await run_in_threadpool(adapter.verify_token, access_token)

    async def list_remote_repositories(
        self, user_claims: UserClaims, platform: Platform, pagination: PagePaginationParams
    ) -> Dict[str, Any]:
        adapter = retrieve_adapter_or_die(
            self.adapters,
            platform,
            REMOTE_LISTING_UNSUPPORTED.format(platform=PLATFORM_DISPLAY_NAMES[platform]),
        )
        access_token = await self.token_resolver.resolve_or_die(user_claims.sub, platform)

        return await run_in_threadpool(
            adapter.list_user_repositories,
            access_token,
            pagination.page,
            pagination.per_page,
        )
