import logging
from typing import Annotated

from fastapi import Depends
from tortoise.exceptions import BaseORMException

from app.exceptions.custom_exceptions import RepositoryStoreError, ResourceNotFound
from app.exceptions.exception_constants import PROFILE_NOT_FOUND
from app.models import Profile
from app.repositories.profile_store import IProfileStore, TortoiseProfileStore
from app.schemas.user import WebhookUserData
from app.utils.auth import UserClaims

logger = logging.getLogger(__name__)


class ProfileService:

    def __init__(self, profile_store: IProfileStore):
        self.profile_store = profile_store

    @classmethod
    def with_dependency(
        cls,
        profile_store: Annotated[TortoiseProfileStore, Depends()],
    ) -> "ProfileService":
        return cls(profile_store)

    async def get_profile(self, user_claims: UserClaims) -> Profile:
        profile = await self.profile_store.find_one(user_claims.sub)
        if not profile:
            raise ResourceNotFound(reason=PROFILE_NOT_FOUND)
        return profile

    async def sync_from_webhook(self, user_data: WebhookUserData) -> Profile:
        """Create or refresh the profile row of a Clerk user."""
        try:
            profile = await self.profile_store.upsert(
                user_data.id,
                {
                    "email": user_data.primary_email,
                    "full_name": user_data.full_name,
                    "avatar_url": user_data.image_url,
                },
            )
        except BaseORMException as e:
            raise RepositoryStoreError(operation="upsert_profile", store_message=str(e)) from e

        logger.info(f"Synced profile for user {user_data.id}")
        return profile
