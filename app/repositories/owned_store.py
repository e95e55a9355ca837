"""
Owner scoped persistence gateway.

Every read or write goes through `TortoiseOwnedStore` and takes the caller's
`user_id`, so a query can never reach a row owned by somebody else. Concrete
stores only pick the model and the default ordering.
"""

from abc import abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, List, Optional, Protocol, Sequence, Type, TypeVar

from tortoise.models import Model

from app.exceptions.custom_exceptions import RepoHubAPIException
from app.exceptions.exception_constants import (
    MISSING_USER_ID_LOG_MESSAGE,
    MISSING_USER_ID_TITLE,
    SERVICE_UNAVAILABLE,
)

T = TypeVar("T")
M = TypeVar("M", bound=Model)


class IOwnedStore(Protocol[T]):
    @abstractmethod
    async def find_all(
        self, user_id: str, order_by: Optional[Sequence[str]] = None, **filters: Any
    ) -> List[T]: ...

    @abstractmethod
    async def find_one(self, user_id: str, **filters: Any) -> Optional[T]: ...

    @abstractmethod
    async def count(self, user_id: str, **filters: Any) -> int: ...

    @abstractmethod
    async def insert(self, user_id: str, values: Dict[str, Any]) -> T: ...

    @abstractmethod
    async def update(self, user_id: str, values: Dict[str, Any], **filters: Any) -> int: ...

    @abstractmethod
    async def delete(self, user_id: str, **filters: Any) -> int: ...

    @abstractmethod
    async def upsert(self, user_id: str, values: Dict[str, Any], **keys: Any) -> T: ...


def internal_error(log_message: str, error_type: str, **kwargs):
    return RepoHubAPIException(
        user_message=SERVICE_UNAVAILABLE,
        log_message=log_message,
        error_type=error_type,
        log_level="exception",
        **kwargs,
    )


class TortoiseOwnedStore(Generic[M]):

    model: ClassVar[Type[Model]]
    default_ordering: ClassVar[Sequence[str]] = ("-created_at",)

    class InternalExceptions(Enum):
        MISSING_USER_ID = {
            "error_type": MISSING_USER_ID_TITLE,
            "log_message": MISSING_USER_ID_LOG_MESSAGE,
        }

    def _require_owner(self, user_id: str) -> None:
        if not user_id or not str(user_id).strip():
            raise internal_error(**self.InternalExceptions.MISSING_USER_ID.value)

    def _owned(self, user_id: str, **filters: Any):
        self._require_owner(user_id)
        return self.model.filter(user_id=user_id, **filters)

    async def find_all(
        self, user_id: str, order_by: Optional[Sequence[str]] = None, **filters: Any
    ) -> List[M]:
        ordering = order_by if order_by is not None else self.default_ordering
        return await self._owned(user_id, **filters).order_by(*ordering).all()

    async def find_one(self, user_id: str, **filters: Any) -> Optional[M]:
        return await self._owned(user_id, **filters).first()

    async def count(self, user_id: str, **filters: Any) -> int:
        return await self._owned(user_id, **filters).count()

    async def insert(self, user_id: str, values: Dict[str, Any]) -> M:
        self._require_owner(user_id)
        return await self.model.create(**{**values, "user_id": user_id})

    async def update(self, user_id: str, values: Dict[str, Any], **filters: Any) -> int:
        return await self._owned(user_id, **filters).update(**values)

    async def delete(self, user_id: str, **filters: Any) -> int:
        return await self._owned(user_id, **filters).delete()

    async def upsert(self, user_id: str, values: Dict[str, Any], **keys: Any) -> M:
        self._require_owner(user_id)
        instance, _ = await self.model.update_or_create(
            defaults=values, user_id=user_id, **keys
        )
        return instance
