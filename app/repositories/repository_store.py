from app.models import Repository
from app.repositories.owned_store import IOwnedStore, TortoiseOwnedStore


class IRepositoryStore(IOwnedStore[Repository]):
    ...


class TortoiseRepositoryStore(TortoiseOwnedStore[Repository]):
    model = Repository
    default_ordering = ("-created_at",)
