from app.models import Profile
from app.repositories.owned_store import IOwnedStore, TortoiseOwnedStore


class IProfileStore(IOwnedStore[Profile]):
    ...


class TortoiseProfileStore(TortoiseOwnedStore[Profile]):
    model = Profile
