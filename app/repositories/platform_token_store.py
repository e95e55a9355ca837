from app.models import PlatformToken
from app.repositories.owned_store import IOwnedStore, TortoiseOwnedStore


class IPlatformTokenStore(IOwnedStore[PlatformToken]):
    ...


class TortoisePlatformTokenStore(TortoiseOwnedStore[PlatformToken]):
    model = PlatformToken
    default_ordering = ("platform",)
