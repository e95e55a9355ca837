import datetime
from enum import Enum
from typing import Any, Dict, List
from uuid import uuid4

from app.config import Platform, RepositoryStatus
from app.models import PlatformToken, Profile, Repository


def _now():
    return datetime.datetime.now(datetime.timezone.utc)


def _same(actual, expected) -> bool:
    return actual == expected or str(actual) == str(expected)


def _sort_value(value):
    return value.value if isinstance(value, Enum) else value


class FakeOwnedStore:
    """
    In-memory stand-in for `TortoiseOwnedStore`.

    Every call is recorded in `received_calls` as `(method_name, args, kwargs)` and a
    method can be made to fail with `set_exception`.
    """

    default_ordering = ("-created_at",)

    def __init__(self):
        self.rows: List[Any] = []
        self.received_calls = []
        self.exceptions: Dict[str, Exception] = {}

    def build(self, **values):
        raise NotImplementedError

    def set_fake_data(self, rows):
        self.rows = list(rows)

    def set_exception(self, method_name: str, exception: Exception):
        self.exceptions[method_name] = exception

    def _record(self, method_name, *args, **kwargs):
        self.received_calls.append((method_name, args, kwargs))
        if method_name in self.exceptions:
            raise self.exceptions[method_name]

    def called(self, method_name) -> List[tuple]:
        return [call for call in self.received_calls if call[0] == method_name]

    def _matching(self, user_id, filters):
        return [
            row
            for row in self.rows
            if row.user_id == user_id
            and all(_same(getattr(row, key, None), value) for key, value in filters.items())
        ]

    async def find_all(self, user_id, order_by=None, **filters):
        self._record("find_all", user_id, order_by=order_by, **filters)
        rows = self._matching(user_id, filters)
        for key in reversed(list(order_by if order_by is not None else self.default_ordering)):
            field = key.lstrip("-")
            rows.sort(key=lambda row: _sort_value(getattr(row, field)), reverse=key.startswith("-"))
        return rows

    async def find_one(self, user_id, **filters):
        self._record("find_one", user_id, **filters)
        rows = self._matching(user_id, filters)
        return rows[0] if rows else None

    async def count(self, user_id, **filters):
        self._record("count", user_id, **filters)
        return len(self._matching(user_id, filters))

    async def insert(self, user_id, values):
        self._record("insert", user_id, values)
        row = self.build(**{**values, "user_id": user_id})
        self.rows.append(row)
        return row

    async def update(self, user_id, values, **filters):
        self._record("update", user_id, values, **filters)
        rows = self._matching(user_id, filters)
        for row in rows:
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = _now()
        return len(rows)

    async def delete(self, user_id, **filters):
        self._record("delete", user_id, **filters)
        doomed = self._matching(user_id, filters)
        self.rows = [row for row in self.rows if row not in doomed]
        return len(doomed)

    async def upsert(self, user_id, values, **keys):
        self._record("upsert", user_id, values, **keys)
        existing = self._matching(user_id, keys)
        if existing:
            row = existing[0]
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = _now()
            return row

        row = self.build(user_id=user_id, **keys, **values)
        self.rows.append(row)
        return row


class FakeRepositoryStore(FakeOwnedStore):
    def build(self, **values):
        return make_fake_repository(**values)


class FakePlatformTokenStore(FakeOwnedStore):
    default_ordering = ("platform",)

    def build(self, **values):
        return make_fake_platform_token(**values)


class FakeProfileStore(FakeOwnedStore):
    def build(self, **values):
        return make_fake_profile(**values)


def make_fake_repository(**overrides) -> Repository:
    now = overrides.get("created_at", _now())
    return Repository(
        id=overrides.get("id", uuid4()),
        user_id=overrides.get("user_id", "fake-user"),
        platform=overrides.get("platform", Platform.GITHUB),
        repo_url=overrides.get("repo_url", "https://github.com/acme/widgets"),
        repo_name=overrides.get("repo_name", "widgets"),
        repo_owner=overrides.get("repo_owner", "acme"),
        is_private=overrides.get("is_private", False),
        status=overrides.get("status", RepositoryStatus.CONNECTED),
        error_message=overrides.get("error_message"),
        metadata=overrides.get("metadata", {}),
        last_synced_at=overrides.get("last_synced_at"),
        created_at=now,
        updated_at=overrides.get("updated_at", now),
    )


def make_fake_platform_token(**overrides) -> PlatformToken:
    now = _now()
    return PlatformToken(
        id=overrides.get("id", uuid4()),
        user_id=overrides.get("user_id", "fake-user"),
        platform=overrides.get("platform", Platform.GITHUB),
        access_token=overrides.get("access_token", "enc:ghp_1234567890abcdef"),
        masked_token=overrides.get("masked_token", "ghp_********cdef"),
        token_type=overrides.get("token_type", "bearer"),
        scopes=overrides.get("scopes"),
        expires_at=overrides.get("expires_at"),
        created_at=overrides.get("created_at", now),
        updated_at=overrides.get("updated_at", now),
    )


def make_fake_profile(**overrides) -> Profile:
    now = _now()
    return Profile(
        id=overrides.get("id", uuid4()),
        user_id=overrides.get("user_id", "fake-user"),
        email=overrides.get("email", "fake@example.com"),
        full_name=overrides.get("full_name", "Fake User"),
        avatar_url=overrides.get("avatar_url"),
        created_at=overrides.get("created_at", now),
        updated_at=overrides.get("updated_at", now),
    )


def repositories_created_in_order(count: int, user_id: str = "fake-user", **overrides) -> List[Repository]:
    """Repositories whose created_at grows with their index, oldest first."""
    base = _now() - datetime.timedelta(days=count)
    return [
        make_fake_repository(
            user_id=user_id,
            repo_url=f"https://github.com/acme/repo-{index}",
            repo_name=f"repo-{index}",
            created_at=base + datetime.timedelta(days=index),
            **overrides,
        )
        for index in range(count)
    ]
