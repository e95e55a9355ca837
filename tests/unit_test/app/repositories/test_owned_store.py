from unittest.mock import AsyncMock, MagicMock, call, patch

import pytest

from app.exceptions.custom_exceptions import RepoHubAPIException
from app.exceptions.exception_constants import MISSING_USER_ID_TITLE, SERVICE_UNAVAILABLE
from app.models import PlatformToken, Profile, Repository
from app.repositories.platform_token_store import IPlatformTokenStore, TortoisePlatformTokenStore
from app.repositories.profile_store import IProfileStore, TortoiseProfileStore
from app.repositories.repository_store import IRepositoryStore, TortoiseRepositoryStore
from app.repositories.owned_store import IOwnedStore
import app.repositories.platform_token_store as token_store_module
import app.repositories.repository_store as repository_store_module


class TestStoreConfiguration:
    def test_repository_store_orders_newest_first(self):
        assert TortoiseRepositoryStore.model is Repository
        assert TortoiseRepositoryStore.default_ordering == ("-created_at",)

    def test_token_store_orders_by_platform(self):
        assert TortoisePlatformTokenStore.model is PlatformToken
        assert TortoisePlatformTokenStore.default_ordering == ("platform",)

    def test_profile_store_model(self):
        assert TortoiseProfileStore.model is Profile

    @pytest.mark.parametrize(
        "interface, implementation",
        [
            (IRepositoryStore, TortoiseRepositoryStore),
            (IPlatformTokenStore, TortoisePlatformTokenStore),
            (IProfileStore, TortoiseProfileStore),
        ],
    )
    def test_stores_implement_their_interface(self, interface, implementation):
        assert IOwnedStore in interface.__mro__
        for name in ("find_all", "find_one", "count", "insert", "update", "delete", "upsert"):
            assert name in vars(IOwnedStore)
            assert callable(getattr(implementation, name))


@pytest.mark.asyncio
class TestOwnerIsRequired:
    @pytest.mark.parametrize("user_id", [None, "", "   "])
    async def test_reads_without_owner_are_rejected(self, user_id):
        store = TortoiseRepositoryStore()

        for call in (store.find_all, store.find_one, store.count):
            with pytest.raises(RepoHubAPIException) as exc:
                await call(user_id)

            assert exc.value.error_type == MISSING_USER_ID_TITLE
            assert exc.value.user_message == SERVICE_UNAVAILABLE

    @pytest.mark.parametrize("user_id", [None, ""])
    async def test_writes_without_owner_are_rejected(self, user_id):
        store = TortoiseRepositoryStore()

        with pytest.raises(RepoHubAPIException):
            await store.insert(user_id, {"repo_url": "https://github.com/acme/widgets"})
        with pytest.raises(RepoHubAPIException):
            await store.update(user_id, {"status": "failed"}, id="x")
        with pytest.raises(RepoHubAPIException):
            await store.delete(user_id, id="x")
        with pytest.raises(RepoHubAPIException):
            await store.upsert(user_id, {"email": "a@b.c"})


PATH_TO_REPOSITORY = (
    f"{repository_store_module.__name__}.{repository_store_module.Repository.__name__}"
)
PATH_TO_REPOSITORY_FILTER = f"{PATH_TO_REPOSITORY}.filter"
PATH_TO_REPOSITORY_CREATE = f"{PATH_TO_REPOSITORY}.create"

PATH_TO_PLATFORM_TOKEN = (
    f"{token_store_module.__name__}.{token_store_module.PlatformToken.__name__}"
)
PATH_TO_PLATFORM_TOKEN_UPSERT = f"{PATH_TO_PLATFORM_TOKEN}.update_or_create"


@pytest.mark.asyncio
class TestQueriesAreScopedToOwner:

    def setup_method(self):
        self.store = TortoiseRepositoryStore()

    @patch(PATH_TO_REPOSITORY_FILTER)
    async def test_find_all_filters_by_owner_and_orders_newest_first(self, mock_filter):
        query = MagicMock()
        query.order_by.return_value.all = AsyncMock(return_value=["row"])
        mock_filter.return_value = query

        result = await self.store.find_all("user-1", platform="github")

        assert result == ["row"]
        mock_filter.assert_called_once_with(user_id="user-1", platform="github")
        query.order_by.assert_called_once_with("-created_at")

    @patch(PATH_TO_REPOSITORY_FILTER)
    async def test_find_all_honours_explicit_ordering(self, mock_filter):
        query = MagicMock()
        query.order_by.return_value.all = AsyncMock(return_value=[])
        mock_filter.return_value = query

        await self.store.find_all("user-1", order_by=("repo_name",))

        query.order_by.assert_called_once_with("repo_name")

    @patch(PATH_TO_REPOSITORY_FILTER)
    async def test_find_one_and_count_filter_by_owner(self, mock_filter):
        query = MagicMock()
        query.first = AsyncMock(return_value=None)
        query.count = AsyncMock(return_value=3)
        mock_filter.return_value = query

        assert await self.store.find_one("user-1", id="repo-1") is None
        assert await self.store.count("user-1") == 3

        assert mock_filter.call_args_list == [
            call(user_id="user-1", id="repo-1"),
            call(user_id="user-1"),
        ]

    @patch(PATH_TO_REPOSITORY_FILTER)
    async def test_update_is_scoped_to_owner(self, mock_filter):
        query = MagicMock()
        query.update = AsyncMock(return_value=1)
        mock_filter.return_value = query

        updated = await self.store.update("user-1", {"status": "failed"}, id="repo-1")

        assert updated == 1
        mock_filter.assert_called_once_with(user_id="user-1", id="repo-1")
        query.update.assert_awaited_once_with(status="failed")

    @patch(PATH_TO_REPOSITORY_FILTER)
    async def test_delete_of_another_users_row_deletes_nothing(self, mock_filter):
        query = MagicMock()
        query.delete = AsyncMock(return_value=0)
        mock_filter.return_value = query

        deleted = await self.store.delete("intruder", id="repo-1")

        assert deleted == 0
        mock_filter.assert_called_once_with(user_id="intruder", id="repo-1")

    @patch(PATH_TO_REPOSITORY_CREATE, new_callable=AsyncMock)
    async def test_insert_stamps_the_owner(self, mock_create):
        mock_create.return_value = "created"

        result = await self.store.insert(
            "user-1", {"repo_url": "https://github.com/acme/widgets", "user_id": "someone-else"}
        )

        assert result == "created"
        assert mock_create.await_args.kwargs["user_id"] == "user-1"


@pytest.mark.asyncio
class TestTokenUpsert:

    def setup_method(self):
        self.store = TortoisePlatformTokenStore()

    @patch(PATH_TO_PLATFORM_TOKEN_UPSERT, new_callable=AsyncMock)
    async def test_upsert_keys_on_owner_and_platform(self, mock_upsert):
        mock_upsert.return_value = ("token-row", True)

        result = await self.store.upsert("user-1", {"access_token": "enc:first"}, platform="github")

        assert result == "token-row"
        mock_upsert.assert_awaited_once_with(
            defaults={"access_token": "enc:first"}, user_id="user-1", platform="github"
        )

    @patch(PATH_TO_PLATFORM_TOKEN_UPSERT, new_callable=AsyncMock)
    async def test_saving_twice_targets_the_same_row_with_latest_value(self, mock_upsert):
        mock_upsert.return_value = ("token-row", False)

        await self.store.upsert("user-1", {"access_token": "enc:first"}, platform="github")
        await self.store.upsert("user-1", {"access_token": "enc:second"}, platform="github")

        first, second = mock_upsert.await_args_list
        assert first.kwargs["user_id"] == second.kwargs["user_id"] == "user-1"
        assert first.kwargs["platform"] == second.kwargs["platform"] == "github"
        assert second.kwargs["defaults"] == {"access_token": "enc:second"}
