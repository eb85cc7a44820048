"""Tests for user profile documents."""

import pytest
from conftest import FakeDocumentStore

from sportscards.models.failure import DraftValidationError
from sportscards.services.profile import ProfileService, email_local_part


@pytest.fixture
def profiles(store: FakeDocumentStore) -> ProfileService:
    return ProfileService(store)


class TestDisplayName:
    def test_email_local_part(self) -> None:
        assert email_local_part("sam.smith@example.com") == "sam.smith"

    async def test_falls_back_to_email(self, profiles: ProfileService) -> None:
        """Users without a profile are greeted by their email name."""
        assert await profiles.display_name("uid-1", "sam@example.com") == "sam"

    async def test_uses_profile_name(self, profiles: ProfileService) -> None:
        await profiles.create_profile("uid-1", "Sam Smith", "sam@example.com")

        assert await profiles.display_name("uid-1", "sam@example.com") == "Sam Smith"

    async def test_unreadable_profile_falls_back(
        self, profiles: ProfileService, store: FakeDocumentStore
    ) -> None:
        store.failing.add("get_by_id")

        assert await profiles.display_name("uid-1", "sam@example.com") == "sam"


class TestUpdateName:
    async def test_update_merges_into_profile(
        self, profiles: ProfileService, store: FakeDocumentStore
    ) -> None:
        await profiles.create_profile("uid-1", "Sam", "sam@example.com")
        created_at = store.docs("users")["uid-1"]["createdAt"]

        assert await profiles.update_name("uid-1", "sam@example.com", "  Samantha ") == "Samantha"

        profile = await profiles.get_profile("uid-1")
        assert profile is not None
        assert profile.name == "Samantha"
        assert store.docs("users")["uid-1"]["createdAt"] == created_at

    async def test_blank_name_rejected(
        self, profiles: ProfileService, store: FakeDocumentStore
    ) -> None:
        with pytest.raises(DraftValidationError):
            await profiles.update_name("uid-1", "sam@example.com", "   ")

        assert store.calls == []
