"""Unit tests for EventService.

Tests cover:
- Event CRUD scoped to the owner
- Attaching catalog recipes, including duplicate protection
- Custom recipes
- Detaching recipes
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest
from prometheus_client import REGISTRY

from event_recipes.schemas.event import EventCreateRequest, EventUpdateRequest
from event_recipes.services.events import (
    DuplicateRecipeError,
    EventNotFoundError,
    RecipeValidationError,
)
from tests.factories.events import (
    CustomRecipeRequestFactory,
    EventCreateRequestFactory,
    meal_payload,
)


if TYPE_CHECKING:
    from event_recipes.services.events import EventService
    from tests.factories.database import (
        FakeDatabase,
        FakeEventRepository,
        FakeRecipeRepository,
    )

pytestmark = pytest.mark.unit


def _sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(f"event_recipes_{name}", labels or None) or 0.0


class TestListEvents:
    """Tests for list_events."""

    async def test_only_own_events_newest_first(
        self,
        service: EventService,
        fake_db: FakeDatabase,
    ) -> None:
        """Should list the caller's events ordered by date descending."""
        await service.create_event(
            "user-1",
            EventCreateRequestFactory.build(name="Old", date=dt.date(2024, 1, 1)),
        )
        await service.create_event(
            "user-1",
            EventCreateRequestFactory.build(name="New", date=dt.date(2025, 1, 1)),
        )
        await service.create_event("user-2", EventCreateRequestFactory.build())

        events = await service.list_events("user-1")

        assert [e.name for e in events] == ["New", "Old"]
        assert all(e.recipes == [] for e in events)

    async def test_no_events(self, service: EventService) -> None:
        """Should return an empty list for a new user."""
        assert await service.list_events("user-1") == []


class TestGetEvent:
    """Tests for get_event."""

    async def test_foreign_event_not_found(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should hide another user's event."""
        with pytest.raises(EventNotFoundError):
            await service.get_event(10, "user-2")

    async def test_own_event(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should return the event with title and name."""
        event = await service.get_event(10, "user-1")

        assert event.title == event.name == "Sunday brunch"


    @pytest.mark.parametrize("event_id", [0, -1, 2**31])
    async def test_out_of_range_id_skips_database(
        self,
        service: EventService,
        event_repository: FakeEventRepository,
        monkeypatch: pytest.MonkeyPatch,
        event_id: int,
    ) -> None:
        """Should report ids no stored event can have without querying."""
        lookup = AsyncMock()
        monkeypatch.setattr(event_repository, "get_with_recipes", lookup)

        with pytest.raises(EventNotFoundError):
            await service.get_event(event_id, "user-1")

        lookup.assert_not_awaited()


class TestCreateEvent:
    """Tests for create_event."""

    async def test_creates_with_empty_recipes(self, service: EventService) -> None:
        """Should return the new event with an empty recipe list."""
        request = EventCreateRequest.model_validate(
            {"title": "Taco night", "date": "2025-07-04", "location": "Backyard"}
        )

        event = await service.create_event("user-1", request)

        assert event.name == "Taco night"
        assert event.location == "Backyard"
        assert event.image_url == ""
        assert event.recipes == []


class TestUpdateEvent:
    """Tests for update_event."""

    async def test_updates_provided_fields(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should change only the fields that were sent."""
        request = EventUpdateRequest.model_validate({"location": "Park"})

        event = await service.update_event(10, "user-1", request)

        assert event.location == "Park"
        assert event.name == "Sunday brunch"

    async def test_title_renames(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should accept title as the new name."""
        request = EventUpdateRequest.model_validate({"title": "Late brunch"})

        event = await service.update_event(10, "user-1", request)

        assert event.title == "Late brunch"

    async def test_foreign_event(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should refuse to update another user's event."""
        with pytest.raises(EventNotFoundError):
            await service.update_event(10, "user-2", EventUpdateRequest(name="Mine"))

        assert seeded_event["name"] == "Sunday brunch"


class TestDeleteEvent:
    """Tests for delete_event."""

    async def test_removes_event_and_recipes(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should delete the event together with all of its recipes."""
        await service.add_recipe(10, "user-1", meal_payload("52977"))
        await service.add_recipe(10, "user-1", meal_payload("53000"))
        await service.add_custom_recipe(
            10, "user-1", CustomRecipeRequestFactory.build()
        )

        await service.delete_event(10, "user-1")

        assert 10 not in fake_db.events
        assert fake_db.recipes_for(10) == []

    async def test_missing_event(self, service: EventService) -> None:
        """Should report a missing event."""
        with pytest.raises(EventNotFoundError):
            await service.delete_event(99, "user-1")

    async def test_foreign_event_untouched(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should not delete another user's event."""
        with pytest.raises(EventNotFoundError):
            await service.delete_event(10, "user-2")

        assert 10 in fake_db.events


class TestAddRecipe:
    """Tests for add_recipe."""

    async def test_attaches_recipe(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should store the recipe and return the updated event."""
        before = _sample("recipes_attached_total", kind="imported")

        event = await service.add_recipe(10, "user-1", meal_payload("52977"))

        assert len(event.recipes) == 1
        recipe = event.recipes[0]
        assert recipe.id_meal == "52977"
        assert recipe.str_meal == "Corba"
        assert recipe.ingredients == "1 cup Lentils, 1 large Onion"
        assert recipe.str_category == "Side"
        assert recipe.is_custom is False
        assert fake_db.recipes_for(10)[0]["meal_data"] == meal_payload("52977")
        assert _sample("recipes_attached_total", kind="imported") == before + 1

    async def test_runs_in_transaction(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should do the ownership check and insert in one transaction."""
        await service.add_recipe(10, "user-1", meal_payload())

        assert fake_db.transactions == 1

    async def test_same_recipe_twice_conflicts(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should reject the second attach of the same external id."""
        before = _sample("duplicate_recipes_rejected_total")

        first = await service.add_recipe(10, "user-1", meal_payload("52977"))
        with pytest.raises(DuplicateRecipeError) as exc_info:
            await service.add_recipe(10, "user-1", meal_payload("52977"))

        assert len(first.recipes) == 1
        assert exc_info.value.status_code == 409
        assert len(fake_db.recipes_for(10)) == 1
        assert _sample("duplicate_recipes_rejected_total") == before + 1

    async def test_unique_index_race(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        recipe_repository: FakeRecipeRepository,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should map a unique index violation to a conflict."""
        await service.add_recipe(10, "user-1", meal_payload("52977"))
        # Simulate a concurrent request that passed the existence check
        recipe_repository.meal_exists = AsyncMock(return_value=False)  # type: ignore[method-assign]

        with pytest.raises(DuplicateRecipeError):
            await service.add_recipe(10, "user-1", meal_payload("52977"))

        assert len(fake_db.recipes_for(10)) == 1

    async def test_same_recipe_on_other_event(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should allow the same external id on different events."""
        other = await service.create_event("user-1", EventCreateRequestFactory.build())

        await service.add_recipe(10, "user-1", meal_payload("52977"))
        event = await service.add_recipe(other.id, "user-1", meal_payload("52977"))

        assert len(event.recipes) == 1

    async def test_numeric_external_id(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should store a numeric idMeal as text."""
        event = await service.add_recipe(10, "user-1", meal_payload(52977))

        assert event.recipes[0].id_meal == "52977"

    @pytest.mark.parametrize("missing", ["idMeal", "strMeal"])
    async def test_required_fields(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
        missing: str,
    ) -> None:
        """Should reject payloads without idMeal or strMeal."""
        payload = meal_payload()
        del payload[missing]

        with pytest.raises(RecipeValidationError) as exc_info:
            await service.add_recipe(10, "user-1", payload)

        assert exc_info.value.status_code == 400
        assert exc_info.value.missing == [missing]
        assert fake_db.recipes == []

    async def test_foreign_event_no_write(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should refuse another user's event without writing anything."""
        with pytest.raises(EventNotFoundError):
            await service.add_recipe(10, "user-2", meal_payload())

        assert fake_db.recipes == []

    async def test_missing_event_no_write(
        self,
        service: EventService,
        fake_db: FakeDatabase,
    ) -> None:
        """Should report an unknown event without writing anything."""
        with pytest.raises(EventNotFoundError):
            await service.add_recipe(404, "user-1", meal_payload())

        assert fake_db.recipes == []


    async def test_out_of_range_event_before_validation(
        self,
        service: EventService,
        fake_db: FakeDatabase,
    ) -> None:
        """Should report an oversized event id ahead of payload errors."""
        with pytest.raises(EventNotFoundError):
            await service.add_recipe(2**31, "user-1", {})

        assert fake_db.recipes == []


class TestAddCustomRecipe:
    """Tests for add_custom_recipe."""

    async def test_attaches_custom_recipe(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should store a custom recipe with no external id or payload."""
        request = CustomRecipeRequestFactory.build(category=None, area=None)

        event = await service.add_custom_recipe(10, "user-1", request)

        recipe = event.recipes[0]
        assert recipe.is_custom is True
        assert recipe.id_meal is None
        assert recipe.ingredients == "200g Flour, 2 Eggs"
        assert recipe.str_category == "Unknown"
        assert "meal_data" not in fake_db.recipes_for(10)[0]

    async def test_custom_recipes_never_conflict(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should allow several custom recipes on one event."""
        await service.add_custom_recipe(10, "user-1", CustomRecipeRequestFactory.build())
        event = await service.add_custom_recipe(
            10, "user-1", CustomRecipeRequestFactory.build()
        )

        assert len(event.recipes) == 2

    async def test_foreign_event(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should refuse another user's event."""
        with pytest.raises(EventNotFoundError):
            await service.add_custom_recipe(
                10, "user-2", CustomRecipeRequestFactory.build()
            )

        assert fake_db.recipes == []


class TestRemoveRecipe:
    """Tests for remove_recipe and remove_custom_recipe."""

    async def test_removes_by_external_id(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should detach the matching catalog recipe only."""
        await service.add_recipe(10, "user-1", meal_payload("52977"))
        await service.add_recipe(10, "user-1", meal_payload("53000"))

        event = await service.remove_recipe(10, "user-1", "52977")

        assert [r.id_meal for r in event.recipes] == ["53000"]

    async def test_unknown_external_id_is_noop(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should return the unchanged event for an unknown external id."""
        await service.add_recipe(10, "user-1", meal_payload("52977"))

        event = await service.remove_recipe(10, "user-1", "00000")

        assert len(event.recipes) == 1

    async def test_foreign_event(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should refuse another user's event."""
        await service.add_recipe(10, "user-1", meal_payload("52977"))

        with pytest.raises(EventNotFoundError):
            await service.remove_recipe(10, "user-2", "52977")

        assert len(fake_db.recipes_for(10)) == 1

    async def test_removes_custom_by_id(
        self,
        service: EventService,
        fake_db: FakeDatabase,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should detach a custom recipe by its row id."""
        event = await service.add_custom_recipe(
            10, "user-1", CustomRecipeRequestFactory.build()
        )
        recipe_id = event.recipes[0].id

        event = await service.remove_custom_recipe(10, "user-1", recipe_id)

        assert event.recipes == []

    async def test_custom_route_keeps_catalog_recipes(
        self,
        service: EventService,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should not detach catalog recipes through the custom route."""
        event = await service.add_recipe(10, "user-1", meal_payload("52977"))

        event = await service.remove_custom_recipe(10, "user-1", event.recipes[0].id)

        assert len(event.recipes) == 1

    async def test_out_of_range_custom_id_is_noop(
        self,
        service: EventService,
        recipe_repository: FakeRecipeRepository,
        monkeypatch: pytest.MonkeyPatch,
        seeded_event: dict[str, Any],
    ) -> None:
        """Should return the unchanged event for an oversized custom id."""
        await service.add_custom_recipe(10, "user-1", CustomRecipeRequestFactory.build())
        delete_custom = AsyncMock(return_value=0)
        monkeypatch.setattr(recipe_repository, "delete_custom", delete_custom)

        event = await service.remove_custom_recipe(10, "user-1", 2**31)

        assert len(event.recipes) == 1
        delete_custom.assert_not_awaited()
