from __future__ import annotations

import pytest

from eventpanel.errors import NotFoundError, ValidationError
from eventpanel.models.enums import Category, EventStatus
from eventpanel.models.event import EventCreate, EventUpdate
from eventpanel.services.event_service import normalize_time


async def test_create_starts_not_completed_with_unique_ids(event_service, event_fields):
    first = await event_service.create(EventCreate(**event_fields))
    second = await event_service.create(EventCreate(**event_fields))

    assert first.status == EventStatus.NOT_COMPLETED
    assert second.status == EventStatus.NOT_COMPLETED
    assert first.id != second.id
    assert first.time == "14:30"
    assert first.date.isoformat() == "2026-07-04"


@pytest.mark.parametrize("field", ["title", "date", "time", "location", "description"])
async def test_create_rejects_missing_required_field(event_service, event_fields, field):
    event_fields.pop(field)
    with pytest.raises(ValidationError, match=field):
        await event_service.create(EventCreate(**event_fields))


@pytest.mark.parametrize("field", ["title", "location", "description", "time"])
async def test_create_rejects_blank_required_field(event_service, event_store, event_fields, field):
    event_fields[field] = "   "
    with pytest.raises(ValidationError):
        await event_service.create(EventCreate(**event_fields))
    assert event_store.rows == {}


async def test_create_treats_empty_package_and_category_as_absent(event_service, event_fields):
    event = await event_service.create(EventCreate(**event_fields, category="", packageId=""))
    assert event.category is None
    assert event.package_id is None


async def test_create_rejects_unknown_category(event_service, event_fields):
    with pytest.raises(ValidationError, match="Invalid category"):
        await event_service.create(EventCreate(**event_fields, category="Funerals"))


async def test_create_links_package_of_same_category(event_service, event_fields, wedding_package):
    event = await event_service.create(
        EventCreate(**event_fields, category="Weddings", packageId=wedding_package.id)
    )
    assert event.package_id == wedding_package.id


async def test_create_rejects_package_from_other_category(event_service, event_fields, birthday_package):
    with pytest.raises(ValidationError, match="belongs to 'Birthdays'"):
        await event_service.create(
            EventCreate(**event_fields, category="Weddings", packageId=birthday_package.id)
        )


async def test_create_rejects_unknown_package(event_service, event_fields):
    with pytest.raises(ValidationError, match="does not exist"):
        await event_service.create(EventCreate(**event_fields, category="Weddings", packageId="nope"))


async def test_create_requires_category_with_package(event_service, event_fields, wedding_package):
    with pytest.raises(ValidationError, match="category is required"):
        await event_service.create(EventCreate(**event_fields, packageId=wedding_package.id))


async def test_create_rejects_invalid_time(event_service, event_fields):
    event_fields["time"] = "half past two"
    with pytest.raises(ValidationError, match="Invalid time"):
        await event_service.create(EventCreate(**event_fields))


async def test_list_returns_all_in_insertion_order(event_service, event_fields):
    created = []
    for title in ("A", "B", "C"):
        created.append(await event_service.create(EventCreate(**{**event_fields, "title": title})))
    listed = await event_service.list()
    assert [event.id for event in listed] == [event.id for event in created]


async def test_complete_is_idempotent(event_service, event_fields):
    event = await event_service.create(EventCreate(**event_fields))

    once = await event_service.complete(event.id)
    twice = await event_service.complete(event.id)

    assert once.status == EventStatus.COMPLETED
    assert twice.status == EventStatus.COMPLETED


async def test_complete_missing_event(event_service):
    with pytest.raises(NotFoundError):
        await event_service.complete("missing")


async def test_delete_then_get_is_not_found(event_service, event_fields):
    event = await event_service.create(EventCreate(**event_fields))
    await event_service.delete(event.id)

    with pytest.raises(NotFoundError):
        await event_service.get(event.id)
    with pytest.raises(NotFoundError):
        await event_service.delete(event.id)


async def test_update_merges_only_provided_fields(event_service, event_fields):
    event = await event_service.create(EventCreate(**event_fields))

    updated = await event_service.update(event.id, EventUpdate(location="Town Hall"))

    assert updated.location == "Town Hall"
    assert updated.title == event.title
    assert updated.description == event.description


async def test_update_never_changes_status(event_service, event_fields):
    event = await event_service.create(EventCreate(**event_fields))
    await event_service.complete(event.id)

    updated = await event_service.update(
        event.id, EventUpdate.model_validate({"title": "Renamed", "status": "Not Completed"})
    )

    assert updated.title == "Renamed"
    assert updated.status == EventStatus.COMPLETED


async def test_update_rejects_blank_required_field(event_service, event_fields):
    event = await event_service.create(EventCreate(**event_fields))
    with pytest.raises(ValidationError, match="title"):
        await event_service.update(event.id, EventUpdate(title=""))


async def test_update_checks_package_against_merged_category(
    event_service, event_fields, wedding_package
):
    event = await event_service.create(
        EventCreate(**event_fields, category="Weddings", packageId=wedding_package.id)
    )
    with pytest.raises(ValidationError):
        await event_service.update(event.id, EventUpdate(category="Birthdays"))

    cleared = await event_service.update(event.id, EventUpdate(category="Birthdays", packageId=None))
    assert cleared.category.value == "Birthdays"
    assert cleared.package_id is None


async def test_update_missing_event_leaves_store_unchanged(event_service, event_fields):
    await event_service.create(EventCreate(**event_fields))
    before = await event_service.list()

    with pytest.raises(NotFoundError):
        await event_service.update("missing", EventUpdate(title="Ghost"))

    after = await event_service.list()
    assert len(after) == len(before)
    assert [event.title for event in after] == [event.title for event in before]


@pytest.mark.parametrize(
    "raw, expected",
    [("quarter to", None), ("09:05", "09:05"), ("18:00:30", "18:00:30"), ("18:00:00", "18:00")],
)
def test_normalize_time(raw, expected):
    if expected is None:
        with pytest.raises(ValidationError):
            normalize_time(raw)
    else:
        assert normalize_time(raw) == expected


def test_category_parse():
    assert Category.parse("Home Decor") is Category.HOME_DECOR
    assert Category.parse("") is None
    assert Category.parse(None) is None
    with pytest.raises(ValidationError, match="Invalid category 'Gala'"):
        Category.parse("Gala")
