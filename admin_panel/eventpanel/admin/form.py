"""State for the "Add Event" form and its category -> package picker.

The picker only applies a package list when the category it was fetched for
is still the selected one, so a slow response for an abandoned category can
never overwrite the current choices.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from eventpanel.admin.client import ApiError, EventPanelClient
from eventpanel.models.enums import Category
from eventpanel.models.event import REQUIRED_FIELDS, Event
from eventpanel.models.package import Package
from eventpanel.utils.logger import logger


class PickerState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    LOADED = "loaded"
    FAILED = "failed"


class PackagePicker:
    def __init__(self, client: EventPanelClient) -> None:
        self._client = client
        self.category: Optional[str] = None
        self.packages: List[Package] = []
        self.selected_package_id: Optional[str] = None
        self.state = PickerState.IDLE
        self.error: Optional[str] = None

    @property
    def visible(self) -> bool:
        return self.category is not None and bool(self.packages)

    def select_category(self, category: Optional[str]) -> None:
        """Switch category; any previous package choice is dropped."""
        if category:
            Category(category)  # ValueError for unknown categories
        self.category = category or None
        self.packages = []
        self.selected_package_id = None
        self.error = None
        self.state = PickerState.FETCHING if self.category else PickerState.IDLE

    async def choose_category(self, category: Optional[str]) -> bool:
        """Select `category` and load its packages. Returns True if applied."""
        self.select_category(category)
        requested = self.category
        if requested is None:
            return False
        try:
            packages = await self._client.list_packages(requested)
        except ApiError as exc:
            return self.apply_failure(requested, exc.message)
        return self.apply_packages(requested, packages)

    def apply_packages(self, category: str, packages: Iterable[Package]) -> bool:
        if category != self.category:
            logger.debug("Discarded stale package list", extra={"category": category})
            return False
        self.packages = list(packages)
        self.state = PickerState.LOADED
        return True

    def apply_failure(self, category: str, message: str) -> bool:
        if category != self.category:
            return False
        self.error = "Error fetching packages"
        self.state = PickerState.FAILED
        logger.warning("Package fetch failed", extra={"category": category, "error": message})
        return True

    def select_package(self, package_id: Optional[str]) -> None:
        if package_id and package_id not in {package.id for package in self.packages}:
            raise ValueError(f"Package {package_id} is not offered for {self.category}")
        self.selected_package_id = package_id or None

    def reset(self) -> None:
        self.select_category(None)


class FormState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


class EventForm:
    """Add Event form: Idle -> Submitting -> Success | Failure.

    Success clears every field; failure keeps them so the user can retry.
    """

    def __init__(self, client: EventPanelClient) -> None:
        self._client = client
        self.picker = PackagePicker(client)
        self.fields: Dict[str, str] = dict.fromkeys(REQUIRED_FIELDS, "")
        self.state = FormState.IDLE
        self.error: Optional[str] = None
        self.message: Optional[str] = None
        self.created: Optional[Event] = None

    def set_field(self, name: str, value: str) -> None:
        if name not in self.fields:
            raise KeyError(name)
        self.fields[name] = value

    async def choose_category(self, category: Optional[str]) -> bool:
        return await self.picker.choose_category(category)

    def choose_package(self, package_id: Optional[str]) -> None:
        self.picker.select_package(package_id)

    def missing_fields(self) -> List[str]:
        return [name for name, value in self.fields.items() if not value.strip()]

    def payload(self) -> Dict[str, Any]:
        return {
            **self.fields,
            "category": self.picker.category or "",
            "packageId": self.picker.selected_package_id or "",
        }

    async def submit(self) -> bool:
        missing = self.missing_fields()
        if missing:
            self.state = FormState.FAILURE
            self.error = f"Please fill in: {', '.join(missing)}"
            return False

        self.state = FormState.SUBMITTING
        self.error = None
        self.message = None
        try:
            self.created = await self._client.create_event(self.payload())
        except ApiError as exc:
            logger.error("Error adding event", extra={"error": exc.message})
            self.state = FormState.FAILURE
            self.error = "Error adding event"
            return False

        self.reset()
        self.state = FormState.SUCCESS
        self.message = "Event added successfully"
        return True

    def reset(self) -> None:
        self.fields = dict.fromkeys(REQUIRED_FIELDS, "")
        self.picker.reset()
        self.state = FormState.IDLE
        self.error = None
