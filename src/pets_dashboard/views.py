"""
Two-phase loaders behind the dashboard and detail pages.

Each load walks LOADING -> ERROR | READY exactly once. Phase one waits for a
bearer token, phase two passes that token into the data call, so the data
request cannot start before the token exists. Both phases share one
cancellation event; a cancelled load stays in LOADING and is never rendered
as an error.
"""
from __future__ import annotations
import enum, asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

from .api import PetfinderAPI
from .auth import CredentialHolder
from .errors import PetfinderError, RequestCancelled
from .models import Animal, DashboardStats, FilterState
from .viewmodel import apply_filter, chart_series, describe_animal, summarize, type_options

T = TypeVar("T")


class Status(str, enum.Enum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass
class ViewState(Generic[T]):
    status: Status = Status.LOADING
    data: Optional[T] = None
    error: Optional[str] = None
    not_found: bool = False

    def fail(self, message: str) -> None:
        self._leave_loading()
        self.status, self.error = Status.ERROR, message

    def missing(self, message: str) -> None:
        """Settle as ERROR for a record the API did not return; shown without the error prefix."""
        self.fail(message)
        self.not_found = True

    def ready(self, data: T) -> None:
        self._leave_loading()
        self.status, self.data = Status.READY, data

    def _leave_loading(self) -> None:
        if self.status is not Status.LOADING:
            raise RuntimeError(f"view already settled as {self.status.value}")


@dataclass
class DashboardView:
    animals: List[Animal]
    filtered: List[Animal]
    stats: DashboardStats
    filters: FilterState
    type_options: List[Any] = field(default_factory=list)
    type_chart: List[Any] = field(default_factory=list)
    age_chart: List[Any] = field(default_factory=list)


def build_dashboard(animals: List[Animal], filters: FilterState) -> DashboardView:
    stats = summarize(animals)
    return DashboardView(
        animals=animals,
        filtered=apply_filter(animals, filters),
        stats=stats,
        filters=filters,
        type_options=type_options(stats),
        type_chart=chart_series(stats["type_counts"]),
        age_chart=chart_series(stats["age_counts"]),
    )


class ViewLoader:
    """
    Owns the cancellation signal for one page view.
    Use as an async context manager; leaving the block releases the signal.
    """

    def __init__(self, credentials: CredentialHolder, api: PetfinderAPI, cancel: Optional[asyncio.Event] = None):
        self.credentials = credentials
        self.api = api
        self.cancel = cancel or asyncio.Event()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.cancel.set()

    async def load_dashboard(self, filters: FilterState) -> ViewState[DashboardView]:
        state: ViewState[DashboardView] = ViewState()
        try:
            token = await self.credentials.get_token(self.cancel)
            animals = await self.api.list_animals(token, cancel=self.cancel)
        except RequestCancelled:
            return state
        except PetfinderError as e:
            state.fail(e.message)
            return state
        state.ready(build_dashboard(animals, filters))
        return state

    async def load_detail(self, animal_id: int | str) -> ViewState[Dict[str, Any]]:
        state: ViewState[Dict[str, Any]] = ViewState()
        try:
            token = await self.credentials.get_token(self.cancel)
            animal = await self.api.get_animal(token, animal_id, cancel=self.cancel)
        except RequestCancelled:
            return state
        except PetfinderError as e:
            state.fail(e.message)
            return state
        if animal is None:
            state.missing("Pet not found")
        else:
            state.ready(describe_animal(animal))
        return state
