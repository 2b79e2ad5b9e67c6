"""Dashboard state and the reducer that evolves it.

Presentation code never mutates state directly: it dispatches one of the
action types below to a ``DashboardStore`` and derives its views from the
resulting ``DashboardState`` snapshot.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from core.filters import DynamicFilter, FilterCriteria, apply_filters, drilldown, normalize_filters
from core.records import SigamiRequest


@dataclass(frozen=True)
class DashboardState:
    requests: Tuple[SigamiRequest, ...] = ()
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    dynamic_filter: Optional[DynamicFilter] = None
    source: str = ""
    generation: int = 0
    last_error: Optional[str] = None

    def filtered(self) -> Tuple[SigamiRequest, ...]:
        return apply_filters(self.requests, self.criteria, self.dynamic_filter)


@dataclass(frozen=True)
class DatasetLoaded:
    requests: Tuple[SigamiRequest, ...]
    source: str = ""


@dataclass(frozen=True)
class ImportFailed:
    message: str


@dataclass(frozen=True)
class SetFilters:
    changes: Mapping[str, Any]


@dataclass(frozen=True)
class ToggleFlagged:
    pass


@dataclass(frozen=True)
class AggregateSelected:
    field: str
    value: str


@dataclass(frozen=True)
class ClearDynamicFilter:
    pass


@dataclass(frozen=True)
class ClearAllFilters:
    pass


Action = Union[
    DatasetLoaded,
    ImportFailed,
    SetFilters,
    ToggleFlagged,
    AggregateSelected,
    ClearDynamicFilter,
    ClearAllFilters,
]


def reduce(state: DashboardState, action: Action) -> DashboardState:
    if isinstance(action, DatasetLoaded):
        return replace(
            state,
            requests=tuple(action.requests),
            source=action.source,
            generation=state.generation + 1,
            last_error=None,
        )
    if isinstance(action, ImportFailed):
        return replace(state, last_error=action.message)
    if isinstance(action, SetFilters):
        return replace(state, criteria=normalize_filters(dict(action.changes), base=state.criteria))
    if isinstance(action, ToggleFlagged):
        return replace(state, criteria=replace(state.criteria, only_flagged=not state.criteria.only_flagged))
    if isinstance(action, AggregateSelected):
        dynamic = drilldown(action.field, action.value)
        if dynamic is None:
            return state
        return replace(state, dynamic_filter=dynamic)
    if isinstance(action, ClearDynamicFilter):
        return replace(state, dynamic_filter=None)
    if isinstance(action, ClearAllFilters):
        return replace(state, criteria=FilterCriteria(), dynamic_filter=None)
    raise TypeError(f"Unknown action: {type(action).__name__}")


Listener = Callable[[DashboardState], None]


class DashboardStore:
    """Owner of the single live ``DashboardState``.

    ``dispatch`` swaps in a new snapshot under a lock; readers always see a
    complete state. Dataset loads are last-write-wins.
    """

    def __init__(self, state: Optional[DashboardState] = None):
        self._state = state or DashboardState()
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> DashboardState:
        return self._state

    def current(self) -> Tuple[SigamiRequest, ...]:
        return self._state.requests

    def load(self, requests: Iterable[SigamiRequest], source: str = "") -> DashboardState:
        return self.dispatch(DatasetLoaded(requests=tuple(requests), source=source))

    def dispatch(self, action: Action) -> DashboardState:
        with self._lock:
            self._state = reduce(self._state, action)
            state = self._state
            listeners = list(self._listeners)
        for listener in listeners:
            listener(state)
        return state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
