"""
Live list of a resource: fetch, then refetch the whole filtered list on
every change notification for its table.

States: loading -> ready | errored. A change notification moves a ready or
errored list back to loading (unless refresh_shows_loading is off) and then
to ready or errored again. Errored refreshes keep the last known data.
"""
import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from tutorcenter.config.settings import settings
from tutorcenter.core.realtime import ChangeRegistry
from tutorcenter.core.resource import Resource

logger = logging.getLogger(__name__)


class LiveState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


@dataclass
class LiveSnapshot:
    state: LiveState
    data: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.state == LiveState.LOADING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "loading": self.loading,
            "data": self.data,
            "error": self.error,
        }


class LiveResourceList:
    def __init__(
        self,
        resource: Resource,
        registry: ChangeRegistry,
        filters: Optional[Dict[str, Any]] = None,
        on_snapshot: Optional[Callable[[LiveSnapshot], Any]] = None,
        refresh_shows_loading: Optional[bool] = None,
    ):
        self.resource = resource
        self.registry = registry
        self.filters = dict(filters or {})
        self.on_snapshot = on_snapshot
        self.refresh_shows_loading = (
            settings.live_refresh_shows_loading if refresh_shows_loading is None else refresh_shows_loading
        )
        self.state = LiveState.LOADING
        self.data: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self._generation = 0
        self._closed = False
        self._token: Optional[int] = None

    @property
    def table(self) -> str:
        return self.resource.definition.table

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> LiveSnapshot:
        return LiveSnapshot(state=self.state, data=list(self.data), error=self.error)

    async def start(self) -> LiveSnapshot:
        self._token = await self.registry.subscribe(
            self.table, self._on_table_change, self.resource.definition.channel
        )
        await self.refresh()
        return self.snapshot()

    async def refresh(self, background: bool = False) -> None:
        if self._closed:
            return
        self._generation += 1
        generation = self._generation
        if not background or self.refresh_shows_loading:
            self.state = LiveState.LOADING
            self.error = None
            await self._publish()

        result = await asyncio.to_thread(self.resource.list, self.filters)

        if self._closed or generation != self._generation:
            logger.debug(f"Discarding stale {self.table} result (generation {generation})")
            return
        if result.ok:
            self.data = result.data or []
            self.error = None
            self.state = LiveState.READY
        else:
            self.error = result.error
            self.state = LiveState.ERRORED
        await self._publish()

    async def _on_table_change(self) -> None:
        await self.refresh(background=True)

    async def _publish(self) -> None:
        if self.on_snapshot is None or self._closed:
            return
        outcome = self.on_snapshot(self.snapshot())
        if inspect.isawaitable(outcome):
            await outcome

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._token is not None:
            await self.registry.unsubscribe(self.table, self._token)
            self._token = None

    async def __aenter__(self) -> "LiveResourceList":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
