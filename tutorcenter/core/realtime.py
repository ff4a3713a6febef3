"""Shared per-table change subscriptions, reference-counted across live lists."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from tutorcenter.database.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

Listener = Callable[[], Awaitable[None]]


class SupabaseChannelBackend:
    """Opens one postgres_changes channel per table on the async Supabase client."""

    async def open(self, table: str, channel_name: str, on_change: Callable[[Any], None]) -> Any:
        client = await SupabaseClient.get_async_client()
        channel = client.channel(channel_name)
        channel.on_postgres_changes("*", schema="public", table=table, callback=on_change)
        await channel.subscribe()
        logger.info(f"Opened realtime channel {channel_name} for table {table}")
        return channel

    async def close(self, channel: Any) -> None:
        client = await SupabaseClient.get_async_client()
        await client.remove_channel(channel)


class ChangeRegistry:
    """
    table -> listeners. The first subscriber for a table opens the backend
    channel, the last unsubscribe closes it. Any change event on the channel
    runs every listener of that table once.
    """

    def __init__(self, backend: Any):
        self._backend = backend
        self._lock = asyncio.Lock()
        self._listeners: Dict[str, Dict[int, Listener]] = {}
        self._channels: Dict[str, Any] = {}
        self._next_token = 0
        self._tasks: Set[asyncio.Task] = set()

    async def subscribe(self, table: str, listener: Listener, channel_name: Optional[str] = None) -> int:
        async with self._lock:
            self._next_token += 1
            token = self._next_token
            listeners = self._listeners.setdefault(table, {})
            listeners[token] = listener
            if table not in self._channels:
                try:
                    self._channels[table] = await self._backend.open(
                        table,
                        channel_name or f"{table}_changes",
                        lambda payload=None: self.notify(table),
                    )
                except Exception:
                    listeners.pop(token, None)
                    if not listeners:
                        self._listeners.pop(table, None)
                    raise
            logger.debug(f"Subscribed listener {token} to {table} ({len(listeners)} total)")
            return token

    async def unsubscribe(self, table: str, token: int) -> None:
        async with self._lock:
            listeners = self._listeners.get(table)
            if listeners is None:
                return
            listeners.pop(token, None)
            if listeners:
                return
            self._listeners.pop(table, None)
            channel = self._channels.pop(table, None)
            if channel is None:
                return
            try:
                await self._backend.close(channel)
                logger.info(f"Closed realtime channel for table {table}")
            except Exception as e:
                logger.warning(f"Error closing realtime channel for {table}: {e}")

    def notify(self, table: str) -> List[asyncio.Task]:
        """Schedule every listener of table. Must be called from the event loop thread."""
        listeners = list(self._listeners.get(table, {}).values())
        tasks = [asyncio.ensure_future(self._run_listener(table, listener)) for listener in listeners]
        for task in tasks:
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return tasks

    async def _run_listener(self, table: str, listener: Listener) -> None:
        try:
            await listener()
        except Exception as e:
            logger.error(f"Change listener for {table} failed: {e}")

    def subscriber_count(self, table: str) -> int:
        return len(self._listeners.get(table, {}))

    def pending_count(self) -> int:
        return len(self._tasks)

    def is_open(self, table: str) -> bool:
        return table in self._channels


_registry: Optional[ChangeRegistry] = None


def get_change_registry() -> ChangeRegistry:
    global _registry
    if _registry is None:
        _registry = ChangeRegistry(SupabaseChannelBackend())
    return _registry
