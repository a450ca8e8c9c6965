"""Ordered outbound command queue."""

from __future__ import annotations

import asyncio

from nickguard.events import OutboundCommand


class CommandQueue:
    """FIFO OutboundQueue backed by an asyncio.Queue.

    ``enqueue`` never blocks, so synchronous handlers can append from inside
    the event loop. The host awaits ``get()`` to flush.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[OutboundCommand] = asyncio.Queue()

    def enqueue(self, command: OutboundCommand) -> None:
        self._queue.put_nowait(command)

    async def get(self) -> OutboundCommand:
        return await self._queue.get()

    def drain(self) -> list[OutboundCommand]:
        """Remove and return everything queued, oldest first."""
        items: list[OutboundCommand] = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return items

    def __len__(self) -> int:
        return self._queue.qsize()
