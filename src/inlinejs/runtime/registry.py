"""
Shared module registry for global bundles.

Holds one module load per bundle location for the lifetime of the host
application. Script sites never remove or dispose entries; the host owns
the registry and may close it at shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from .bridge import ModuleHandle, ScriptEngineBridge

logger = logging.getLogger(__name__)


class SharedModuleRegistry:
    """
    Process-wide cache of global bundle modules.

    Entries are loads, not handles: the first site asking for a location
    inserts the in-flight load before anything is awaited, so concurrent
    first access from several sites shares a single import.
    """

    def __init__(self) -> None:
        self._loads: dict[str, asyncio.Future[ModuleHandle]] = {}

    def __contains__(self, location: str) -> bool:
        return location in self._loads

    def __len__(self) -> int:
        return len(self._loads)

    def get_or_load(
        self,
        location: str,
        loader: Callable[[], Awaitable[ModuleHandle]],
    ) -> asyncio.Future[ModuleHandle]:
        """
        Return the shared load for ``location``, starting it on a cache miss.

        Lookup and insert happen without a suspension point in between. A
        load that fails is dropped so that a later site can try again.
        """
        load = self._loads.get(location)
        if load is None:
            load = asyncio.ensure_future(loader())
            self._loads[location] = load
            load.add_done_callback(lambda done: self._forget_failed(location, done))
            logger.debug("Loading shared module %s", location)
        return load

    def _forget_failed(self, location: str, load: asyncio.Future[ModuleHandle]) -> None:
        if load.cancelled() or load.exception() is not None:
            if self._loads.get(location) is load:
                del self._loads[location]

    async def aclose(self, bridge: ScriptEngineBridge) -> None:
        """Dispose every loaded shared module and empty the registry."""
        loads, self._loads = self._loads, {}
        for location, load in loads.items():
            if not load.done():
                load.cancel()
                continue
            if load.cancelled() or load.exception() is not None:
                continue
            logger.debug("Disposing shared module %s", location)
            await bridge.dispose(load.result())
