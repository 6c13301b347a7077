from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from domain.errors import TileFetchError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    import numpy as np

    from domain.models import TileDescriptor

logger = logging.getLogger(__name__)


class TileFetcher:
    """
    Concurrent retrieval of every tile of a run.

    All fetches are started at once and joined; the first failure cancels the
    fetches still in flight and is re-raised as TileFetchError.
    """

    def __init__(
        self,
        fetch_tile: Callable[[int, int, int, str], Awaitable[np.ndarray]],
        *,
        on_progress: Callable[[int], Awaitable[None]] | None = None,
    ):
        self._fetch = fetch_tile
        self._on_progress = on_progress

    async def fetch_all(self, tiles: Sequence[TileDescriptor], access_token: str) -> None:
        """Fill tile.pixels for every tile, in place."""

        async def _worker(tile: TileDescriptor) -> None:
            try:
                pixels = await self._fetch(tile.x, tile.y, tile.z, access_token)
            except TileFetchError:
                raise
            except Exception as e:
                raise TileFetchError(tile.z, tile.x, tile.y, e) from e
            # Each worker owns exactly one descriptor
            tile.pixels = pixels
            logger.debug('Fetched tile z/x/y=%d/%d/%d', tile.z, tile.x, tile.y)
            if self._on_progress is not None:
                with contextlib.suppress(Exception):
                    await self._on_progress(1)

        tasks = [asyncio.create_task(_worker(t)) for t in tiles]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                logger.debug('Cancelling %d in-flight tile fetches', len(pending))
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
