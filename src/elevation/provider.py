"""Terrain-RGB tile provider.

Downloads pngraw tiles and returns their RGB pixels as numpy arrays.
"""

from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus
from io import BytesIO

import aiohttp
import numpy as np
from PIL import Image, UnidentifiedImageError

from domain.errors import TileFetchError
from domain.models import ProfilerSettings
from shared.constants import HTTP_5XX_MAX, HTTP_5XX_MIN

logger = logging.getLogger(__name__)

_FATAL_STATUSES = (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN, HTTPStatus.NOT_FOUND)


def decode_tile_png(data: bytes) -> np.ndarray:
    """PNG bytes -> uint8 array of shape (rows, cols, 3)."""
    with Image.open(BytesIO(data)) as img:
        rgb = img.convert('RGB')
    return np.asarray(rgb, dtype=np.uint8)


class TerrainRgbProvider:
    """
    Fetches Terrain-RGB tiles through a shared aiohttp session.

    Usage:
        async with make_http_session() as session:
            provider = TerrainRgbProvider(session, settings)
            pixels = await provider.fetch_tile(x=100, y=200, z=15, access_token=token)
    """

    def __init__(
        self,
        client: aiohttp.ClientSession,
        settings: ProfilerSettings | None = None,
    ) -> None:
        self.client = client
        self.settings = settings or ProfilerSettings()

    def tile_path(self, z: int, x: int, y: int) -> str:
        """Tile URL without the access token (safe to log)."""
        return self.settings.terrain_url.format(z=z, x=x, y=y)

    async def fetch_tile(self, x: int, y: int, z: int, access_token: str) -> np.ndarray:
        """
        Download and decode one tile.

        401/403/404 and undecodable bodies fail at once; 429, 5xx and transport
        errors are retried with exponential backoff.
        """
        path = self.tile_path(z, x, y)
        url = f'{path}?access_token={access_token}'
        retries = self.settings.retries
        timeout = aiohttp.ClientTimeout(total=self.settings.timeout_s)

        last_exc: Exception | None = None
        for attempt in range(retries):
            try:
                resp = await self.client.get(url, timeout=timeout)
            except (aiohttp.ClientError, TimeoutError) as e:
                last_exc = e
            else:
                try:
                    sc = resp.status
                    if sc == HTTPStatus.OK:
                        try:
                            data = await resp.read()
                        except (aiohttp.ClientError, TimeoutError) as e:
                            last_exc = e
                        else:
                            return self._decode(data, z, x, y, path)
                    elif sc in _FATAL_STATUSES:
                        msg = f'HTTP {sc} ({HTTPStatus(sc).phrase}) path={path}'
                        raise TileFetchError(z, x, y, msg)
                    elif sc == HTTPStatus.TOO_MANY_REQUESTS or HTTP_5XX_MIN <= sc < HTTP_5XX_MAX:
                        last_exc = RuntimeError(f'HTTP {sc} path={path}')
                    else:
                        last_exc = RuntimeError(f'Unexpected HTTP {sc} path={path}')
                finally:
                    resp.release()
            logger.debug(
                'Terrain tile z/x/y=%d/%d/%d attempt %d/%d failed: %s',
                z, x, y, attempt + 1, retries, last_exc,
            )
            if attempt + 1 < retries:
                await asyncio.sleep(self.settings.backoff_factor**attempt)
        raise TileFetchError(z, x, y, last_exc)

    @staticmethod
    def _decode(data: bytes, z: int, x: int, y: int, path: str) -> np.ndarray:
        try:
            return decode_tile_png(data)
        except (UnidentifiedImageError, OSError) as e:
            raise TileFetchError(z, x, y, f'undecodable image path={path}: {e}') from e
