from __future__ import annotations

import ssl

import aiohttp
import certifi

from shared.constants import (
    API_KEY_VISIBLE_PREFIX_LEN,
    HTTP_FORBIDDEN,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
    TERRAIN_RGB_URL_TEMPLATE,
)


def mask_api_key(api_key: str) -> str:
    """Keep only the first characters of a token for logs."""
    if len(api_key) <= API_KEY_VISIBLE_PREFIX_LEN:
        return '*' * len(api_key)
    return api_key[:API_KEY_VISIBLE_PREFIX_LEN] + '*' * 8


def make_http_session(*, verify_ssl: bool = True) -> aiohttp.ClientSession:
    # SSL context with the certifi bundle
    ssl_context: ssl.SSLContext | bool
    ssl_context = ssl.create_default_context(cafile=certifi.where()) if verify_ssl else False
    connector = aiohttp.TCPConnector(ssl=ssl_context)
    return aiohttp.ClientSession(connector=connector)


async def validate_terrain_api(
    api_key: str,
    terrain_url: str = TERRAIN_RGB_URL_TEMPLATE,
    *,
    verify_ssl: bool = True,
) -> None:
    """Quick availability check of the Terrain-RGB source with the given token."""
    test_path = terrain_url.format(z=0, x=0, y=0)
    test_url = f'{test_path}?access_token={api_key}'
    timeout = aiohttp.ClientTimeout(total=10, connect=10, sock_connect=10, sock_read=10)
    try:
        async with (
            make_http_session(verify_ssl=verify_ssl) as client,
            client.get(test_url, timeout=timeout) as resp,
        ):
            sc = resp.status
            if sc == HTTP_OK:
                return
            if sc in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
                msg = 'Invalid or expired access token. Check the token and try again.'
                raise RuntimeError(msg)
            msg = f'Terrain tile server returned HTTP {sc}. Try again later.'
            raise RuntimeError(msg)
    except (TimeoutError, aiohttp.ClientConnectorError, aiohttp.ClientOSError):
        msg = 'No connection to the terrain tile server. Check the network.'
        raise RuntimeError(msg) from None
