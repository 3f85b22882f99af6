"""HTTP helpers for talking to metadata caches, providers and file hosts.

All helpers accept an optional httpx.AsyncClient so callers can share a
connection pool (and tests can inject a MockTransport).
"""

from __future__ import annotations

import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import httpx
import structlog

from datamarket.ddo.asset import Asset
from datamarket.errors import FetchError

logger = structlog.get_logger()

DEFAULT_TIMEOUT = 30.0
JSON_HEADERS = {"Content-type": "application/json"}

_FILENAME_PATTERN = re.compile(r"attachment;\s*filename=\"?([^\";]+)\"?", re.IGNORECASE)


@asynccontextmanager
async def _client(client: httpx.AsyncClient | None) -> AsyncIterator[httpx.AsyncClient]:
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as owned:
        yield owned


async def fetch_data(
    url: str,
    method: str = "GET",
    client: httpx.AsyncClient | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Send a request and return the response, failing on non-2xx statuses.

    Raises:
        FetchError: If the server answers with an error status
    """
    async with _client(client) as http:
        response = await http.request(method, url, **kwargs)
    if not response.is_success:
        logger.error(
            "http_request_failed",
            method=method,
            url=url,
            status=response.status_code,
            body=response.text,
        )
        raise FetchError(url, response.status_code, response.text)
    return response


def filename_from_response(response: httpx.Response, url: str, index: int | None = None) -> str:
    """Pick a file name: content-disposition, then the URL's last path segment, then file<index>."""
    disposition = response.headers.get("content-disposition")
    if disposition:
        match = _FILENAME_PATTERN.search(disposition)
        if match:
            return match.group(1).strip()
    tail = unquote(urlparse(url).path.rstrip("/").split("/")[-1])
    if tail:
        return tail
    return f"file{index if index is not None else 0}"


async def download_file(
    url: str,
    destination: str | Path | None = None,
    index: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> Path:
    """Download a file into destination (default: current directory).

    Returns:
        Path of the written file

    Raises:
        FetchError: If the server answers with an error status
    """
    response = await fetch_data(url, client=client)
    filename = filename_from_response(response, url, index)
    directory = Path(destination) if destination is not None else Path.cwd()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / Path(filename).name
    path.write_bytes(response.content)
    logger.info("file_downloaded", url=url, path=str(path), size=len(response.content))
    return path


async def get_data(url: str, client: httpx.AsyncClient | None = None) -> httpx.Response:
    """GET with a JSON content type. The status is not checked."""
    async with _client(client) as http:
        return await http.get(url, headers=JSON_HEADERS)


async def post_data(
    url: str,
    payload: str | bytes | None = None,
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    """POST a raw JSON body. The status is not checked."""
    async with _client(client) as http:
        if payload is None:
            return await http.post(url)
        return await http.post(url, content=payload, headers=JSON_HEADERS)


async def fetch_asset(url: str, client: httpx.AsyncClient | None = None) -> Asset:
    """Fetch an asset document from a metadata cache and parse it.

    Raises:
        FetchError: If the server answers with an error status
        pydantic.ValidationError: If the document is not a valid asset
    """
    response = await fetch_data(url, client=client)
    return Asset.model_validate(response.json())


__all__ = [
    "fetch_data",
    "fetch_asset",
    "download_file",
    "filename_from_response",
    "get_data",
    "post_data",
]
