"""HTTP helpers."""

from datamarket.http.fetch import (
    download_file,
    fetch_asset,
    fetch_data,
    filename_from_response,
    get_data,
    post_data,
)

__all__ = [
    "fetch_data",
    "fetch_asset",
    "download_file",
    "filename_from_response",
    "get_data",
    "post_data",
]
