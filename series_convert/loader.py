"""
Remote data loading for series-convert.

Network retrieval is not done here. A *fetcher* collaborator is handed a
URL, optional request headers and a callback, and calls the callback once
with ``(error, response)``:

    def fetcher(url, headers, callback):
        ...
        callback(None, FetchResponse(url=url, status=200, status_text="OK", body=text))

A response without a body is a ``RetrievalFailure``. Otherwise the body is
decoded according to the mime type (``json`` / ``tsv`` / ``csv``) into
records, which are passed on to ``done``.

This module is **not** part of the public API; use ``Converter.convert_url_to_data``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from series_convert.config import JsonKeys
from series_convert.exceptions import RetrievalFailure, UnsupportedMimeTypeError
from series_convert.parsers.base import Record
from series_convert.parsers.delimited import convert_csv_to_data, convert_tsv_to_data
from series_convert.parsers.json_path import convert_json_to_data

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = ("csv", "tsv", "json")


@dataclass
class FetchResponse:
    """What a fetcher reports back: the final URL, HTTP status and body."""

    url: str | None = None
    status: int | None = None
    status_text: str | None = None
    body: str | bytes | None = None


FetchCallback = Callable[["FetchResponse | None", "FetchResponse | None"], None]
Fetcher = Callable[[str, "Mapping[str, str] | None", FetchCallback], None]


def _body_text(body: str | bytes) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8-sig")
    return body


def decode_body(body: str | bytes, mime_type: str, keys: JsonKeys | None = None) -> list[Record]:
    """Decode a response body into records according to *mime_type*.

    Raises:
        UnsupportedMimeTypeError: For anything but csv/tsv/json.
    """
    text = _body_text(body)
    if mime_type == "json":
        return convert_json_to_data(json.loads(text), keys)
    if mime_type == "tsv":
        return convert_tsv_to_data(text)
    if mime_type == "csv":
        return convert_csv_to_data(text)
    raise UnsupportedMimeTypeError(
        f"Unsupported mime type: '{mime_type}'. Supported: {list(SUPPORTED_MIME_TYPES)}"
    )


def fetch_records(
    fetcher: Fetcher,
    url: str,
    mime_type: str,
    headers: Mapping[str, str] | None,
    keys: JsonKeys | None,
    done: Callable[[list[Record]], Any],
) -> None:
    """Ask *fetcher* for *url* and hand the decoded records to *done*.

    Raises:
        UnsupportedMimeTypeError: Before fetching, for an unknown mime type.
        RetrievalFailure: From inside the callback, when no body arrived.
    """
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedMimeTypeError(
            f"Unsupported mime type: '{mime_type}'. Supported: {list(SUPPORTED_MIME_TYPES)}"
        )

    def _on_response(error: FetchResponse | None, response: FetchResponse | None) -> None:
        if response is None or not response.body:
            failed = error or response or FetchResponse(url=url)
            raise RetrievalFailure(failed.url or url, failed.status, failed.status_text)

        logger.info(
            "Fetched %s (%s %s), decoding as %s",
            response.url or url, response.status, response.status_text, mime_type,
        )
        done(decode_body(response.body, mime_type, keys))

    logger.info("Requesting %s (mime_type=%s)", url, mime_type)
    fetcher(url, dict(headers) if headers else None, _on_response)
