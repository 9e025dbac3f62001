"""Schema registry HTTP client (internal).

Speaks the Confluent schema registry REST API. Base URLs are tried in order:
a transport failure moves on to the next URL, an HTTP error status fails
immediately.
"""

import json
import logging
from collections import OrderedDict
from typing import Any, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx

from compatgate.kernel.errors import RemoteError

logger = logging.getLogger(__name__)

CACHE_CAPACITY = 1000

_CONTENT_TYPE = "application/vnd.schemaregistry.v1+json"
_ACCEPT = "application/vnd.schemaregistry.v1+json, application/vnd.schemaregistry+json, application/json"


def _basic_auth(user_info: Optional[str]) -> Optional[httpx.BasicAuth]:
    if user_info is None:
        return None
    user, _, password = user_info.partition(":")
    return httpx.BasicAuth(user, password)


class SchemaRegistryClient:
    """Synchronous client for the two registry calls a check run makes."""

    def __init__(
        self,
        base_urls: Sequence[str],
        user_info: Optional[str] = None,
        cache_capacity: int = CACHE_CAPACITY,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not base_urls:
            raise ValueError("at least one schema registry URL is required")
        self.base_urls = [url.rstrip("/") for url in base_urls]
        self.cache_capacity = cache_capacity
        self._compatibility_cache: "OrderedDict[Tuple[str, str], bool]" = OrderedDict()
        self._http = httpx.Client(
            auth=_basic_auth(user_info),
            headers={"Accept": _ACCEPT},
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "SchemaRegistryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        last_error: Optional[httpx.TransportError] = None
        for base_url in self.base_urls:
            url = f"{base_url}{path}"
            try:
                response = self._http.request(method, url, **kwargs)
            except httpx.TransportError as e:
                logger.warning("Schema registry %s unreachable: %s", base_url, e)
                last_error = e
                continue
            except httpx.RequestError as e:
                raise RemoteError(f"Schema registry call {method} {url} failed", e) from e
            try:
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPStatusError, ValueError) as e:
                raise RemoteError(f"Schema registry call {method} {url} failed", e) from e
        raise RemoteError(f"No schema registry reachable for {method} {path}", last_error)

    def list_all_subjects(self) -> List[str]:
        subjects = self._request("GET", "/subjects")
        if not isinstance(subjects, list):
            raise RemoteError("Unexpected subject listing", ValueError(repr(subjects)))
        return [str(s) for s in subjects]

    def test_compatibility(self, subject_name: str, schema_json: str) -> bool:
        """Ask the registry whether ``schema_json`` is compatible with the subject's latest version."""
        cache_key = (subject_name, schema_json)
        if cache_key in self._compatibility_cache:
            self._compatibility_cache.move_to_end(cache_key)
            return self._compatibility_cache[cache_key]

        body = self._request(
            "POST",
            f"/compatibility/subjects/{quote(subject_name, safe='')}/versions/latest",
            content=json.dumps({"schema": schema_json}),
            headers={"Content-Type": _CONTENT_TYPE},
        )
        if not isinstance(body, dict) or "is_compatible" not in body:
            raise RemoteError(
                f"Unexpected compatibility response for subject {subject_name}",
                ValueError(repr(body)),
            )
        compatible = bool(body["is_compatible"])

        self._compatibility_cache[cache_key] = compatible
        if len(self._compatibility_cache) > self.cache_capacity:
            self._compatibility_cache.popitem(last=False)
        return compatible
