from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..core.timeutil import now_utc, truncate_to_second
from ..domain.models import StoredMeasurement
from ..domain.temperature import Celsius
from .errors import InvalidDestination, InvalidResponse, RequestFailed, UnexpectedResponse

logger = logging.getLogger(__name__)


class HitSource(BaseModel):
    address: Optional[str] = None
    temp_c: Optional[float] = None
    date: Optional[datetime] = None


class Hit(BaseModel):
    id: str = Field(alias="_id")
    index: str = Field(alias="_index")
    score: Optional[float] = Field(default=None, alias="_score")
    source: HitSource = Field(alias="_source")
    type: Optional[str] = Field(default=None, alias="_type")  # gone in ES 8


_hits_adapter = TypeAdapter(list[Hit])

INDEX_TEMPLATE_NAME = "thermostore-measurements"

# Day indices are named YYYYMMDD.
INDEX_TEMPLATE = {
    "index_patterns": ["19*", "20*"],
    "template": {
        "mappings": {
            "properties": {
                "address": {"type": "keyword"},
                "date": {"type": "date"},
                "temp_c": {"type": "double"},
            }
        }
    },
}


def bucket_key(date: datetime) -> str:
    """Day partition for a (truncated, UTC) timestamp, e.g. "20191102"."""
    return date.strftime("%Y%m%d")


def document_id(date: datetime, address: str) -> str:
    """Upsert key: one document per address per second."""
    return f"{date.strftime('%Y%m%dT%H%M%S')}-{address}"


class ElasticsearchStore:
    """
    Measurement store backed by Elasticsearch used as a time-series store.

    Each day of data goes to its own index (named by `bucket_key`) so whole
    days can be dropped later. Documents are addressed by `document_id`,
    so writing the same device/second twice replaces the first write.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def init(self) -> None:
        """Install the index template used by every day index.

        `address` must be a keyword field so the term filter in
        `read_recent` is an exact match rather than a match on analyzed tokens.
        """
        url = self._url(f"_index_template/{INDEX_TEMPLATE_NAME}")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.put(url, json=INDEX_TEMPLATE)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise RequestFailed(f"Installing the index template failed: {e}") from e
        logger.info("Index template %s installed", INDEX_TEMPLATE_NAME)

    def _url(self, path: str) -> httpx.URL:
        try:
            base = httpx.URL(self._base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise InvalidDestination(f"Invalid database URL {self._base_url!r}") from e
        if base.scheme not in ("http", "https") or not base.host:
            raise InvalidDestination(f"Invalid database URL {self._base_url!r}")
        if not base.path.endswith("/"):
            base = base.copy_with(path=base.path + "/")
        try:
            return base.join(path)
        except httpx.InvalidURL as e:
            raise InvalidDestination(f"Cannot build URL for {path!r}") from e

    async def write(
        self, address: str, temperature: Celsius, date: Optional[datetime] = None
    ) -> StoredMeasurement:
        date = truncate_to_second(date if date is not None else now_utc())
        path = f"{bucket_key(date)}/_doc/{quote(document_id(date, address), safe='')}"
        url = self._url(path)

        body = {
            "address": address,
            "date": date.isoformat(),
            "temp_c": float(temperature),
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.put(url, json=body)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise RequestFailed(f"The request to the database failed: {e}") from e

        logger.debug("Stored %s temp_c=%.3f at %s", address, float(temperature), path)
        return StoredMeasurement(address=address, date=date, temperature=temperature)

    async def read_recent(self, address: str, limit: int) -> list[StoredMeasurement]:
        url = self._url("*/_search")
        query = {
            "size": limit,
            "sort": {"date": {"order": "desc", "unmapped_type": "date"}},
            "query": {"bool": {"filter": {"term": {"address": address}}}},
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(url, json=query)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            raise RequestFailed(f"The request to the database failed: {e}") from e

        try:
            payload: Any = resp.json()
        except ValueError as e:
            raise InvalidResponse("The database returned invalid JSON") from e

        # Search results come back as {"hits": {"hits": [...]}}
        outer = payload.get("hits") if isinstance(payload, dict) else None
        raw_hits = outer.get("hits") if isinstance(outer, dict) else None
        if not isinstance(raw_hits, list):
            raise InvalidResponse("The database response has no hits.hits list")

        try:
            hits = _hits_adapter.validate_python(raw_hits)
        except ValidationError as e:
            raise UnexpectedResponse("The database returned unexpected results") from e

        out: list[StoredMeasurement] = []
        for hit in hits:
            src = hit.source
            # Partial documents are skipped rather than failing the read.
            if src.date is None or src.temp_c is None:
                logger.debug("Skipping incomplete document %s in %s", hit.id, hit.index)
                continue
            out.append(
                StoredMeasurement(
                    address=src.address if src.address is not None else address,
                    date=truncate_to_second(src.date),
                    temperature=Celsius(src.temp_c),
                )
            )
        return list(reversed(out))
