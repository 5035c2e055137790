"""
Pytest fixtures for thermostore tests.

Provides:
- An in-memory fake of the search engine, reachable through httpx.MockTransport
- Stores wired to that fake (or to a temporary SQLite file)
- A TestClient for the HTTP API with the service dependency overridden
"""

import json
import re
from types import MappingProxyType

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

import thermostore.api.routes as routes_module
from thermostore import main as main_module
from thermostore.domain.models import Device
from thermostore.domain.temperature import Celsius
from thermostore.services.measurements import MeasurementService
from thermostore.storage.elasticsearch_store import ElasticsearchStore
from thermostore.storage.sqlite_store import SQLiteStore


KNOWN_ADDRESS = "f4d55889b1d6"
UNKNOWN_ADDRESS = "d0f7083ca3b1"
BASE_URL = "http://es.test:9200"


class FakeSearchEngine:
    """
    Just enough of the document store API: PUT _index_template/<name>,
    PUT <index>/_doc/<id> and POST */_search.

    Until a template maps `address` as a keyword, the field behaves like a
    dynamically mapped text field: it is matched on lowercased tokens.
    """

    def __init__(self) -> None:
        self.indices: dict[str, dict[str, dict]] = {}
        self.templates: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []

    def _address_is_keyword(self) -> bool:
        return any(
            t["template"]["mappings"]["properties"].get("address", {}).get("type") == "keyword"
            for t in self.templates.values()
        )

    def _address_matches(self, stored: str, term: str) -> bool:
        if self._address_is_keyword():
            return stored == term
        return term in re.findall(r"[a-z0-9]+", stored.lower())

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")

        if request.method == "PUT" and len(parts) == 2 and parts[0] == "_index_template":
            self.templates[parts[1]] = json.loads(request.content)
            return httpx.Response(200, json={"acknowledged": True})

        if request.method == "PUT" and len(parts) == 3 and parts[1] == "_doc":
            index, _, doc_id = parts
            docs = self.indices.setdefault(index, {})
            result = "updated" if doc_id in docs else "created"
            docs[doc_id] = json.loads(request.content)
            return httpx.Response(200, json={"_index": index, "_id": doc_id, "result": result})

        if request.method == "POST" and parts == ["*", "_search"]:
            body = json.loads(request.content)
            address = body["query"]["bool"]["filter"]["term"]["address"]
            hits = [
                {"_id": doc_id, "_index": index, "_score": None, "_source": src, "_type": "_doc"}
                for index, docs in self.indices.items()
                for doc_id, src in docs.items()
                if self._address_matches(src.get("address", ""), address)
            ]
            hits.sort(key=lambda h: h["_source"]["date"], reverse=body["sort"]["date"]["order"] == "desc")
            return httpx.Response(200, json={"hits": {"hits": hits[: body["size"]]}})

        return httpx.Response(404, json={"error": "not found"})

    @property
    def document_count(self) -> int:
        return sum(len(docs) for docs in self.indices.values())


@pytest.fixture
def engine():
    return FakeSearchEngine()


@pytest.fixture
def es_store(engine):
    return ElasticsearchStore(BASE_URL, transport=httpx.MockTransport(engine.handler))


def canned_store(status_code=200, **response_kwargs):
    """Store whose engine always answers with the given response."""
    def handler(request):
        return httpx.Response(status_code, **response_kwargs)
    return ElasticsearchStore(BASE_URL, transport=httpx.MockTransport(handler))


@pytest_asyncio.fixture
async def sqlite_store(tmp_path):
    store = SQLiteStore(str(tmp_path / "measurements.db"))
    await store.init()
    return store


@pytest.fixture
def devices():
    return MappingProxyType({
        KNOWN_ADDRESS: Device(
            address=KNOWN_ADDRESS,
            name="Living room",
            description="Shelf by the window",
            adjustment=Celsius(-1.5),
        ),
    })


@pytest.fixture
def service(es_store, devices):
    return MeasurementService(store=es_store, devices=devices)


@pytest.fixture
def client(service):
    """Test client whose routes use the fake-engine backed service."""
    app = main_module.app
    app.dependency_overrides[routes_module.get_service] = lambda: service

    yield TestClient(app)

    app.dependency_overrides[routes_module.get_service] = main_module.get_service
