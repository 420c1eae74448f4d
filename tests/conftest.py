"""Shared pytest fixtures: in-memory store, Zoho config and mocked Zoho HTTP."""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from src.database.postgres import PostgresDB
from src.integrations.zoho.token_cache import TokenCache
from src.utils.config_loader import SmtpConfig, ZohoConfig

TOKEN_URL = "https://accounts.test/oauth/v2/token"
CREATOR_BASE = "https://creator.test/api/v2"
DATA_BASE = "https://data.test/creator/v2.1/data"


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class ZohoStub:
    """Routes requests from httpx.MockTransport and records them."""

    def __init__(self):
        self.requests = []
        self.token_calls = 0
        self.token_response = (200, {"access_token": "tok-1", "expires_in": 3600})
        self.create_response = (200, {"code": 3000, "data": {"ID": "123"}})
        self.upload_response = (200, {"code": 3000})
        self.upload_queue = []
        self.report_response = (200, {"code": 3000, "data": [{"ID": "1", "Project_Title": "Reef"}]})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url.startswith(TOKEN_URL):
            self.token_calls += 1
            status, body = self.token_response
            # hand out a fresh token per exchange so tests can tell them apart
            if isinstance(body, dict) and body.get("access_token"):
                body = {**body, "access_token": f"tok-{self.token_calls}"}
        elif "/form/" in url:
            status, body = self.create_response
        elif url.split("?")[0].endswith("/upload"):
            status, body = self.upload_queue.pop(0) if self.upload_queue else self.upload_response
        elif "/report/" in url:
            status, body = self.report_response
        else:
            return httpx.Response(404, json={"message": "not found"})
        if isinstance(body, (dict, list)):
            return httpx.Response(status, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})
        return httpx.Response(status, text=body or "")

    def requests_to(self, fragment: str):
        return [r for r in self.requests if fragment in str(r.url)]


@pytest.fixture
def db():
    """In-memory PostgresDB stub for tests."""
    return PostgresDB()


@pytest.fixture
def zoho_config():
    return ZohoConfig(
        token_url=TOKEN_URL,
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="https://app.test/callback",
        refresh_token="refresh-token",
        org_id="belizefund",
        app_id="grants",
        creator_api_base=CREATOR_BASE,
        data_api_base=DATA_BASE,
        proposal_form="GAP_Proposal",
        concept_form="GAP_Concept_Paper",
        community_form="Community_Proposal",
        upload_report="All_Gap_Concept_Paper",
        concept_report="All_Gap_Concept_Paper",
    )


@pytest.fixture
def smtp_config():
    return SmtpConfig(host="", user="", password="")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def zoho_stub():
    return ZohoStub()


@pytest.fixture
async def http_client(zoho_stub):
    async with httpx.AsyncClient(transport=httpx.MockTransport(zoho_stub.handler)) as client:
        yield client


@pytest.fixture
def token_cache(zoho_config, clock, http_client):
    return TokenCache(zoho_config, clock=clock, client=http_client)
