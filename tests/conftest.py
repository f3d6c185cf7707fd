"""Shared fixtures: sample animals and a fake Petfinder API behind httpx.MockTransport."""
from __future__ import annotations

import argparse
from urllib.parse import parse_qs

import httpx
import pytest

BASE_URL = "https://api.petfinder.test/v2"


def make_animal(id, name, type="Dog", age="Adult", breed="Labrador Retriever", description=None, **extra):
    animal = {
        "id": id,
        "name": name,
        "type": type,
        "age": age,
        "gender": "Female",
        "size": "Medium",
        "status": "adoptable",
        "breeds": {"primary": breed, "secondary": None, "mixed": False, "unknown": False},
        "colors": {"primary": "Black", "secondary": None, "tertiary": None},
        "description": description,
        "photos": [],
        "tags": [],
        "contact": {"email": "shelter@example.org", "phone": None,
                    "address": {"city": "Austin", "state": "TX"}},
    }
    animal.update(extra)
    return animal


@pytest.fixture
def animals():
    return [
        make_animal(1, "Biscuit", age="Baby", description="Loves long walks"),
        make_animal(2, "Whiskers", type="Cat", age="Baby", breed="Domestic Short Hair"),
        make_animal(3, "Shadow", type="Cat", age="Adult", breed="Siamese", description="Quiet LAP cat"),
        make_animal(4, "Thumper", type="Rabbit", age="Senior", breed="Lionhead"),
    ]


class FakePetfinder:
    """Records requests and answers like the Petfinder API."""

    def __init__(self, animals=None, token_status=200, list_status=200, detail_status=200, detail=None):
        self.animals = animals or []
        self.token_status = token_status
        self.list_status = list_status
        self.detail_status = detail_status
        self.detail = detail
        self.requests: list[httpx.Request] = []
        self.tokens_issued = 0

    def paths(self):
        return [r.url.path for r in self.requests]

    def data_requests(self):
        return [r for r in self.requests if not r.url.path.endswith("/oauth2/token")]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v2")
        if path == "/oauth2/token":
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"title": "invalid_client"})
            self.tokens_issued += 1
            form = parse_qs(request.content.decode())
            assert form["grant_type"] == ["client_credentials"]
            return httpx.Response(200, json={
                "token_type": "Bearer", "expires_in": 3600, "access_token": f"tok-{self.tokens_issued}",
            })
        assert request.headers["authorization"].startswith("Bearer tok-")
        if path == "/animals":
            if self.list_status != 200:
                return httpx.Response(self.list_status, json={})
            return httpx.Response(200, json={"animals": self.animals})
        if path.startswith("/animals/"):
            if self.detail_status != 200:
                return httpx.Response(self.detail_status, json={})
            return httpx.Response(200, json={"animal": self.detail})
        return httpx.Response(404, json={})


@pytest.fixture
def settings():
    return argparse.Namespace(
        client_id="client-123",
        client_secret="secret-456",
        base_url=BASE_URL,
        connect_timeout=1.0,
        read_timeout=1.0,
        host="127.0.0.1",
        port=8000,
    )
