import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakePetfinder, make_animal
from pets_dashboard import web
from pets_dashboard.web import create_app


def run_app(settings, fake):
    return TestClient(create_app(settings, transport=httpx.MockTransport(fake)))


def test_health(settings):
    with run_app(settings, FakePetfinder()) as client:
        assert client.get("/health").json() == {"status": "ok"}


def test_auth_failure_renders_error_and_skips_data(settings):
    fake = FakePetfinder(token_status=401)
    with run_app(settings, fake) as client:
        resp = client.get("/")
    assert resp.status_code == 200
    assert "Error: Failed to authenticate with Petfinder API" in resp.text
    assert fake.data_requests() == []


def test_empty_list_renders_zero_pets(settings):
    fake = FakePetfinder(animals=[])
    with run_app(settings, fake) as client:
        resp = client.get("/")
    assert resp.status_code == 200
    assert '<p id="total-pets">0</p>' in resp.text
    assert '<p id="type-count">0</p>' in resp.text
    assert "No pets match." in resp.text


def test_dashboard_lists_filtered_pets_with_full_stats(settings, animals):
    fake = FakePetfinder(animals=animals)
    with run_app(settings, fake) as client:
        resp = client.get("/", params={"type": "cat", "q": "siam"})
    html = resp.text
    assert '<p id="total-pets">4</p>' in html
    assert '<p id="average-age">Young</p>' in html
    assert 'href="/pet/3"' in html
    assert 'href="/pet/1"' not in html
    assert "Cat (2)" in html
    assert "<svg" in html


def test_token_is_shared_across_views(settings, animals):
    fake = FakePetfinder(animals=animals, detail=animals[0])
    with run_app(settings, fake) as client:
        client.get("/")
        client.get("/pet/1")
    assert fake.tokens_issued == 1


def test_detail_page_fetches_single_record(settings):
    pet = make_animal(
        42, "Rex", breed="Beagle", description="Friendly",
        photos=[{"large": "https://img.example/rex.jpg", "medium": "https://img.example/rex-m.jpg"}],
        tags=["Playful", "Smart"],
    )
    fake = FakePetfinder(detail=pet)
    with run_app(settings, fake) as client:
        resp = client.get("/pet/42")
    html = resp.text
    assert [r.url.path for r in fake.data_requests()] == ["/v2/animals/42"]
    assert "<h1>Rex</h1>" in html
    assert '<p class="breed">Beagle</p>' in html
    assert "Mixed with" not in html
    assert "Phone:" not in html
    assert "1 photo<" in html
    assert "Location: Austin, TX" in html
    assert "<li>Playful</li>" in html


def test_detail_page_shows_secondary_breed(settings):
    pet = make_animal(7, "Pepper", breeds={"primary": "Beagle", "secondary": "Poodle"})
    with run_app(settings, FakePetfinder(detail=pet)) as client:
        html = client.get("/pet/7").text
    assert "Mixed with Poodle" in html


@pytest.mark.parametrize("status", [404, 500])
def test_detail_fetch_failure_renders_generic_error(settings, status):
    with run_app(settings, FakePetfinder(detail_status=status)) as client:
        html = client.get("/pet/999").text
    assert "Error: Failed to fetch pet details" in html


def test_missing_animal_renders_plain_not_found(settings):
    with run_app(settings, FakePetfinder(detail=None)) as client:
        html = client.get("/pet/5").text
    assert '<div class="error">Pet not found</div>' in html
    assert "Error: Pet not found" not in html


class FakeRequest:
    def __init__(self, disconnect_after):
        self.polls = 0
        self.disconnect_after = disconnect_after

    async def is_disconnected(self):
        self.polls += 1
        return self.polls >= self.disconnect_after


@pytest.mark.asyncio
async def test_disconnect_sets_cancel_signal(monkeypatch):
    monkeypatch.setattr(web, "DISCONNECT_POLL_SECONDS", 0)
    request = FakeRequest(disconnect_after=3)
    cancel = asyncio.Event()
    await asyncio.wait_for(web._cancel_on_disconnect(request, cancel), timeout=5)
    assert cancel.is_set()
    assert request.polls == 3


@pytest.mark.asyncio
async def test_watcher_stops_once_view_is_released():
    request = FakeRequest(disconnect_after=10**6)
    cancel = asyncio.Event()
    cancel.set()
    await asyncio.wait_for(web._cancel_on_disconnect(request, cancel), timeout=5)
    assert request.polls == 0
