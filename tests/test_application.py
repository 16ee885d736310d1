import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient
from kink import di

from app.domain.geolocation import LocationProvider, LocationService


def test_lifespan_closes_the_shared_http_client(application: FastAPI):
    with TestClient(application):
        client = di[httpx.AsyncClient]
        assert not client.is_closed

    assert client.is_closed


def test_lifespan_can_run_more_than_once(application: FastAPI):
    with TestClient(application):
        first = di[httpx.AsyncClient]

    with TestClient(application) as api:
        second = di[httpx.AsyncClient]

        assert second is not first
        assert not second.is_closed
        assert di[LocationService].provider is di[LocationProvider]
        assert api.get('/api/v1/health/liveness').status_code == 200

    assert second.is_closed
