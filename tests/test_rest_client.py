"""
Tests for the REST storage adapter.
"""

import asyncio
from typing import Any, Dict, List

import pytest
import requests

from salonslots.adapters.rest_client import RestStorageClient
from salonslots.domain.exceptions import StorageError

from helpers import TZ, at


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")

    def json(self) -> Any:
        return self._payload


class FakeSession:
    """Records GET calls and answers from a table -> payload map."""

    def __init__(self, tables: Dict[str, Any], status_code: int = 200):
        self.tables = tables
        self.status_code = status_code
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        table = url.rsplit("/", 1)[-1]
        return FakeResponse(self.tables.get(table, []), self.status_code)


class RaisingSession:
    def get(self, *args, **kwargs):
        raise requests.exceptions.ConnectionError("connection refused")


def _client(session) -> RestStorageClient:
    return RestStorageClient(
        base_url="https://salon.example.com/",
        api_key="secret",
        timeout=5,
        session=session,
    )


class TestRestStorageClient:
    """Tests for RestStorageClient."""

    def test_get_professional(self):
        session = FakeSession({
            "professionals": [
                {"id": 1, "name": "Ana", "work_start_time": "09:00:00", "work_end_time": "18:00:00"}
            ]
        })

        professional = asyncio.run(_client(session).get_professional(1))

        assert professional.name == "Ana"
        assert professional.has_work_hours()
        call = session.calls[0]
        assert call["url"] == "https://salon.example.com/rest/v1/professionals"
        assert ("id", "eq.1") in call["params"]
        assert call["headers"]["apikey"] == "secret"
        assert call["headers"]["Authorization"] == "Bearer secret"
        assert call["timeout"] == 5

    def test_get_professional_not_found(self):
        session = FakeSession({"professionals": []})

        assert asyncio.run(_client(session).get_professional(99)) is None

    def test_get_appointments_filters_and_converts(self):
        session = FakeSession({
            "appointments": [
                {
                    "id": 10,
                    "professional_id": 1,
                    "appointment_date": "2024-11-25T13:00:00+00:00",
                    "end_date": "2024-11-25T14:00:00+00:00",
                },
                {
                    "id": 11,
                    "professional_id": 1,
                    "appointment_date": "not a date",
                    "end_date": "2024-11-25T14:00:00+00:00",
                },
            ]
        })

        appointments = asyncio.run(
            _client(session).get_appointments(
                professional_id=1,
                start_time=at("2024-11-25"),
                end_time=at("2024-11-26"),
                timezone=TZ,
            )
        )

        # The invalid row is skipped
        assert len(appointments) == 1
        assert appointments[0].appointment_date == at("2024-11-25 10:00")
        params = session.calls[0]["params"]
        assert ("professional_id", "eq.1") in params
        assert ("appointment_date", "gte.2024-11-25T03:00:00Z") in params
        assert ("appointment_date", "lt.2024-11-26T03:00:00Z") in params

    def test_get_appointments_without_bounds(self):
        session = FakeSession({"appointments": []})

        asyncio.run(_client(session).get_appointments(1, None, None, TZ))

        keys = [key for key, _ in session.calls[0]["params"]]
        assert "appointment_date" not in keys

    def test_get_absences(self):
        session = FakeSession({
            "professional_absences": [
                {"id": 1, "professional_id": 1, "date": "2024-11-26", "reason": "Curso"}
            ]
        })

        absences = asyncio.run(_client(session).get_absences(1, at("2024-11-26")))

        assert absences[0].reason == "Curso"
        assert ("date", "eq.2024-11-26") in session.calls[0]["params"]

    def test_http_error_raises_storage_error(self):
        session = FakeSession({}, status_code=401)

        with pytest.raises(StorageError, match="professionals"):
            asyncio.run(_client(session).list_professionals())

    def test_connection_error_raises_storage_error(self):
        with pytest.raises(StorageError, match="connection refused"):
            asyncio.run(_client(RaisingSession()).test_connection())

    def test_unexpected_payload_raises_storage_error(self):
        session = FakeSession({"professionals": {"message": "oops"}})

        with pytest.raises(StorageError, match="expected a list"):
            asyncio.run(_client(session).list_professionals())
