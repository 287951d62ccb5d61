"""
Tests for the JSON-backed mock storage client.
"""

import asyncio
import json

from salonslots.adapters.mock_store import MockStorageClient

from helpers import TZ, at


class TestMockStorageClient:
    """Tests for MockStorageClient with the bundled sample data."""

    def test_bundled_data_loads(self):
        client = MockStorageClient()

        professionals = asyncio.run(client.list_professionals())

        assert [p.name for p in professionals] == ["Ana Souza", "Bruno Lima", "Carla Mendes"]

    def test_appointments_for_day(self):
        client = MockStorageClient()

        appointments = asyncio.run(
            client.get_appointments(1, at("2024-11-25"), at("2024-11-26"), TZ)
        )

        assert [a.id for a in appointments] == [101, 102]
        assert appointments[0].appointment_date == at("2024-11-25 10:00")

    def test_absences(self):
        client = MockStorageClient()

        assert asyncio.run(client.get_absences(1, at("2024-11-26")))[0].reason == "Curso de coloração"
        assert asyncio.run(client.get_absences(1, at("2024-11-25"))) == []

    def test_custom_file_and_invalid_rows(self, tmp_path):
        data_file = tmp_path / "salon.json"
        data_file.write_text(json.dumps({
            "professionals": [
                {"id": 5, "name": "Eva", "work_start_time": "8:00", "work_end_time": "12:00"},
                {"id": 6, "name": "Broken", "work_start_time": "99:00"},
            ]
        }), encoding="utf-8")

        client = MockStorageClient(data_file=data_file)

        assert asyncio.run(client.get_professional(5)).name == "Eva"
        assert asyncio.run(client.get_professional(6)) is None
        assert asyncio.run(client.test_connection()) == 1

    def test_missing_file_means_empty_data(self, tmp_path):
        client = MockStorageClient(data_file=tmp_path / "missing.json")

        assert asyncio.run(client.list_professionals()) == []
