"""Tests for the HTTP control surface."""

import pytest
from fastapi.testclient import TestClient

from rsharkd.api import create_app, error_payload
from rsharkd.exceptions import AggregateError, DeviceNotFoundError, RangeError
from rsharkd.radio.packets import Opcode


@pytest.fixture
def client(started_service):
    """Test client around a started service with a mock radio."""
    return TestClient(create_app(started_service))


@pytest.mark.integration
class TestGet:
    """Test reading the configuration."""

    def test_get_default(self, client):
        response = client.get("/config/get")

        assert response.status_code == 200
        assert response.json() == {
            "modulation": "FM",
            "frequency": "88.0",
            "blue-led-intensity": 127,
            "blue-led-pulse-rate": 0,
            "red-led": False,
        }

    def test_wrong_method(self, client):
        response = client.post("/config/get")

        assert response.status_code == 405
        assert response.json() == {"error": "method not allowed"}

    def test_unknown_path(self, client):
        response = client.get("/config/nothing")

        assert response.status_code == 404
        assert response.json() == {"error": "not found"}


@pytest.mark.integration
class TestApplyJson:
    """Test PUT /config/apply."""

    def test_apply(self, client, mock_device, mock_store):
        body = {
            "modulation": "FM",
            "frequency": "101.1",
            "blue-led-intensity": 64,
            "blue-led-pulse-rate": 0,
            "red-led": True,
        }

        response = client.put("/config/apply", json=body)

        assert response.status_code == 200
        assert response.json() == body
        assert client.get("/config/get").json() == body
        assert mock_device.send.call_count == 4
        mock_store.save.assert_called_once()

    def test_missing_fields_use_defaults(self, client):
        response = client.put("/config/apply", json={"red-led": True})

        assert response.status_code == 200
        assert response.json()["frequency"] == "88.0"
        assert response.json()["red-led"] is True

    def test_invalid_values(self, client, mock_device):
        response = client.put(
            "/config/apply",
            json={"frequency": "200.0", "blue-led-intensity": 200},
        )

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == (
            "FM frequency must be between 88.0 and 108.0, intensity must be at most 127"
        )
        assert [e["field"] for e in payload["errors"]] == ["frequency", "blue-led-intensity"]
        mock_device.send.assert_not_called()

    def test_malformed_body(self, client):
        response = client.put(
            "/config/apply",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_wrong_type(self, client):
        response = client.put("/config/apply", json={"blue-led-intensity": "bright"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "blue-led-intensity"

    def test_device_failure(self, client, mock_device, fail_on_opcodes):
        mock_device.send.side_effect = fail_on_opcodes(Opcode.RED_ON)

        response = client.put("/config/apply", json={"red-led": True})

        assert response.status_code == 400
        payload = response.json()
        assert "opcode 0xa9 rejected" in payload["error"]
        assert payload["errors"][0]["field"] == "red-led"
        assert payload["errors"][0]["kind"] == "DeviceIOError"


@pytest.mark.integration
class TestApplyForm:
    """Test POST /config/apply (web UI form)."""

    def test_partial_form(self, client, mock_device, sent_packets):
        response = client.post("/config/apply", data={"red-led": "true"})

        assert response.status_code == 200
        assert response.json()["red-led"] is True
        assert response.json()["frequency"] == "88.0"
        assert Opcode.FREQUENCY not in [p[0] for p in sent_packets(mock_device)]

    def test_tune(self, client):
        response = client.post("/config/apply", data={"modulation": "AM", "frequency": "1000"})

        assert response.status_code == 200
        assert client.get("/config/get").json()["modulation"] == "AM"

    def test_device_limit(self, client):
        response = client.post("/config/apply", data={"blue-led-pulse-rate": "128"})

        assert response.status_code == 400
        assert response.json()["error"] == "rate must be at most 127"

    def test_out_of_model_range(self, client):
        response = client.post("/config/apply", data={"blue-led-intensity": "300"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "blue-led-intensity"

    def test_not_a_number(self, client):
        response = client.post("/config/apply", data={"blue-led-intensity": "lots"})

        assert response.status_code == 400


@pytest.mark.integration
class TestValidate:
    """Test PUT /config/validate."""

    def test_validate_has_no_side_effects(self, client, mock_device, mock_store):
        response = client.put("/config/validate", json={"modulation": "AM", "frequency": "530"})

        assert response.status_code == 400
        assert "AM frequency must be between 535 and 1705" in response.json()["error"]

        response = client.put("/config/validate", json={"modulation": "AM", "frequency": "540"})

        assert response.status_code == 200
        assert response.json() == {"valid": True}
        mock_device.send.assert_not_called()
        mock_store.save.assert_not_called()

    def test_unknown_modulation(self, client):
        response = client.put("/config/validate", json={"modulation": "DAB"})

        assert response.status_code == 400
        assert response.json()["error"] == "unknown modulation DAB"


@pytest.mark.integration
def test_static_files(started_service, tmp_path):
    (tmp_path / "index.html").write_text("<html>radio</html>", encoding="utf-8")
    client = TestClient(create_app(started_service, static_root=tmp_path))

    assert "radio" in client.get("/").text
    assert client.get("/config/get").status_code == 200


@pytest.mark.unit
def test_error_payload():
    single = error_payload(DeviceNotFoundError("001:004"))
    assert single["error"] == "RadioSHARK 001:004 not found."
    assert single["errors"][0]["kind"] == "DeviceNotFoundError"

    aggregate = error_payload(AggregateError([RangeError("too big", field="red-led")]))
    assert aggregate == {
        "error": "too big",
        "errors": [{"field": "red-led", "kind": "RangeError", "message": "too big"}],
    }
