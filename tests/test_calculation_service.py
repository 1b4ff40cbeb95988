import pytest
import requests

from calculation_service import CalculationClient, CalculationServiceFailure


class _FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, json=None, timeout=None):
        self.requests.append((url, json, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_calculate_posts_function_and_params():
    session = _FakeSession(_FakeResponse(payload={"force": "10 N", "time": 1.5}))
    client = CalculationClient("http://calc.local/", timeout=3, session=session)

    result = client.calculate("P0", {"diameter": "40"})

    assert result == {"force": "10 N", "time": "1.5"}
    assert session.requests == [
        ("http://calc.local/calculate", {"functionId": "P0", "params": {"diameter": "40"}}, 3),
    ]


def test_error_payload_is_reported():
    session = _FakeSession(_FakeResponse(400, {"error": "diameter out of range"}))
    client = CalculationClient("http://calc.local", session=session)
    with pytest.raises(CalculationServiceFailure, match="diameter out of range"):
        client.calculate("P0", {})


def test_error_without_payload_uses_status():
    session = _FakeSession(_FakeResponse(500))
    client = CalculationClient("http://calc.local", session=session)
    with pytest.raises(CalculationServiceFailure, match="server error: 500"):
        client.calculate("P0", {})


def test_transport_errors_are_wrapped():
    session = _FakeSession(error=requests.ConnectionError("connection refused"))
    client = CalculationClient("http://calc.local", session=session)
    with pytest.raises(CalculationServiceFailure, match="connection refused"):
        client.calculate("P0", {})


def test_non_mapping_response_is_rejected():
    session = _FakeSession(_FakeResponse(payload=["not", "a", "dict"]))
    client = CalculationClient("http://calc.local", session=session)
    with pytest.raises(CalculationServiceFailure):
        client.calculate("P0", {})
