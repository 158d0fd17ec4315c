import pytest
import requests

from restaurant_sync.vendors import google_places


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = None
        self.error = None

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def patch_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(google_places, "_SESSION", session)
    return session


def test_place_details_success(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK", "result": {"name": "Acme"}})
    result = google_places.place_details("pid", "key")

    assert result["name"] == "Acme"
    url, params, timeout = patch_session.calls[0]
    assert url.endswith("/details/json")
    assert params["place_id"] == "pid"
    assert params["key"] == "key"
    assert timeout == 10


def test_place_details_requests_restricted_fields(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK", "result": {}})
    google_places.place_details("pid", "key", timeout=3)

    _, params, timeout = patch_session.calls[0]
    assert params["fields"].split(",") == [
        "name",
        "formatted_address",
        "geometry/location",
        "opening_hours",
        "utc_offset",
        "website",
        "formatted_phone_number",
        "url",
        "business_status",
    ]
    assert timeout == 3


def test_place_details_error_status(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OVER_QUERY_LIMIT", "error_message": "limit"})
    with pytest.raises(google_places.GooglePlacesError) as excinfo:
        google_places.place_details("pid", "key")

    assert excinfo.value.status == "OVER_QUERY_LIMIT"
    assert excinfo.value.message == "limit"


def test_place_details_zero_results_is_a_failure(patch_session):
    patch_session.response = DummyResponse(payload={"status": "ZERO_RESULTS"})
    with pytest.raises(google_places.GooglePlacesError) as excinfo:
        google_places.place_details("pid", "key")

    assert excinfo.value.status == "ZERO_RESULTS"
    assert excinfo.value.message is None


def test_place_details_http_error_is_request_failed(patch_session):
    patch_session.response = DummyResponse(status_code=503)
    with pytest.raises(google_places.GooglePlacesError) as excinfo:
        google_places.place_details("pid", "key")

    assert excinfo.value.status == google_places.REQUEST_FAILED


def test_place_details_connection_error_is_request_failed(patch_session):
    patch_session.error = requests.ConnectionError("boom")
    with pytest.raises(google_places.GooglePlacesError) as excinfo:
        google_places.place_details("pid", "key")

    assert excinfo.value.status == google_places.REQUEST_FAILED
    assert "boom" in excinfo.value.message


def test_place_details_non_object_body_is_request_failed(patch_session):
    patch_session.response = DummyResponse(payload=["unexpected"])
    with pytest.raises(google_places.GooglePlacesError) as excinfo:
        google_places.place_details("pid", "key")

    assert excinfo.value.status == google_places.REQUEST_FAILED
    assert excinfo.value.message == "unexpected response body"


def test_place_details_non_object_result_returns_empty(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK", "result": ["not", "a", "dict"]})
    assert google_places.place_details("pid", "key") == {}
