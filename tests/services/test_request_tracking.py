from unittest.mock import Mock

import pytest
import requests

from checkcx.services.inflight_counter import InflightCounter
from checkcx.services.request_tracking import PATCH_FLAG, TrackingPolicy, install_fetch_interceptor

ORIGIN = "http://admin.local:8000"


@pytest.fixture
def policy():
    return TrackingPolicy(origin=ORIGIN)


def test_same_origin_api_path_is_tracked(policy):
    assert policy.should_track("/api/configs/")
    assert policy.should_track(f"{ORIGIN}/api/groups/")


def test_same_origin_non_api_path_is_not_tracked(policy):
    assert not policy.should_track("/")
    assert not policy.should_track(f"{ORIGIN}/configs")


def test_cross_origin_is_tracked(policy):
    assert policy.should_track("https://api.example.com/v1/things")
    assert policy.should_track("http://admin.local:9000/anything")


def test_cache_bust_marker_is_not_tracked(policy):
    assert not policy.should_track("/api/configs/?_rsc=abc")
    assert not policy.should_track("/api/configs/", params={"_rsc": "1"})


def test_internal_asset_path_is_not_tracked(policy):
    assert not policy.should_track("/static/app.css")
    assert not policy.should_track("https://cdn.example.com/static/app.js")


@pytest.mark.parametrize("name", ["purpose", "Purpose", "sec-purpose", "Sec-Purpose"])
def test_prefetch_is_not_tracked(policy, name):
    assert not policy.should_track("/api/configs/", headers={name: "prefetch"})


def test_purpose_header_wins_over_sec_purpose(policy):
    assert policy.should_track("/api/configs/", headers={"purpose": "navigate", "sec-purpose": "prefetch"})


def test_policy_without_origin_tracks_nothing():
    detached = TrackingPolicy(origin=None)
    assert not detached.should_track("https://api.example.com/v1/things")
    assert not detached.should_track("/api/configs/")


def test_unparseable_url_is_not_tracked(policy):
    assert not policy.should_track("http://admin.local:notaport/api/")


def _session_with(original):
    session = requests.Session()
    session.request = original
    return session


def test_interceptor_brackets_tracked_request_and_passes_result_through(policy):
    counter = InflightCounter()
    observed = []
    response = Mock(status_code=200)

    def original(method, url, *args, **kwargs):
        observed.append(counter.peek())
        return response

    session = _session_with(original)
    assert install_fetch_interceptor(session, counter, policy) is True

    result = session.request("GET", f"{ORIGIN}/api/configs/", timeout=5)

    assert result is response
    assert observed == [1]
    assert counter.peek() == 0


def test_interceptor_ends_on_exception_and_reraises(policy):
    counter = InflightCounter()
    err = requests.exceptions.ConnectionError("down")
    session = _session_with(Mock(side_effect=err))
    install_fetch_interceptor(session, counter, policy)

    with pytest.raises(requests.exceptions.ConnectionError) as exc:
        session.request("POST", f"{ORIGIN}/api/groups/", json={"a": 1})

    assert exc.value is err
    assert counter.peek() == 0


def test_interceptor_skips_untracked_requests(policy):
    counter = InflightCounter()
    events = []
    counter.subscribe(lambda: events.append(counter.peek()))
    session = _session_with(Mock(return_value="ok"))
    install_fetch_interceptor(session, counter, policy)

    assert session.request("GET", f"{ORIGIN}/static/logo.svg") == "ok"
    assert events == []


def test_interceptor_passes_arguments_unchanged(policy):
    original = Mock(return_value="ok")
    session = _session_with(original)
    install_fetch_interceptor(session, InflightCounter(), policy)

    session.request("PUT", "/api/x", json={"k": "v"}, headers={"X-Test": "1"}, timeout=3)

    original.assert_called_once_with("PUT", "/api/x", json={"k": "v"}, headers={"X-Test": "1"}, timeout=3)


def test_interceptor_uses_session_default_headers(policy):
    counter = InflightCounter()
    events = []
    counter.subscribe(lambda: events.append(1))
    session = _session_with(Mock(return_value="ok"))
    session.headers["Sec-Purpose"] = "prefetch"
    install_fetch_interceptor(session, counter, policy)

    session.request("GET", f"{ORIGIN}/api/configs/")

    assert events == []


def test_per_call_header_overrides_session_header_of_other_case(policy):
    counter = InflightCounter()
    session = _session_with(Mock(side_effect=lambda *a, **k: counter.peek()))
    session.headers["Purpose"] = "prefetch"
    install_fetch_interceptor(session, counter, policy)

    assert session.request("GET", f"{ORIGIN}/api/configs/", headers={"purpose": "navigate"}) == 1
    assert session.request("GET", f"{ORIGIN}/api/configs/") == 0


def test_install_is_idempotent(policy):
    counter = InflightCounter()
    observed = []

    def original(method, url, *args, **kwargs):
        observed.append(counter.peek())

    session = _session_with(original)
    assert install_fetch_interceptor(session, counter, policy) is True
    assert install_fetch_interceptor(session, counter, policy) is False
    assert getattr(session, PATCH_FLAG) is True

    session.request("GET", f"{ORIGIN}/api/configs/")
    assert observed == [1]


def test_session_get_goes_through_interceptor(policy):
    counter = InflightCounter()
    observed = []

    def original(method, url, *args, **kwargs):
        observed.append((method, counter.peek()))

    session = _session_with(original)
    install_fetch_interceptor(session, counter, policy)

    session.get(f"{ORIGIN}/api/dashboard/")

    assert observed == [("GET", 1)]
