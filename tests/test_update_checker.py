import threading
import time

import pytest
import requests

from ryu_mod_manager.core import update_checker
from ryu_mod_manager.core.update_checker import (
    ReleaseInfo,
    ReleaseLookupError,
    UpdateChecker,
    build_update_report,
    fetch_latest_release,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def test_fetch_latest_release_parses_payload(monkeypatch):
    calls = []

    def fake_get(url, **kwargs):
        calls.append(url)
        return FakeResponse({"tag_name": "v1.8", "name": "v1.8 CLI", "html_url": "https://example.com/r"})

    monkeypatch.setattr(update_checker.requests, "get", fake_get)

    release = fetch_latest_release("owner", "repo")

    assert release == ReleaseInfo("v1.8", "v1.8 CLI", "https://example.com/r")
    assert calls == ["https://api.github.com/repos/owner/repo/releases/latest"]


@pytest.mark.parametrize("response", [
    FakeResponse({}, status_code=404),
    FakeResponse(ValueError("not json")),
    FakeResponse({"name": "no tag"}),
    FakeResponse(["not", "a", "dict"]),
])
def test_fetch_latest_release_errors(monkeypatch, response):
    monkeypatch.setattr(update_checker.requests, "get", lambda url, **kwargs: response)

    with pytest.raises(ReleaseLookupError):
        fetch_latest_release("owner", "repo")


def test_fetch_latest_release_network_error(monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(update_checker.requests, "get", fake_get)

    with pytest.raises(ReleaseLookupError):
        fetch_latest_release("owner", "repo")


def test_report_new_version():
    release = ReleaseInfo("v1.8", "Ryu Mod Manager CLI v1.8", "https://example.com/v1.8")

    lines = build_update_report(release, "v1.7").lines

    assert "New version detected!" in lines
    assert "Current version: v1.7" in lines
    assert "New version: v1.8" in lines
    assert "Please update by going to https://example.com/v1.8" in lines


@pytest.mark.parametrize("release", [
    ReleaseInfo("v1.7", "Ryu Mod Manager CLI v1.7", "url"),
    ReleaseInfo("v2.0", "Ryu Mod Manager GUI v2.0", "url"),
])
def test_report_up_to_date(release):
    assert build_update_report(release, "v1.7").lines[0] == "Current version is up to date"


def test_report_is_buffered(capsys):
    build_update_report(ReleaseInfo("v1.7", "CLI", "url"), "v1.7")

    assert capsys.readouterr().out == ""


def test_join_returns_report(monkeypatch):
    monkeypatch.setattr(update_checker, "fetch_latest_release",
                        lambda owner, repo: ReleaseInfo("v9", "CLI v9", "url"))
    checker = UpdateChecker(current_version="v1.7")

    checker.start()
    report = checker.join(timeout=5.0)

    assert report is not None
    assert "New version: v9" in report.lines


def test_failure_yields_none(monkeypatch):
    def fail(owner, repo):
        raise ReleaseLookupError("boom")

    monkeypatch.setattr(update_checker, "fetch_latest_release", fail)
    checker = UpdateChecker()

    checker.start()

    assert checker.join(timeout=5.0) is None


def test_unexpected_error_yields_none(monkeypatch):
    def fail(owner, repo):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(update_checker, "fetch_latest_release", fail)

    assert UpdateChecker().check() is None


def test_join_is_bounded_and_drops_late_result(monkeypatch):
    release_gate = threading.Event()

    def slow_fetch(owner, repo):
        release_gate.wait(timeout=10)
        return ReleaseInfo("v9", "CLI v9", "url")

    monkeypatch.setattr(update_checker, "fetch_latest_release", slow_fetch)
    checker = UpdateChecker()
    checker.start()

    started = time.monotonic()
    report = checker.join(timeout=0.2)
    elapsed = time.monotonic() - started

    assert report is None
    assert elapsed < 2.0

    # Late results are not handed out afterwards
    release_gate.set()
    checker._thread.join(timeout=5)
    assert checker.join(timeout=0.2) is None


def test_join_without_start_returns_none():
    checker = UpdateChecker()

    assert checker.started is False
    assert checker.join(timeout=0.1) is None
