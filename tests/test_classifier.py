"""Tests for the feed classifier."""

from unittest.mock import patch, MagicMock

import pytest
import requests

from feed_verifier.classifier import (
    DEFAULT_EXCEPTIONS,
    FeedOutcome,
    OutcomeStatus,
    classify_feed,
    matches_exception,
)


def _response(status_code=200, content_type="application/rss+xml"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = {"Content-Type": content_type} if content_type is not None else {}
    return resp


def test_xml_content_type_is_valid():
    resp = _response(200, "application/rss+xml; charset=utf-8")
    with patch("feed_verifier.classifier.requests.get", return_value=resp) as get:
        outcome = classify_feed("https://example.com/feed", timeout=5)

    assert outcome.status is OutcomeStatus.VALID
    assert outcome.is_valid
    assert outcome.url == "https://example.com/feed"
    get.assert_called_once_with("https://example.com/feed", timeout=5, stream=True)
    resp.close.assert_called_once()


def test_html_content_type_is_invalid():
    resp = _response(200, "text/html")
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        outcome = classify_feed("https://example.com/blog")

    assert outcome.status is OutcomeStatus.INVALID
    assert not outcome.is_valid
    assert "text/html" in outcome.reason
    resp.close.assert_called_once()


def test_missing_content_type_is_invalid():
    resp = _response(200, None)
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        outcome = classify_feed("https://example.com/feed")

    assert outcome.status is OutcomeStatus.INVALID
    assert "missing" in outcome.reason


def test_404_is_invalid_even_with_xml():
    resp = _response(404, "application/xml")
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        outcome = classify_feed("https://example.com/gone.xml")

    assert outcome.status is OutcomeStatus.INVALID
    assert outcome.reason == "status 404"
    resp.close.assert_called_once()


def test_exception_list_overrides_content_type():
    resp = _response(200, "text/html")
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        outcome = classify_feed("https://os.phil-opp.com/atom.xml")

    assert outcome.status is OutcomeStatus.EXCEPTION
    assert outcome.is_valid


def test_exception_list_applies_even_when_content_type_passes():
    resp = _response(200, "application/atom+xml")
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        outcome = classify_feed("https://www.digitalocean.com/blog/rss")

    assert outcome.status is OutcomeStatus.EXCEPTION


def test_exception_list_checked_after_status():
    resp = _response(500, "text/html")
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        outcome = classify_feed("https://os.phil-opp.com/atom.xml")

    assert outcome.status is OutcomeStatus.INVALID


def test_custom_exception_list():
    resp = _response(200, "text/plain")
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        outcome = classify_feed("https://custom.test/feed", exceptions=("custom.test",))
        default = classify_feed("https://custom.test/feed")

    assert outcome.status is OutcomeStatus.EXCEPTION
    assert default.status is OutcomeStatus.INVALID


def test_network_error_is_invalid():
    with patch(
        "feed_verifier.classifier.requests.get",
        side_effect=requests.ConnectionError("Name or service not known"),
    ):
        outcome = classify_feed("http://unreachable.invalid/feed")

    assert outcome.status is OutcomeStatus.INVALID
    assert outcome.reason.startswith("ConnectionError")


def test_timeout_is_invalid():
    with patch("feed_verifier.classifier.requests.get", side_effect=requests.Timeout("slow")):
        outcome = classify_feed("https://slow.test/feed", timeout=0.1)

    assert outcome.status is OutcomeStatus.INVALID


def test_malformed_url_is_invalid():
    with patch(
        "feed_verifier.classifier.requests.get",
        side_effect=requests.exceptions.MissingSchema("no scheme"),
    ):
        outcome = classify_feed("not-a-url")

    assert outcome.status is OutcomeStatus.INVALID


def test_empty_url_makes_no_request():
    with patch("feed_verifier.classifier.requests.get") as get:
        outcome = classify_feed("")

    assert outcome == FeedOutcome("", OutcomeStatus.INVALID, "empty url")
    get.assert_not_called()


def test_content_type_case_sensitive_by_default():
    resp = _response(200, "TEXT/XML")
    with patch("feed_verifier.classifier.requests.get", return_value=resp):
        strict = classify_feed("https://upper.test/feed")
        relaxed = classify_feed("https://upper.test/feed", ignore_content_type_case=True)

    assert strict.status is OutcomeStatus.INVALID
    assert relaxed.status is OutcomeStatus.VALID


def test_matches_exception_modes():
    exceptions = ("https://a.test/feed",)
    url = "https://a.test/feed?format=atom"

    assert matches_exception(url, exceptions, "substring")
    assert matches_exception(url, exceptions, "prefix")
    assert not matches_exception(url, exceptions, "exact")
    assert matches_exception("https://a.test/feed", exceptions, "exact")

    mirror = "https://mirror.test/?src=https://a.test/feed"
    assert matches_exception(mirror, exceptions, "substring")
    assert not matches_exception(mirror, exceptions, "prefix")


def test_matches_exception_unknown_mode():
    with pytest.raises(ValueError):
        matches_exception("https://a.test", DEFAULT_EXCEPTIONS, "regex")
