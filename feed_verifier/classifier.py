"""Decide whether a feed URL serves something that looks like an RSS/Atom feed."""

import enum
import logging
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)

# Feeds known to be valid even though they do not send an XML Content-Type.
# The os.phil-opp.com feed is valid but some readers still fail to parse it.
DEFAULT_EXCEPTIONS = (
    "https://os.phil-opp.com/atom.xml",
    "https://www.digitalocean.com/blog/rss",
)

MATCH_MODES = ("substring", "prefix", "exact")


class OutcomeStatus(enum.Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class FeedOutcome:
    """Result of checking one feed URL; ``path`` locates it in the outline tree."""

    url: str
    status: OutcomeStatus
    reason: str = ""
    path: tuple = ()

    @property
    def is_valid(self):
        return self.status is not OutcomeStatus.INVALID


def matches_exception(url, exceptions, match="substring"):
    """Check a URL against the exception list.

    Args:
        url: Feed URL being classified.
        exceptions: Iterable of exception entries.
        match: 'substring', 'prefix' or 'exact'.

    Returns:
        True if any entry matches the URL under the given mode.
    """
    if match == "substring":
        return any(entry in url for entry in exceptions)
    if match == "prefix":
        return any(url.startswith(entry) for entry in exceptions)
    if match == "exact":
        return url in exceptions
    raise ValueError(f"unknown match mode: {match!r}")


def classify_feed(url, exceptions=DEFAULT_EXCEPTIONS, timeout=30, match="substring",
                  ignore_content_type_case=False):
    """Fetch a URL once and classify it as a valid feed, invalid, or exception.

    Network failures never propagate; they become an INVALID outcome. The
    exception list is consulted only after a 200 response and takes priority
    over the Content-Type check.

    Args:
        url: Feed URL to check.
        exceptions: URL entries that are valid regardless of Content-Type.
        timeout: Request timeout in seconds.
        match: How exception entries are matched against the URL.
        ignore_content_type_case: Lower-case the Content-Type before looking
            for "xml".

    Returns:
        FeedOutcome for the URL.
    """
    if not url:
        return FeedOutcome(url, OutcomeStatus.INVALID, "empty url")

    try:
        resp = requests.get(url, timeout=timeout, stream=True)
    except requests.RequestException as exc:
        logger.info("Request to %s failed: %s", url, exc)
        return FeedOutcome(url, OutcomeStatus.INVALID, f"{type(exc).__name__}: {exc}")

    try:
        if resp.status_code != 200:
            return FeedOutcome(url, OutcomeStatus.INVALID, f"status {resp.status_code}")

        if matches_exception(url, exceptions, match):
            logger.debug("%s matched the exception list", url)
            return FeedOutcome(url, OutcomeStatus.EXCEPTION, "exception list")

        content_type = resp.headers.get("Content-Type", "")
        checked = content_type.lower() if ignore_content_type_case else content_type
        if "xml" not in checked:
            return FeedOutcome(url, OutcomeStatus.INVALID, f"content-type {content_type or 'missing'}")

        return FeedOutcome(url, OutcomeStatus.VALID, content_type)
    finally:
        resp.close()
