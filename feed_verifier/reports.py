"""Render verification outcomes for the console."""

import json
from collections import Counter

from feed_verifier.classifier import OutcomeStatus

_LABELS = {
    OutcomeStatus.VALID: "Valid",
    OutcomeStatus.INVALID: "Invalid",
    OutcomeStatus.EXCEPTION: "Exception",
}


def format_outcome(outcome, show_valid=False):
    """Format one outcome as a report line.

    Args:
        outcome: FeedOutcome to render.
        show_valid: Also render VALID outcomes.

    Returns:
        Line such as ``Invalid: <url>``, or None if the outcome is not shown.
    """
    if outcome.status is OutcomeStatus.VALID and not show_valid:
        return None
    return f"{_LABELS[outcome.status]}: {outcome.url}"


def summarize(outcomes):
    """Count outcomes by status.

    Returns:
        Dict with keys: total, valid, invalid, exception.
    """
    counts = Counter(outcome.status for outcome in outcomes)
    return {
        "total": sum(counts.values()),
        "valid": counts[OutcomeStatus.VALID],
        "invalid": counts[OutcomeStatus.INVALID],
        "exception": counts[OutcomeStatus.EXCEPTION],
    }


def format_summary(outcomes):
    """Build the one-line summary printed after a run."""
    stats = summarize(outcomes)
    return (
        f"Checked {stats['total']} feeds: {stats['valid']} valid, "
        f"{stats['invalid']} invalid, {stats['exception']} exceptions"
    )


def outcomes_to_json(outcomes):
    """Serialize outcomes to a JSON array string.

    Args:
        outcomes: Iterable of FeedOutcome.

    Returns:
        Indented JSON with one object per outcome.
    """
    data = [
        {
            "url": outcome.url,
            "status": outcome.status.value,
            "reason": outcome.reason,
            "path": list(outcome.path),
        }
        for outcome in outcomes
    ]
    return json.dumps(data, indent=2)
