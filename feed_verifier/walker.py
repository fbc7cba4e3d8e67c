"""Verify every feed in an outline tree concurrently."""

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from tqdm import tqdm

from feed_verifier.classifier import FeedOutcome, OutcomeStatus, classify_feed
from feed_verifier.opml_parser import iter_feeds

logger = logging.getLogger(__name__)


def verify_tree(nodes, classify=None, max_workers=16, on_outcome=None, progress=False):
    """Classify every feed-typed node in the tree on a bounded thread pool.

    Feed nodes are found at any depth; a node that is both a feed and a
    folder is classified and its children are checked as well. The call
    returns only after every classification has finished.

    Args:
        nodes: Sequence of OutlineNode (the top level of the tree).
        classify: Callable taking a URL and returning a FeedOutcome.
            Defaults to classify_feed with its default settings.
        max_workers: Maximum number of concurrent requests.
        on_outcome: Optional callable invoked with each FeedOutcome as soon
            as it is available, always from the calling thread.
        progress: Show a tqdm progress bar on stderr.

    Returns:
        List of FeedOutcome in completion order, one per feed node.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")
    if classify is None:
        classify = classify_feed

    work = list(iter_feeds(nodes))
    if not work:
        return []

    outcomes = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_item = {
            executor.submit(classify, node.xml_url): (path, node) for path, node in work
        }
        for future in tqdm(as_completed(future_to_item), total=len(work),
                           desc="Checking feeds", disable=not progress):
            path, node = future_to_item[future]
            try:
                outcome = future.result()
            except Exception as exc:
                logger.exception("Classification of %s failed", node.xml_url)
                outcome = FeedOutcome(node.xml_url, OutcomeStatus.INVALID,
                                      f"{type(exc).__name__}: {exc}")
            outcome = dataclasses.replace(outcome, path=path)
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

    return outcomes
