"""Runtime configuration for feed verification."""

from dataclasses import dataclass
from functools import partial

from feed_verifier.classifier import DEFAULT_EXCEPTIONS, MATCH_MODES, classify_feed

DEFAULT_TIMEOUT = 30
DEFAULT_WORKERS = 16


@dataclass(frozen=True)
class VerifierConfig:
    exceptions: tuple = DEFAULT_EXCEPTIONS
    timeout: float = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_WORKERS
    match: str = "substring"
    ignore_content_type_case: bool = False

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.match not in MATCH_MODES:
            raise ValueError(f"unknown match mode: {self.match!r}")

    def classifier(self):
        """Return a single-argument classify callable bound to this config."""
        return partial(
            classify_feed,
            exceptions=tuple(self.exceptions),
            timeout=self.timeout,
            match=self.match,
            ignore_content_type_case=self.ignore_content_type_case,
        )


def load_exceptions(path):
    """Read exception URL substrings from a file, one per line.

    Blank lines and lines starting with ``#`` are skipped.

    Args:
        path: Path to the exceptions file.

    Returns:
        Tuple of exception strings in file order.
    """
    entries = []
    with open(path, encoding="utf-8") as fh:
        for line in fh:
            text = line.strip()
            if not text or text.startswith("#"):
                continue
            entries.append(text)
    return tuple(entries)
