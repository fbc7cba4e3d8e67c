"""Verify that the feeds listed in an OPML file are reachable RSS/Atom feeds."""

__version__ = "0.1.0"
