"""Concrete suggestion sources."""

from prompter.sources.list_source import ListSource, Matcher, substring_matcher

__all__ = ["ListSource", "Matcher", "substring_matcher"]
