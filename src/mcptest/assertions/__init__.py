"""Assertion library: ``expect()`` and its matchers."""

from .equality import deep_equal, matches_object, same_value
from .errors import AssertionFailure, MatcherUsageError
from .expect import Expectation, RejectsProjection, ResolvesProjection, expect

__all__ = [
    "AssertionFailure",
    "Expectation",
    "MatcherUsageError",
    "RejectsProjection",
    "ResolvesProjection",
    "deep_equal",
    "expect",
    "matches_object",
    "same_value",
]
