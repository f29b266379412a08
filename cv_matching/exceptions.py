"""Errors raised by the matching package."""


class MatchingError(ValueError):
    """Base class for candidate matching failures."""


class CandidateDataError(MatchingError):
    """A candidate payload or stored CV row could not be parsed."""


class InvalidRequirementsError(MatchingError):
    """Ranking was requested without any requirements text."""


class InvalidMatchOptionsError(MatchingError):
    """Ranking options (limit, minimum percentage) are out of range."""
