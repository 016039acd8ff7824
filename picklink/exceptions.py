"""Exceptions raised across collaborator seams.

Matching itself never raises; these exist for the network-backed
collaborators so callers can tell their failures apart.
"""


class PicklinkError(Exception):
    """Base class for picklink errors."""


class EscalationError(PicklinkError):
    """The escalation resolver could not produce a usable answer."""


class ExtractionError(PicklinkError):
    """A pick could not be extracted from text."""
