"""Exceptions raised by termpp."""


class TermppError(Exception):
    """Base class for termpp errors."""


class SetupError(TermppError):
    """A fatal setup problem: unreadable source, unwritable output, no terminal."""
