# gpxsplits/errors

"""
gpxsplits.errors

Central exception hierarchy for gpxsplits.

Rationale:
  - Modules should raise specific, meaningful errors.
  - Callers can catch GPXSplitsError (broad) or specific subclasses (narrow).
"""


class GPXSplitsError(RuntimeError):
    """Base class for all gpxsplits runtime errors."""


# ---- Input / GPX errors ------------------------

class InvalidGpxError(GPXSplitsError):
    """GPX file could not be parsed or a trackpoint is missing a required field."""


# ---- Analysis errors ---------------------------

class AnalysisError(GPXSplitsError):
    """Errors in the track analysis pass."""

class EmptyTrackError(AnalysisError):
    """Insufficient data: the track has no points."""

class NonMonotonicTimeError(AnalysisError):
    """A trackpoint is timestamped earlier than the point before it."""


# ---- Configuration errors ----------------------

class ConfigError(GPXSplitsError):
    """Configuration file or override could not be interpreted."""


# ---- Selection errors --------------------------

class SelectionError(GPXSplitsError):
    """Interactive file selection failed."""

class FzfNotFoundError(SelectionError):
    """fzf is required but not available on PATH."""
