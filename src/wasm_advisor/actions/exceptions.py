"""Exceptions for action operations."""


class ActionError(Exception):
    """Base exception for all action operations."""

    code = "ACTION_GENERAL"


class RegionIntersectionError(ActionError):
    """Raised when two edit regions in the same session overlap."""


class FileIntersectionError(RegionIntersectionError):
    """Raised when lines are intersected between file change actions."""

    code = "ACTION_FILE_INTERSECT"


class BuildStepIntersectionError(RegionIntersectionError):
    """Raised when build step indexes are intersected between build step change actions."""

    code = "ACTION_BUILDSTEP_INTERSECT"
