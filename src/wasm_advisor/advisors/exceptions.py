"""Exceptions for advisor registration and pipeline configuration."""


class AdvisorError(Exception):
    """Base exception for all advisor operations."""

    code = "ADVISOR_GENERAL"


class UnknownAdvisorError(AdvisorError):
    """Raised when an advisor type has no registered factory."""

    code = "ADVISOR_UNKNOWN"


class DuplicateAdvisorError(AdvisorError):
    """Raised when an advisor type is registered twice."""

    code = "ADVISOR_DUP_REG"


class PipelineConfigError(AdvisorError):
    """Raised when the advisor pipeline file cannot be loaded."""

    code = "ADVISOR_PIPELINE_FILE_LOAD_FAIL"


class PipelineConfigMissingError(PipelineConfigError):
    """Raised when the advisor pipeline file does not exist."""

    code = "ADVISOR_PIPELINE_FILE_NOEXT"
