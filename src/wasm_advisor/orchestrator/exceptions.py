"""Exceptions for the build session orchestrator."""


class OrchestratorError(Exception):
    """Base exception for all orchestrator operations."""

    code = "ORCHESTRATOR_GENERAL"


class GraphBuildError(OrchestratorError):
    """Raised when graph construction fails."""

    code = "ORCHESTRATOR_GRAPH_BUILD_FAIL"


class BuildStepError(OrchestratorError):
    """Raised when a build step command cannot be started at all."""

    code = "ORCHESTRATOR_BUILD_STEP_FAIL"
