"""Build session orchestration on a LangGraph StateGraph."""

from wasm_advisor.orchestrator.exceptions import BuildStepError, GraphBuildError, OrchestratorError
from wasm_advisor.orchestrator.graph import build_session_graph
from wasm_advisor.orchestrator.runner import StepResult, StepRunner
from wasm_advisor.orchestrator.state import SessionState, make_initial_state

__all__ = [
    "BuildStepError",
    "GraphBuildError",
    "OrchestratorError",
    "SessionState",
    "StepResult",
    "StepRunner",
    "build_session_graph",
    "make_initial_state",
]
