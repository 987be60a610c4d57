"""Advise requests: the diagnostic inputs routed to advisor pipelines."""

from wasm_advisor.requests.base import AdviseRequest
from wasm_advisor.requests.common import ErrorAdviseRequest, PlainAdviseRequest, register

__all__ = [
    "AdviseRequest",
    "ErrorAdviseRequest",
    "PlainAdviseRequest",
    "register",
]
