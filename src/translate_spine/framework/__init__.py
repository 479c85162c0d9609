"""Dispatch framework: execution signals, the registration table and the dispatch engine."""

from translate_spine.framework.context import HandlerContext
from translate_spine.framework.dispatcher import DispatchEngine
from translate_spine.framework.registry import Registration, RegistrationTable
from translate_spine.framework.signals import ExecutionSignal, SignalPayload, Stage

__all__ = [
    "DispatchEngine",
    "ExecutionSignal",
    "HandlerContext",
    "Registration",
    "RegistrationTable",
    "SignalPayload",
    "Stage",
]
