# trycore/core/dispatch/__init__.py
"""
Dispatch types for trycore.

This package defines the components responsible for:
- Holding catch clauses
- Running the phase state machine
- Driving it in blocking or suspending mode

No side effects on import.
"""

from .clause import CatchClause, select_clause
from .phases import Phase, PhaseStep, Outcome, DispatchPlan, run_phases
from .drivers import drive_blocking, drive_suspending
from .controller import DispatchController, attempt

__all__ = [
    "CatchClause",
    "select_clause",
    "Phase",
    "PhaseStep",
    "Outcome",
    "DispatchPlan",
    "run_phases",
    "drive_blocking",
    "drive_suspending",
    "DispatchController",
    "attempt",
]
