"""Check orchestration engine.

Orchestrator -> BranchGate -> CheckRunner -> locate -> RecoveryController,
looping over an ExecutionCursor until each profile reaches a terminal state.
"""

from .branch_gate import BranchGate
from .locator import canonical_check, locate
from .orchestrator import Orchestrator
from .recovery import RecoveryController
from .types import (
    ExecutionCursor,
    ProfileReport,
    ProfileStatus,
    RecoveryAction,
    RecoveryDecision,
    RunReport,
)

__all__ = [
    "Orchestrator",
    "BranchGate",
    "RecoveryController",
    "locate",
    "canonical_check",
    # Types
    "ExecutionCursor",
    "RecoveryAction",
    "RecoveryDecision",
    "ProfileStatus",
    "ProfileReport",
    "RunReport",
]
