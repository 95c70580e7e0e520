"""
Combat system module for the GOZ combat simulator.

This module resolves attacks, schedules rounds and runs complete combats,
emitting a typed event stream instead of printing.
"""

from .events import (
    AttackEvent,
    AttackOutcome,
    CombatEvent,
    DrawDeclaredEvent,
    EventLog,
    EventSink,
    EventType,
    RoundEndEvent,
    RoundStartEvent,
    WinnerDeclaredEvent,
)
from .resolver import AttackResolver, base_damage, compute_damage
from .runner import CombatResult, CombatRunner
from .scheduler import (
    InitiativeEntry,
    RoundOutcome,
    RoundScheduler,
    RoundStatus,
    build_initiative_order,
)
from .statistics import BatchSummary, estimate_hits_received, run_batch

__all__ = [
    # Import from events.py
    "AttackEvent",
    "AttackOutcome",
    "CombatEvent",
    "DrawDeclaredEvent",
    "EventLog",
    "EventSink",
    "EventType",
    "RoundEndEvent",
    "RoundStartEvent",
    "WinnerDeclaredEvent",
    # Import from resolver.py
    "AttackResolver",
    "base_damage",
    "compute_damage",
    # Import from runner.py
    "CombatResult",
    "CombatRunner",
    # Import from scheduler.py
    "InitiativeEntry",
    "RoundOutcome",
    "RoundScheduler",
    "RoundStatus",
    "build_initiative_order",
    # Import from statistics.py
    "BatchSummary",
    "estimate_hits_received",
    "run_batch",
]
