"""
User interface module for the GOZ combat simulator.

Console rendering of combat events and results.
"""

from .combat_log import (
    ConsoleEventSink,
    format_attack,
    format_combatant,
    print_batch_summary,
    print_final_stats,
    print_roster_summary,
)

__all__ = [
    # Import from combat_log.py
    "ConsoleEventSink",
    "format_attack",
    "format_combatant",
    "print_batch_summary",
    "print_final_stats",
    "print_roster_summary",
]
