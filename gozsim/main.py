"""
Main entry point for the GOZ combat simulator.

Runs showcase fights between the packaged presets, fights between rosters
read from JSON files, or batches of combats summarised as statistics.

Examples:
  gozsim demo                                # The three showcase fights
  gozsim stats --runs 100 --seed 7           # Warrior vs 3 bandits, 100 times
  gozsim fight --team1 a.json --team2 b.json # Custom rosters
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from gozsim.character.main import Combatant
from gozsim.character.presets import (
    create_thief,
    create_warrior,
    create_weak_bandit,
    create_wolf,
    load_roster,
)
from gozsim.combat.runner import CombatResult, CombatRunner
from gozsim.combat.statistics import run_batch
from gozsim.core.config import SimulationConfig, load_config
from gozsim.core.dice import DiceRoller
from gozsim.core.errors import GozSimError
from gozsim.core.logging import get_logger, setup_logging
from gozsim.core.utils import cprint, crule
from gozsim.ui.combat_log import (
    ConsoleEventSink,
    print_batch_summary,
    print_final_stats,
    print_roster_summary,
)

logger = get_logger(__name__)

# Round limit of the warrior vs bandits batch when none is given.
STATS_MAX_ROUNDS = 30


def play(
    title: str,
    roster1: Sequence[Combatant],
    roster2: Sequence[Combatant],
    dice: DiceRoller,
    max_rounds: int,
    quiet: bool = False,
) -> CombatResult:
    """Runs one combat, rendering it on the console unless ``quiet``."""
    sink = None if quiet else ConsoleEventSink()
    if not quiet:
        crule(title, style="bold green")
        print_roster_summary(roster1, roster2)
    result = CombatRunner(dice=dice, sink=sink).run(roster1, roster2, max_rounds)
    if not quiet:
        print_final_stats(roster1, roster2)
        cprint()
    return result


def warrior_vs_bandits() -> tuple[list[Combatant], list[Combatant]]:
    """One warrior against three weak bandits."""
    return (
        [create_warrior("Grim Ironhand")],
        [create_weak_bandit(f"Bandit {i}") for i in range(1, 4)],
    )


def thief_vs_wolves() -> tuple[list[Combatant], list[Combatant]]:
    """A thief against two pack wolves."""
    return (
        [create_thief("Lyra Quickfingers")],
        [create_wolf(f"Wolf {i}") for i in range(1, 3)],
    )


def party_vs_pack() -> tuple[list[Combatant], list[Combatant]]:
    """Warrior and thief against a pack of four wolves."""
    return (
        [create_warrior("Grim"), create_thief("Lyra")],
        [create_wolf(f"Wolf {i}") for i in range(1, 5)],
    )


def run_demo(config: SimulationConfig, quiet: bool = False) -> list[CombatResult]:
    """Plays the three showcase fights with one seeded roller."""
    dice = DiceRoller(seed=config.seed)
    fights = [
        ("Fight 1: Warrior vs 3 bandits", warrior_vs_bandits),
        ("Fight 2: Thief vs 2 wolves", thief_vs_wolves),
        ("Fight 3: Party vs wolf pack", party_vs_pack),
    ]
    results = []
    for title, factory in fights:
        roster1, roster2 = factory()
        results.append(play(title, roster1, roster2, dice, config.round_limit(), quiet))
    return results


def run_stats(config: SimulationConfig, max_rounds: int) -> None:
    """Plays the warrior vs bandits batch and prints its summary."""
    summary = run_batch(
        warrior_vs_bandits,
        runs=config.runs,
        max_rounds=max_rounds,
        seed=config.seed,
        per_hit=config.per_hit_estimate,
    )
    print_batch_summary(f"Statistics: {config.runs} fights, warrior vs 3 bandits", summary)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gozsim",
        description="GOZ v1 turn-based melee combat simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--config", help="JSON file with simulation settings")
    parser.add_argument("--seed", type=int, help="Seed of the random source")
    parser.add_argument("--max-rounds", type=int, help="Round limit of each combat")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine diagnostics",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print results",
    )

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("demo", help="Play the three showcase fights")
    stats = commands.add_parser("stats", help="Play many warrior vs bandits fights")
    stats.add_argument("--runs", type=int, help="Number of combats to play")
    fight = commands.add_parser("fight", help="Play two rosters read from JSON files")
    fight.add_argument("--team1", required=True, help="Roster file of team 1")
    fight.add_argument("--team2", required=True, help="Roster file of team 2")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command line entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Installed before the configuration loads so its warnings are rendered.
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        config = load_config(args.config).merged(
            seed=args.seed,
            max_rounds=args.max_rounds,
            runs=getattr(args, "runs", None),
        )
        if not args.verbose:
            logging.getLogger().setLevel(config.log_level)

        command = args.command or "demo"
        if command == "demo":
            run_demo(config, args.quiet)
        elif command == "stats":
            run_stats(config, config.round_limit(STATS_MAX_ROUNDS))
        else:
            roster1 = load_roster(args.team1)
            roster2 = load_roster(args.team2)
            result = play(
                "Custom fight",
                roster1,
                roster2,
                DiceRoller(seed=config.seed),
                config.round_limit(),
                args.quiet,
            )
            cprint(f"Result: {int(result.result)} after {result.rounds_played} round(s)")
    except GozSimError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        cprint("")
        crule(":crossed_swords:  Combat Interrupted", style="bold red")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
