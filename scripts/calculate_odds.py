#!/usr/bin/env python3
"""Calculate win/tie/lose odds for a hold'em hand."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pokerodds.game.cards import parse_cards
from pokerodds.logging_config import configure_logging
from pokerodds.simulation.odds import (
    OddsCalculator,
    OddsConfig,
    FAST_SIMULATIONS,
    REFINED_SIMULATIONS,
)
from pokerodds.viz import display_result


def main():
    parser = argparse.ArgumentParser(
        description="Estimate hold'em odds against random opponents"
    )
    parser.add_argument(
        "hole",
        help="Hole cards (e.g., 'AsKh' or 'As Kh')",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Community cards, 0, 3, 4 or 5 (e.g., 'Ks7d2c')",
    )
    parser.add_argument(
        "-n", "--opponents",
        type=int,
        default=1,
        help="Number of opponents, 1-9 (default: 1)",
    )
    parser.add_argument(
        "-s", "--simulations",
        type=int,
        default=FAST_SIMULATIONS,
        help=f"Number of simulations (default: {FAST_SIMULATIONS})",
    )
    parser.add_argument(
        "--refine",
        action="store_true",
        help=f"Follow up with a refined run of {REFINED_SIMULATIONS} simulations",
    )
    parser.add_argument(
        "-d", "--deterministic",
        action="store_true",
        help="Seed the simulation from the inputs for reproducible output",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        help="Worker processes (default: CPU count)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()
    configure_logging("DEBUG" if args.verbose else None)

    try:
        hole = parse_cards(args.hole)
        board = parse_cards(args.board)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    if len(hole) != 2:
        console.print("[red]Exactly 2 hole cards are required[/]")
        return 1

    try:
        calculator = OddsCalculator(OddsConfig(max_workers=args.workers))
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    tiers = [args.simulations]
    if args.refine and args.simulations < REFINED_SIMULATIONS:
        tiers.append(REFINED_SIMULATIONS)

    for simulations in tiers:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Simulating {simulations:,} hands...")
            try:
                result = calculator.calculate(
                    hole,
                    board,
                    num_opponents=args.opponents,
                    simulations=simulations,
                    deterministic=args.deterministic,
                )
            except ValueError as e:
                console.print(f"[red]{e}[/]")
                return 1

        display_result(result, hole, board, args.opponents, console=console)

    return 0


if __name__ == "__main__":
    sys.exit(main())
