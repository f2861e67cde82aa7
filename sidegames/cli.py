"""
Side-game settlement CLI

Settles every selected side game for one round from a round JSON file.

Usage:
    settle-round rounds/saturday.json
    settle-round rounds/saturday.json --output results/saturday.json
    settle-round rounds/saturday.json --verbose
    settle-round rounds/saturday.json --live
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .config import get_config
from .engine import calculate_all_games
from .live import live_status
from .logging_config import level_from_flags, setup_logging
from .models import LiveStatus, MultiGameResults, Player
from .schemas import ExtrasInput, RoundFile
from .utils import load_json, save_json
from .validators import validate_extras, validate_scores


def print_results(results: MultiGameResults, quiet: bool = False) -> None:
    """Print per-game payouts and the combined ledger."""
    if not quiet:
        for game in results.games:
            print(f"\n{game.label}")
            print("-" * 40)
            if game.leaderboard is not None:
                for entry in game.leaderboard:
                    print(f"  {entry.rank}. {entry.name}: {entry.total}")
            elif not game.payouts:
                print("  (no payouts)")
            for payout in game.payouts:
                print(f"  {payout.payer} -> {payout.payee}: ${payout.amount:.2f} [{payout.game}]")

    print("\n" + "=" * 40)
    print("NET")
    print("=" * 40)
    ranked = sorted(results.combined_net.items(), key=lambda x: x[1], reverse=True)
    for name, amount in ranked:
        print(f"  {name}: {amount:+.2f}")


def print_live(statuses: List[LiveStatus]) -> None:
    """Print the mid-round standing of each game."""
    for status in statuses:
        print(f"\n{status.label}")
        print("-" * 40)
        for line in status.lines:
            print(f"  {line.text}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Settle golf side games for one round")
    parser.add_argument(
        "round_file",
        help="Path to the round JSON file (players, scores, games, extras)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the settlement results to this JSON file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print the combined ledger",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Show mid-round standings instead of settling",
    )

    args = parser.parse_args(argv)

    setup_logging(level=level_from_flags(args.verbose, args.quiet))

    try:
        round_data = load_json(args.round_file, schema=RoundFile)
        extras_input = ExtrasInput.model_validate(round_data.extras)
    except (FileNotFoundError, json.JSONDecodeError, ValueError) as e:
        print(f"❌ {e}")
        sys.exit(1)

    players = [Player(p.id, p.name, p.tax_man) for p in round_data.players]
    extras = extras_input.to_extras()
    if round_data.pars is not None:
        extras.pars = list(round_data.pars)

    problems = validate_scores(players, round_data.scores) + validate_extras(players, extras)
    for problem in problems:
        print(f"⚠️  {problem}")

    if args.live:
        try:
            statuses = live_status(
                players, round_data.games, round_data.scores, extras, settings=get_config()
            )
        except ValueError as e:
            print(f"❌ {e}")
            sys.exit(1)

        print_live(statuses)
        if args.output:
            output_path = Path(args.output)
            save_json(output_path, [s.to_dict() for s in statuses])
            print(f"\nStandings saved: {output_path}")
        return

    try:
        results = calculate_all_games(
            players, round_data.games, round_data.scores, extras, settings=get_config()
        )
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print_results(results, quiet=args.quiet)

    if args.output:
        output_path = Path(args.output)
        save_json(output_path, results)
        print(f"\nResults saved: {output_path}")


if __name__ == "__main__":
    main()
