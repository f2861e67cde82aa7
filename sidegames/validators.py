"""Validation functions for team rosters, round inputs, and settlement results."""

import logging
from typing import Mapping, Optional, Sequence

from .constants import HOLES
from .models import GameExtras, GameResult, Player

logger = logging.getLogger('sidegames.validators')


def validate_team_partition(
    players: Sequence[Player],
    team_a: Sequence[str],
    team_b: Sequence[str],
    strict: bool = False,
) -> list[str]:
    """
    Validate that two team rosters form a partition of registered players.

    Checks:
    - Both teams have at least one member
    - Every member id belongs to the roster
    - No player is on both teams

    Args:
        players: Registered players for the round
        team_a: Player ids on team A
        team_b: Player ids on team B
        strict: Raise instead of returning the error list

    Returns:
        List of validation error messages (empty if valid)

    Raises:
        ValueError: If strict and the partition is invalid
    """
    errors = []
    roster = {p.id for p in players}

    if not team_a:
        errors.append('Team A has no players')
    if not team_b:
        errors.append('Team B has no players')

    unknown = sorted({pid for pid in [*team_a, *team_b] if pid not in roster})
    if unknown:
        errors.append(f'Unknown player ids on teams: {", ".join(unknown)}')

    overlap = sorted(set(team_a) & set(team_b))
    if overlap:
        errors.append(f'Players on both teams: {", ".join(overlap)}')

    if strict and errors:
        raise ValueError('Invalid team partition: ' + '; '.join(errors))
    return errors


def validate_zero_sum(result: GameResult, tolerance: float = 0.01) -> list[str]:
    """
    Check that a game's net ledger sums to zero.

    Returns:
        List of warning messages (empty if balanced)
    """
    warnings = []
    total = sum(result.net.values())
    if abs(total) > tolerance:
        message = f'{result.label} net ledger sums to {total:.2f} (expected 0)'
        logger.warning(message)
        warnings.append(message)
    return warnings


def validate_scores(
    players: Sequence[Player], scores: Mapping[str, Sequence[Optional[int]]]
) -> list[str]:
    """
    Check the shape of a score mapping.

    Score plausibility is not checked; only card length and unknown ids.
    """
    errors = []
    roster = {p.id for p in players}

    for player_id, card in scores.items():
        if player_id not in roster:
            errors.append(f'Scores given for unknown player id: {player_id}')
        if len(card) > HOLES:
            errors.append(f'{player_id} has {len(card)} hole scores (max {HOLES})')

    return errors


def validate_extras(players: Sequence[Player], extras: GameExtras) -> list[str]:
    """Check annotation lengths and that vegas teams reference registered players."""
    errors = []

    if extras.pars is not None and len(extras.pars) != HOLES:
        errors.append(f'pars has {len(extras.pars)} entries (expected {HOLES})')

    for kind in ('wolf', 'bbb', 'snake', 'ctp', 'trouble', 'arnies', 'banker', 'dots'):
        holes = getattr(extras, kind)
        if len(holes) != HOLES:
            errors.append(f'{kind} annotations have {len(holes)} entries (expected {HOLES})')

    if len(extras.hammer_multipliers) != HOLES:
        errors.append(
            f'hammer_multipliers has {len(extras.hammer_multipliers)} entries (expected {HOLES})'
        )

    if extras.vegas_team_a or extras.vegas_team_b:
        errors.extend(
            f'Vegas: {e}'
            for e in validate_team_partition(players, extras.vegas_team_a, extras.vegas_team_b)
        )

    return errors
