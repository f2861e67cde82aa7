"""Press resolution for Nassau and Head-to-Head.

A press is an independently staked side bet over a contiguous hole range.
It is resolved the same way as its parent game, but in isolation: the
parent's legs never see press results and vice versa.
"""

import logging
from itertools import permutations
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .constants import (
    AUTO_PRESS_DEFICIT,
    BACK_NINE,
    FRONT_NINE,
    H2H_PRESS_PREFIX,
    HOLES,
    TAG_H2H_PRESS,
    TAG_NASSAU,
    TAG_NASSAU_PRESS,
)
from .models import Player, PressMatch
from .primitives import Scores, Settlement, adjusted_score, card_for, hole_scores, sole_low

logger = logging.getLogger('sidegames.presses')


# Range resolution shared by Nassau legs and presses (end is exclusive)


def stroke_range_totals(
    players: Sequence[Player],
    scores: Scores,
    start: int,
    end: int,
    allowances: Optional[Mapping[str, int]] = None,
) -> List[Tuple[Player, int]]:
    """Range totals for players with every hole in the range entered."""
    totals = []
    for player in players:
        card = card_for(scores, player.id)
        total = 0
        for hole in range(start, end):
            if card[hole] is None:
                break
            total += adjusted_score(card[hole], player.id, hole, allowances)
        else:
            totals.append((player, total))
    return totals


def stroke_range_winner(
    players: Sequence[Player],
    scores: Scores,
    start: int,
    end: int,
    allowances: Optional[Mapping[str, int]] = None,
) -> Optional[Tuple[Player, List[Player]]]:
    """Sole low total over the range and the other complete players; None on a push."""
    totals = stroke_range_totals(players, scores, start, end, allowances)
    if len(totals) < 2:
        return None
    winner = sole_low(totals)
    if winner is None:
        return None
    return winner, [p for p, _ in totals if p.id != winner.id]


def match_range_holes_won(
    players: Sequence[Player],
    scores: Scores,
    start: int,
    end: int,
    allowances: Optional[Mapping[str, int]] = None,
) -> Tuple[Dict[str, int], List[Player]]:
    """Holes won outright per player, and who played at least one hole of the range."""
    holes_won = {p.id: 0 for p in players}
    for hole in range(start, end):
        pairs = [
            (player, adjusted_score(score, player.id, hole, allowances))
            for player, score in hole_scores(players, scores, hole)
        ]
        if len(pairs) < 2:
            continue
        winner = sole_low(pairs)
        if winner is not None:
            holes_won[winner.id] += 1

    participating = [
        p for p in players
        if any(card_for(scores, p.id)[hole] is not None for hole in range(start, end))
    ]
    return holes_won, participating


def match_range_winner(
    players: Sequence[Player],
    scores: Scores,
    start: int,
    end: int,
    allowances: Optional[Mapping[str, int]] = None,
) -> Optional[Tuple[Player, List[Player]]]:
    """Sole player with the most holes won over the range; None on a push."""
    holes_won, participating = match_range_holes_won(players, scores, start, end, allowances)
    if len(participating) < 2:
        return None
    most = max(holes_won[p.id] for p in participating)
    if most == 0:
        return None
    leaders = [p for p in participating if holes_won[p.id] == most]
    if len(leaders) > 1:
        return None
    winner = leaders[0]
    return winner, [p for p in participating if p.id != winner.id]


def pair_holes_up(
    a: Player,
    b: Player,
    scores: Scores,
    start: int,
    end: int,
    allowances: Optional[Mapping[str, int]] = None,
) -> int:
    """Holes a is up on b over the range, counting only holes both played."""
    card_a = card_for(scores, a.id)
    card_b = card_for(scores, b.id)
    up = 0
    for hole in range(start, end):
        if card_a[hole] is None or card_b[hole] is None:
            continue
        score_a = adjusted_score(card_a[hole], a.id, hole, allowances)
        score_b = adjusted_score(card_b[hole], b.id, hole, allowances)
        if score_a < score_b:
            up += 1
        elif score_b < score_a:
            up -= 1
    return up


def pair_stroke_totals(
    a: Player,
    b: Player,
    scores: Scores,
    start: int,
    end: int,
    allowances: Optional[Mapping[str, int]] = None,
) -> Optional[Tuple[int, int]]:
    """Both players' range totals, or None unless both completed the range."""
    totals = stroke_range_totals([a, b], scores, start, end, allowances)
    if len(totals) < 2:
        return None
    return totals[0][1], totals[1][1]


def _press_range(press: PressMatch) -> Optional[Tuple[int, int]]:
    start = max(press.start_hole, 0)
    end = min(press.end_hole, HOLES - 1)
    if start > end:
        logger.debug(f'Skipping press with empty range: {press}')
        return None
    return start, end + 1


# Press resolvers


def resolve_nassau_presses(
    players: Sequence[Player],
    scores: Scores,
    presses: Sequence[PressMatch],
    *,
    match_play: bool = False,
    allowances: Optional[Mapping[str, int]] = None,
) -> Settlement:
    """
    Settle every Nassau press, each with its own stake and range.

    Stroke presses go to the sole low total among players who completed the
    range; match presses go to the sole player with the most holes won.
    Every other participant pays the press stake to the winner.
    """
    settlement = Settlement(players, TAG_NASSAU_PRESS)
    resolve = match_range_winner if match_play else stroke_range_winner

    for press in presses:
        if press.game != TAG_NASSAU:
            continue
        hole_range = _press_range(press)
        if hole_range is None:
            continue
        outcome = resolve(players, scores, *hole_range, allowances)
        if outcome is None:
            continue
        winner, others = outcome
        settlement.collect_from_each(winner, others, press.bet_amount)

    return settlement


def h2h_press_tag(a: Player, b: Player) -> str:
    return f'{H2H_PRESS_PREFIX}{a.id}-{b.id}'


def find_press_pair(players: Sequence[Player], game: str) -> Optional[Tuple[Player, Player]]:
    """Identify the two players a head-to-head press tag refers to."""
    if not game.startswith(H2H_PRESS_PREFIX):
        return None
    for a, b in permutations(players, 2):
        if h2h_press_tag(a, b) == game:
            return a, b
    return None


def resolve_h2h_presses(
    players: Sequence[Player],
    scores: Scores,
    presses: Sequence[PressMatch],
    *,
    match_play: bool = True,
    allowances: Optional[Mapping[str, int]] = None,
) -> Settlement:
    """Settle head-to-head presses pair by pair, each for its flat press stake."""
    settlement = Settlement(players, TAG_H2H_PRESS)

    for press in presses:
        pair = find_press_pair(players, press.game)
        if pair is None:
            continue
        hole_range = _press_range(press)
        if hole_range is None:
            continue
        a, b = pair

        if match_play:
            up = pair_holes_up(a, b, scores, *hole_range, allowances)
            if up == 0:
                continue
            winner, loser = (a, b) if up > 0 else (b, a)
        else:
            totals = pair_stroke_totals(a, b, scores, *hole_range, allowances)
            if totals is None or totals[0] == totals[1]:
                continue
            winner, loser = (a, b) if totals[0] < totals[1] else (b, a)

        settlement.pay(loser, winner, press.bet_amount)

    return settlement


# Auto-press detection


def _covered(
    presses: Sequence[PressMatch], game: str, hole: int, leg: Tuple[int, int] = (0, HOLES)
) -> bool:
    """Whether a press on game, opened inside the leg, already covers hole."""
    start, end = leg
    return any(
        p.game == game and start <= p.start_hole < end and p.start_hole <= hole <= p.end_hole
        for p in presses
    )


def find_auto_presses(
    players: Sequence[Player],
    scores: Scores,
    existing: Sequence[PressMatch] = (),
    *,
    bet_amount: float,
) -> List[PressMatch]:
    """
    New Nassau presses owed to players two or more holes down in a nine.

    For each nine, the current hole is the latest hole every player has
    scored. If anyone trails the leader by AUTO_PRESS_DEFICIT holes and holes
    remain in the nine, a press opens from the next hole to the end of the
    nine, unless a press opened in the same nine already covers that hole.
    """
    new_presses: List[PressMatch] = []

    for start, end in (FRONT_NINE, BACK_NINE):
        current = -1
        for hole in range(start, end):
            if all(card_for(scores, p.id)[hole] is not None for p in players):
                current = hole
        if current < start or current >= end - 1:
            continue

        holes_won, _ = match_range_holes_won(players, scores, start, current + 1)
        leader = max(holes_won.values(), default=0)
        if not any(leader - holes_won[p.id] >= AUTO_PRESS_DEFICIT for p in players):
            continue

        next_hole = current + 1
        leg = (start, end)
        if (
            _covered(existing, TAG_NASSAU, next_hole, leg)
            or _covered(new_presses, TAG_NASSAU, next_hole, leg)
        ):
            continue
        new_presses.append(
            PressMatch(game=TAG_NASSAU, start_hole=next_hole, end_hole=end - 1, bet_amount=bet_amount)
        )

    return new_presses


def find_h2h_auto_presses(
    players: Sequence[Player],
    scores: Scores,
    existing: Sequence[PressMatch] = (),
    *,
    bet_amount: float,
) -> List[PressMatch]:
    """New head-to-head presses for any pair where one side is two or more down."""
    new_presses: List[PressMatch] = []

    for i, a in enumerate(players):
        for b in players[i + 1:]:
            card_a = card_for(scores, a.id)
            card_b = card_for(scores, b.id)
            played = [h for h in range(HOLES) if card_a[h] is not None and card_b[h] is not None]
            if not played or played[-1] >= HOLES - 1:
                continue
            current = played[-1]
            up = pair_holes_up(a, b, scores, 0, current + 1)
            if abs(up) < AUTO_PRESS_DEFICIT:
                continue

            # The trailing player presses
            trailing, leading = (b, a) if up > 0 else (a, b)
            game = h2h_press_tag(trailing, leading)
            next_hole = current + 1
            if (
                _covered(existing, game, next_hole)
                or _covered(existing, h2h_press_tag(leading, trailing), next_hole)
                or _covered(new_presses, game, next_hole)
            ):
                continue
            new_presses.append(
                PressMatch(game=game, start_hole=next_hole, end_hole=HOLES - 1, bet_amount=bet_amount)
            )

    return new_presses
