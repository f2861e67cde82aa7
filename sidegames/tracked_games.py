"""Calculators for games driven by per-hole manual annotations."""

import logging
from functools import reduce
from typing import Optional, Sequence, Tuple

from .constants import (
    BIRDIE_DOTS,
    EAGLE_DOTS,
    GREENIE_DOTS,
    HOLES,
    SANDY_DOTS,
    TAG_ARNIES,
    TAG_BANKER,
    TAG_BBB,
    TAG_CTP,
    TAG_DOTS,
    TAG_SNAKE,
    TAG_TROUBLE,
    TAG_WOLF,
)
from .models import (
    ArniesHole,
    BankerHole,
    BingoBangoBongoHole,
    CtpHole,
    DotsHole,
    GameMode,
    GameResult,
    Player,
    SnakeHole,
    TroubleHole,
    WolfHole,
    pad_holes,
)
from .primitives import Scores, Settlement, card_for, round_money
from .schemas import (
    ArniesConfig,
    BankerConfig,
    BingoBangoBongoConfig,
    CtpConfig,
    DotsConfig,
    SnakeConfig,
    TroubleConfig,
    WolfConfig,
)

logger = logging.getLogger('sidegames.tracked_games')


def _by_id(players: Sequence[Player]) -> dict[str, Player]:
    return {p.id: p for p in players}


def calc_wolf(
    players: Sequence[Player],
    scores: Scores,
    wolf_holes: Sequence[Optional[WolfHole]],
    config: WolfConfig,
) -> GameResult:
    """
    Wolf: the hole's wolf plays alone or with a chosen partner.

    A hole is skipped unless it has an annotation naming a known wolf and
    every player has a score. A lone wolf beating the best opponent collects
    the stake from each opponent; losing pays double to each. With a partner
    the two-ball totals are compared and every winner collects the stake
    from every loser. Ties push.
    """
    settlement = Settlement(players, TAG_WOLF)
    roster = _by_id(players)
    stake = config.stake

    for hole, state in enumerate(pad_holes(wolf_holes)):
        if state is None or state.wolf_player_id not in roster:
            continue
        hole_scores = {p.id: card_for(scores, p.id)[hole] for p in players}
        if any(score is None for score in hole_scores.values()):
            continue

        wolf = roster[state.wolf_player_id]
        wolf_score = hole_scores[wolf.id]

        if state.partner_id is None:
            others = [p for p in players if p.id != wolf.id]
            if not others:
                continue
            best_other = min(hole_scores[p.id] for p in others)
            if wolf_score < best_other:
                settlement.collect_from_each(wolf, others, stake)
            elif wolf_score > best_other:
                settlement.pay_each(wolf, others, round_money(stake * 2))
            continue

        partner = roster.get(state.partner_id)
        if partner is None or partner.id == wolf.id:
            logger.debug(f'Wolf hole {hole + 1}: unknown partner {state.partner_id!r}')
            continue
        wolf_team = [wolf, partner]
        other_team = [p for p in players if p.id not in (wolf.id, partner.id)]
        if not other_team:
            continue

        wolf_total = wolf_score + hole_scores[partner.id]
        other_total = sum(hole_scores[p.id] for p in other_team)
        if wolf_total < other_total:
            settlement.settle_teams(wolf_team, other_team, stake)
        elif other_total < wolf_total:
            settlement.settle_teams(other_team, wolf_team, stake)

    return settlement.result(GameMode.WOLF, 'Wolf')


def bbb_points(
    players: Sequence[Player], bbb_holes: Sequence[Optional[BingoBangoBongoHole]]
) -> dict[str, int]:
    """Bingo, bango and bongo points per player id."""
    points = {p.id: 0 for p in players}
    for state in pad_holes(bbb_holes):
        if state is None:
            continue
        for player_id in (state.bingo_id, state.bango_id, state.bongo_id):
            if player_id in points:
                points[player_id] += 1
    return points


def calc_bingo_bango_bongo(
    players: Sequence[Player],
    bbb_holes: Sequence[Optional[BingoBangoBongoHole]],
    config: BingoBangoBongoConfig,
) -> GameResult:
    """
    Bingo Bango Bongo: a point for each of first on, closest once on, first in.

    Players tied on the most points win; everyone else pays each winner the
    point difference times the stake, divided by the number of winners.
    """
    settlement = Settlement(players, TAG_BBB)
    points = bbb_points(players, bbb_holes)

    best = max(points.values(), default=0)
    if best == 0:
        return settlement.result(GameMode.BINGO_BANGO_BONGO, 'Bingo Bango Bongo')

    winners = [p for p in players if points[p.id] == best]
    losers = [p for p in players if points[p.id] < best]
    for loser in losers:
        for winner in winners:
            amount = round_money((best - points[loser.id]) * config.bet_amount / len(winners))
            settlement.pay(loser, winner, amount)

    return settlement.result(GameMode.BINGO_BANGO_BONGO, 'Bingo Bango Bongo')


def snake_run(snake_holes: Sequence[Optional[SnakeHole]]) -> Tuple[Optional[str], int]:
    """
    Current snake holder and the annotated holes they've held it for.

    The last three-putter on a hole takes the snake; holes without an
    annotation don't count toward the run.
    """

    def step(run: Tuple[Optional[str], int], state: Optional[SnakeHole]) -> Tuple[Optional[str], int]:
        holder, held = run
        if state is None:
            return run
        if not state.three_putter_ids:
            return holder, (held + 1 if holder is not None else 0)
        taker = state.three_putter_ids[-1]
        return taker, (held + 1 if taker == holder else 1)

    return reduce(step, pad_holes(snake_holes), (None, 0))


def snake_holder(snake_holes: Sequence[Optional[SnakeHole]]) -> Optional[str]:
    """Id of whoever holds the snake after the last annotated three-putt."""
    return snake_run(snake_holes)[0]


def calc_snake(
    players: Sequence[Player],
    snake_holes: Sequence[Optional[SnakeHole]],
    config: SnakeConfig,
) -> GameResult:
    """The final snake holder pays every other player."""
    settlement = Settlement(players, TAG_SNAKE)
    holder = _by_id(players).get(snake_holder(snake_holes))
    if holder is not None:
        settlement.pay_each(holder, [p for p in players if p.id != holder.id], config.stake)
    return settlement.result(GameMode.SNAKE, 'Snake')


def calc_ctp(
    players: Sequence[Player],
    pars: Sequence[int],
    ctp_holes: Sequence[Optional[CtpHole]],
    config: CtpConfig,
) -> GameResult:
    """Closest to the pin on each par 3 collects the stake from everyone else."""
    settlement = Settlement(players, TAG_CTP)
    roster = _by_id(players)

    for hole, state in enumerate(pad_holes(ctp_holes)):
        if pars[hole] != 3 or state is None or state.winner_id not in roster:
            continue
        winner = roster[state.winner_id]
        settlement.collect_from_each(winner, [p for p in players if p.id != winner.id], config.bet_amount)

    return settlement.result(GameMode.CTP, 'Closest to Pin')


def calc_trouble(
    players: Sequence[Player],
    trouble_holes: Sequence[Optional[TroubleHole]],
    config: TroubleConfig,
) -> GameResult:
    """Every recorded trouble costs its player the stake to each other player."""
    settlement = Settlement(players, TAG_TROUBLE)

    for state in pad_holes(trouble_holes):
        if state is None:
            continue
        for player in players:
            others = [p for p in players if p.id != player.id]
            for _ in state.troubles.get(player.id, ()):
                settlement.pay_each(player, others, config.bet_amount)

    return settlement.result(GameMode.TROUBLE, 'Trouble')


def calc_arnies(
    players: Sequence[Player],
    arnies_holes: Sequence[Optional[ArniesHole]],
    config: ArniesConfig,
) -> GameResult:
    """Each player who made an Arnie collects the stake from every other player."""
    settlement = Settlement(players, TAG_ARNIES)

    for state in pad_holes(arnies_holes):
        if state is None:
            continue
        # Roster order keeps payout lines deterministic
        for winner in players:
            if winner.id in state.qualified_player_ids:
                settlement.collect_from_each(
                    winner, [p for p in players if p.id != winner.id], config.bet_amount
                )

    return settlement.result(GameMode.ARNIES, 'Arnies')


def calc_banker(
    players: Sequence[Player],
    scores: Scores,
    banker_holes: Sequence[Optional[BankerHole]],
    config: BankerConfig,
) -> GameResult:
    """
    Banker: the hole's banker plays every other player individually.

    The lower score wins the hole stake (the per-hole override when given).
    Players without a score on the hole sit it out; ties push.
    """
    settlement = Settlement(players, TAG_BANKER)
    roster = _by_id(players)

    for hole, state in enumerate(pad_holes(banker_holes)):
        if state is None or state.banker_id not in roster:
            continue
        banker = roster[state.banker_id]
        banker_score = card_for(scores, banker.id)[hole]
        if banker_score is None:
            continue

        stake = config.bet_amount if state.bet_override is None else state.bet_override
        for other in players:
            if other.id == banker.id:
                continue
            other_score = card_for(scores, other.id)[hole]
            if other_score is None:
                continue
            if banker_score < other_score:
                settlement.pay(other, banker, stake)
            elif other_score < banker_score:
                settlement.pay(banker, other, stake)

    return settlement.result(GameMode.BANKER, 'Banker')


def count_dots(
    players: Sequence[Player],
    scores: Scores,
    pars: Sequence[int],
    dots_holes: Sequence[Optional[DotsHole]],
    config: DotsConfig,
) -> dict[str, int]:
    """Dots earned per player id, honouring the config's toggles."""
    dots = {p.id: 0 for p in players}
    annotations = pad_holes(dots_holes)

    for hole in range(HOLES):
        par = pars[hole]
        state = annotations[hole]
        for player in players:
            score = card_for(scores, player.id)[hole]
            if score is None:
                continue
            if score - par <= -2:
                if config.eagle:
                    dots[player.id] += EAGLE_DOTS
            elif score - par == -1 and config.birdie:
                dots[player.id] += BIRDIE_DOTS
            if config.sandy and state is not None and player.id in state.sandy_player_ids:
                dots[player.id] += SANDY_DOTS

        if config.greenie and par == 3 and state is not None and state.greenie_id in dots:
            score = card_for(scores, state.greenie_id)[hole]
            if score is not None and score <= par:
                dots[state.greenie_id] += GREENIE_DOTS

    return dots


def calc_dots(
    players: Sequence[Player],
    scores: Scores,
    pars: Sequence[int],
    dots_holes: Sequence[Optional[DotsHole]],
    config: DotsConfig,
) -> GameResult:
    """Dots/Junk: every other player pays each earner dots x bet_per_dot."""
    settlement = Settlement(players, TAG_DOTS)
    dots = count_dots(players, scores, pars, dots_holes, config)

    for winner in players:
        earned = dots[winner.id]
        if earned:
            settlement.collect_from_each(
                winner, [p for p in players if p.id != winner.id], round_money(earned * config.bet_per_dot)
            )

    return settlement.result(GameMode.DOTS, 'Dots/Junk')
