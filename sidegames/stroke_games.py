"""Calculators for games settled purely from hole-by-hole scores.

Every calculator is a pure function of its arguments and returns a
GameResult whose net ledger sums to zero.
"""

import logging
from typing import Optional, Sequence

from .constants import (
    FULL_ROUND,
    HOLES,
    NASSAU_LEGS,
    NINES_POINTS,
    QUOTA_BASE,
    TAG_ACES_DEUCES,
    TAG_HEAD_TO_HEAD,
    TAG_NASSAU,
    TAG_NINES,
    TAG_QUOTA,
    TAG_RABBIT,
    TAG_SKINS,
    TAG_STABLEFORD,
    TAG_TAXMAN,
    TIE_POLICY_CANCEL,
)
from .models import GameMode, GameResult, LeaderboardEntry, Player, PressMatch
from .presses import (
    match_range_winner,
    pair_holes_up,
    pair_stroke_totals,
    resolve_h2h_presses,
    resolve_nassau_presses,
    stroke_range_winner,
)
from .primitives import (
    Scores,
    Settlement,
    card_for,
    handicap_allowances,
    hole_scores,
    init_net,
    round_money,
    sole_low,
    stableford_total,
    sum_scores,
)
from .schemas import (
    AcesDeucesConfig,
    HeadToHeadConfig,
    NassauConfig,
    NinesConfig,
    QuotaConfig,
    RabbitConfig,
    SkinsConfig,
    StablefordConfig,
    TaxManConfig,
)

logger = logging.getLogger('sidegames.stroke_games')


def calc_tax_man(
    players: Sequence[Player], scores: Scores, config: TaxManConfig
) -> GameResult:
    """
    Tax Man: beat your personal target or pay everyone who did.

    A player wins iff 0 < total < tax_man. Players without a complete
    18-hole card are left out entirely. Every loser pays every winner
    the flat tax amount.
    """
    settlement = Settlement(players, TAG_TAXMAN)
    winners = []
    losers = []

    for player in players:
        total = sum_scores(card_for(scores, player.id), *FULL_ROUND)
        if total is None:
            continue
        if 0 < total < player.tax_man:
            winners.append(player)
        else:
            losers.append(player)

    for loser in losers:
        for winner in winners:
            settlement.pay(loser, winner, config.tax_amount)

    return settlement.result(GameMode.TAXMAN, 'Tax Man')


def calc_nassau(
    players: Sequence[Player],
    scores: Scores,
    config: NassauConfig,
    press_matches: Sequence[PressMatch] = (),
) -> GameResult:
    """
    Nassau: front nine, back nine and full eighteen, each its own bet.

    Stroke mode: the sole low complete total wins the leg stake from every
    other complete player. Match mode: the sole player with the most holes
    won takes the leg. Ties push. Presses are settled alongside as separate
    'nassau-press' lines with their own stakes.
    """
    match_play = config.mode == 'match'
    allowances = handicap_allowances(players) if config.use_handicaps else None
    resolve = match_range_winner if match_play else stroke_range_winner
    settlement = Settlement(players, TAG_NASSAU)

    for leg_name, stake_field, start, end in NASSAU_LEGS:
        outcome = resolve(players, scores, start, end, allowances)
        if outcome is None:
            logger.debug(f'Nassau {leg_name}: push or not enough players')
            continue
        winner, others = outcome
        settlement.collect_from_each(winner, others, config.leg_stake(stake_field))

    if press_matches:
        settlement.absorb(
            resolve_nassau_presses(
                players, scores, press_matches, match_play=match_play, allowances=allowances
            )
        )

    label = 'Nassau (Match)' if match_play else 'Nassau'
    if config.use_handicaps:
        label += ' w/ HCP'
    return settlement.result(GameMode.NASSAU, label)


def skins_tally(
    players: Sequence[Player], scores: Scores, end: int = HOLES
) -> tuple[dict[str, int], int]:
    """
    Skins won per player id over holes 0..end-1, and the skins still carried.

    A hole is contested once every player has a score on it. The sole low
    score wins the hole's skin plus any carried skins; a tie (or an
    uncontested hole) carries the skin forward.
    """
    skins_won = {p.id: 0 for p in players}
    carryover = 0

    for hole in range(end):
        pairs = hole_scores(players, scores, hole)
        if len(pairs) < 2 or len(pairs) < len(players):
            carryover += 1
            continue
        winner = sole_low(pairs)
        if winner is None:
            carryover += 1
            continue
        skins_won[winner.id] += 1 + carryover
        carryover = 0

    return skins_won, carryover


def calc_skins(players: Sequence[Player], scores: Scores, config: SkinsConfig) -> GameResult:
    """Skins with carryover: each skin won collects bet_per_skin from every other player."""
    settlement = Settlement(players, TAG_SKINS)
    skins_won, _ = skins_tally(players, scores)

    for winner in players:
        skins = skins_won[winner.id]
        if skins:
            settlement.collect_from_each(
                winner, [p for p in players if p.id != winner.id], round_money(skins * config.bet_per_skin)
            )

    return settlement.result(GameMode.SKINS, 'Skins')


def calc_stableford(
    players: Sequence[Player], scores: Scores, pars: Sequence[int], config: StablefordConfig
) -> GameResult:
    """Highest Stableford total collects bet x point difference from everyone below."""
    settlement = Settlement(players, TAG_STABLEFORD)
    points = [(p, stableford_total(card_for(scores, p.id), pars)) for p in players]

    best = max((pts for _, pts in points), default=0)
    if best == 0 or len(players) < 2:
        return settlement.result(GameMode.STABLEFORD, 'Stableford')

    winners = [(p, pts) for p, pts in points if pts == best]
    losers = [(p, pts) for p, pts in points if pts < best]

    for loser, loser_pts in losers:
        for winner, winner_pts in winners:
            settlement.pay(loser, winner, round_money((winner_pts - loser_pts) * config.bet_amount))

    return settlement.result(GameMode.STABLEFORD, 'Stableford')


def calc_quota(
    players: Sequence[Player], scores: Scores, pars: Sequence[int], config: QuotaConfig
) -> GameResult:
    """
    Quota: Stableford points measured against a personal quota.

    The quota defaults to 36 minus the player's handicap. Every pair settles
    the difference between their deviations from quota.
    """
    settlement = Settlement(players, TAG_QUOTA)
    quotas = config.quotas or {}
    deviation = {}
    for player in players:
        quota = quotas.get(player.id, QUOTA_BASE - player.tax_man)
        deviation[player.id] = stableford_total(card_for(scores, player.id), pars) - quota

    for i, a in enumerate(players):
        for b in players[i + 1:]:
            diff = deviation[a.id] - deviation[b.id]
            if diff == 0:
                continue
            winner, loser = (a, b) if diff > 0 else (b, a)
            settlement.pay(loser, winner, round_money(abs(diff) * config.bet_per_point))

    return settlement.result(GameMode.QUOTA, 'Quota')


def rabbit_holder(players: Sequence[Player], scores: Scores) -> Optional[Player]:
    """Whoever last won a hole outright; ties leave the rabbit where it is."""
    holder: Optional[Player] = None
    for hole in range(HOLES):
        pairs = hole_scores(players, scores, hole)
        if len(pairs) < 2:
            continue
        holder = sole_low(pairs) or holder
    return holder


def calc_rabbit(players: Sequence[Player], scores: Scores, config: RabbitConfig) -> GameResult:
    """
    Rabbit: win a hole outright to catch the rabbit.

    Whoever holds the rabbit after the last hole collects from every other
    player.
    """
    settlement = Settlement(players, TAG_RABBIT)
    holder = rabbit_holder(players, scores)

    if holder is not None:
        settlement.collect_from_each(holder, [p for p in players if p.id != holder.id], config.stake)

    return settlement.result(GameMode.RABBIT, 'Rabbit')


def calc_aces_deuces(
    players: Sequence[Player],
    scores: Scores,
    config: AcesDeucesConfig,
    tie_policy: Optional[str] = None,
) -> GameResult:
    """
    Aces & Deuces: the hole's best score collects from everyone, the worst pays everyone.

    Tie policy 'all_play' lets every tied ace (or deuce) play; 'cancel'
    voids a side's payments when its extreme is shared. A hole where
    everyone ties is a push.
    """
    settlement = Settlement(players, TAG_ACES_DEUCES)
    policy = config.tie_policy or tie_policy
    stake = config.stake

    for hole in range(HOLES):
        pairs = hole_scores(players, scores, hole)
        if len(pairs) < 2:
            continue
        low = min(score for _, score in pairs)
        high = max(score for _, score in pairs)
        if low == high:
            continue

        aces = [p for p, s in pairs if s == low]
        deuces = [p for p, s in pairs if s == high]
        middles = [p for p, s in pairs if s not in (low, high)]

        if not (policy == TIE_POLICY_CANCEL and len(aces) > 1):
            for ace in aces:
                settlement.collect_from_each(ace, deuces + middles, stake)
        if not (policy == TIE_POLICY_CANCEL and len(deuces) > 1):
            for deuce in deuces:
                settlement.pay_each(deuce, aces + middles, stake)

    return settlement.result(GameMode.ACES_DEUCES, 'Aces & Deuces')


def nines_points(
    players: Sequence[Player], scores: Scores
) -> dict[str, float]:
    """
    Accumulated Nines points per player id.

    Each hole with at least two scores hands out 5/3/1 by rank. Tied
    players pool the buckets their ranks span and split them evenly.
    """
    totals = {p.id: 0.0 for p in players}

    for hole in range(HOLES):
        pairs = sorted(hole_scores(players, scores, hole), key=lambda pair: pair[1])
        if len(pairs) < 2:
            continue

        groups: list[list[Player]] = []
        last_score = None
        for player, score in pairs:
            if groups and score == last_score:
                groups[-1].append(player)
            else:
                groups.append([player])
            last_score = score

        bucket = 0
        for group in groups:
            pool = sum(NINES_POINTS[bucket:bucket + len(group)])
            for player in group:
                totals[player.id] += pool / len(group)
            bucket += len(group)

    return totals


def calc_nines(players: Sequence[Player], scores: Scores, config: NinesConfig) -> GameResult:
    """Nines: every pair settles their point difference times the per-point bet."""
    settlement = Settlement(players, TAG_NINES)
    points = nines_points(players, scores)

    for i, a in enumerate(players):
        for b in players[i + 1:]:
            diff = points[a.id] - points[b.id]
            if diff == 0:
                continue
            winner, loser = (a, b) if diff > 0 else (b, a)
            settlement.pay(loser, winner, round_money(abs(diff) * config.bet_per_point))

    return settlement.result(GameMode.NINES, 'Nines')


def calc_head_to_head(
    players: Sequence[Player],
    scores: Scores,
    config: HeadToHeadConfig,
    press_matches: Sequence[PressMatch] = (),
) -> GameResult:
    """
    Head to Head: every player against every other player.

    Match mode counts holes won where both players scored; the player up
    collects the flat bet. Stroke mode needs both 18-hole cards complete
    and pays bet x stroke difference. Handicaps give the higher handicap one
    stroke on each hole whose difficulty rank is within their allowance.
    """
    match_play = config.match_mode == 'match'
    allowances = handicap_allowances(players) if config.use_handicaps else None
    settlement = Settlement(players, TAG_HEAD_TO_HEAD)

    for i, a in enumerate(players):
        for b in players[i + 1:]:
            if match_play:
                up = pair_holes_up(a, b, scores, *FULL_ROUND, allowances)
                if up == 0:
                    continue
                winner, loser = (a, b) if up > 0 else (b, a)
                settlement.pay(loser, winner, config.bet_amount)
            else:
                totals = pair_stroke_totals(a, b, scores, *FULL_ROUND, allowances)
                if totals is None or totals[0] == totals[1]:
                    continue
                total_a, total_b = totals
                winner, loser = (a, b) if total_a < total_b else (b, a)
                settlement.pay(loser, winner, round_money(abs(total_a - total_b) * config.bet_amount))

    if press_matches:
        settlement.absorb(
            resolve_h2h_presses(
                players, scores, press_matches, match_play=match_play, allowances=allowances
            )
        )

    label = 'Head to Head'
    if config.use_handicaps:
        label += ' w/ HCP'
    return settlement.result(GameMode.HEAD_TO_HEAD, label)


def calc_keep_score(players: Sequence[Player], scores: Scores) -> GameResult:
    """No money changes hands; returns a leaderboard of entered-score totals."""
    totals = sorted(
        ((p.name, sum(s for s in card_for(scores, p.id) if s is not None)) for p in players),
        key=lambda item: item[1],
    )

    leaderboard = []
    for index, (name, total) in enumerate(totals):
        if index and totals[index - 1][1] == total:
            rank = leaderboard[-1].rank
        else:
            rank = index + 1
        leaderboard.append(LeaderboardEntry(rank=rank, name=name, total=total))

    return GameResult(
        mode=GameMode.KEEP_SCORE,
        label='Keep Score',
        payouts=[],
        net=init_net(players),
        leaderboard=leaderboard,
    )
