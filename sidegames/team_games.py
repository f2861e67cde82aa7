"""Calculators for two-sided team games: Vegas, Best Ball, Scotch and Sixes."""

import logging
from typing import List, Optional, Sequence, Tuple

from .constants import (
    HOLES,
    SCOTCH_LOW_BALL_POINTS,
    SCOTCH_LOW_TOTAL_POINTS,
    SIXES_SEGMENTS,
    TAG_BEST_BALL,
    TAG_SCOTCH,
    TAG_SIXES,
    TAG_VEGAS,
)
from .models import GameExtras, GameMode, GameResult, Player, pad_holes
from .primitives import Scores, Settlement, card_for, round_money
from .schemas import BestBallConfig, ScotchConfig, SixesConfig, VegasConfig
from .validators import validate_team_partition

logger = logging.getLogger('sidegames.team_games')

Team = List[Player]


def resolve_teams(
    players: Sequence[Player], team_a: Sequence[str], team_b: Sequence[str], game: str
) -> Optional[Tuple[Team, Team]]:
    """Roster-ordered teams, or None if the ids don't form a valid partition."""
    errors = validate_team_partition(players, team_a, team_b)
    if errors:
        logger.debug(f'{game}: skipping, {"; ".join(errors)}')
        return None
    return (
        [p for p in players if p.id in team_a],
        [p for p in players if p.id in team_b],
    )


def team_hole_scores(team: Team, scores: Scores, hole: int) -> List[int]:
    """Entered scores for a team on one hole, in roster order."""
    result = []
    for player in team:
        score = card_for(scores, player.id)[hole]
        if score is not None:
            result.append(score)
    return result


def vegas_team_number(s1: int, s2: int, par: int, force_high: bool = False) -> int:
    """
    Combine two scores into a Vegas team number.

    Low score leads when either player made par or better, otherwise the
    high score leads. A double-digit score always leads. force_high is the
    flip-the-bird penalty.
    """
    lo, hi = sorted((s1, s2))
    if s1 >= 10 or s2 >= 10:
        return int(f'{hi}{lo}')
    if not force_high and (s1 <= par or s2 <= par):
        return lo * 10 + hi
    return hi * 10 + lo


def _vegas_number(team_scores: Sequence[int], par: int, force_high: bool = False) -> int:
    second = team_scores[1] if len(team_scores) > 1 else team_scores[0]
    return vegas_team_number(team_scores[0], second, par, force_high)


def vegas_teams(
    players: Sequence[Player], config: VegasConfig, extras: Optional[GameExtras] = None
) -> Optional[Tuple[Team, Team]]:
    """Vegas teams from the config, falling back to the teams on extras."""
    team_a_ids, team_b_ids = config.team_a, config.team_b
    if not team_a_ids and not team_b_ids and extras is not None:
        team_a_ids, team_b_ids = extras.vegas_team_a, extras.vegas_team_b
    return resolve_teams(players, team_a_ids, team_b_ids, 'Vegas')


def vegas_points(
    team_a: Team,
    team_b: Team,
    scores: Scores,
    pars: Sequence[int],
    config: VegasConfig,
    hammer: Optional[Sequence[int]] = None,
) -> int:
    """Signed Vegas running total; positive favours team A."""
    total = 0
    for hole in range(HOLES):
        a_scores = team_hole_scores(team_a, scores, hole)
        b_scores = team_hole_scores(team_b, scores, hole)
        if len(a_scores) < len(team_a) or len(b_scores) < len(team_b):
            continue

        par = pars[hole]
        num_a = _vegas_number(a_scores, par)
        num_b = _vegas_number(b_scores, par)

        if config.flip_bird:
            a_birdie = any(s <= par - 1 for s in a_scores)
            b_birdie = any(s <= par - 1 for s in b_scores)
            if a_birdie and not b_birdie:
                num_b = _vegas_number(b_scores, par, force_high=True)
            elif b_birdie and not a_birdie:
                num_a = _vegas_number(a_scores, par, force_high=True)

        multiplier = hammer[hole] if hammer else 1
        total += (num_b - num_a) * multiplier

    return total


def calc_vegas(
    players: Sequence[Player],
    scores: Scores,
    pars: Sequence[int],
    config: VegasConfig,
    extras: Optional[GameExtras] = None,
) -> GameResult:
    """
    Vegas: each team's two scores form a two-digit number; the lower number wins the difference.

    Holes count only when every team member has scored. The signed running
    total decides the winning team, which collects |total| x bet_per_point,
    split evenly across its members.
    """
    settlement = Settlement(players, TAG_VEGAS)
    teams = vegas_teams(players, config, extras)
    if teams is None:
        return settlement.result(GameMode.VEGAS, 'Vegas')
    team_a, team_b = teams

    hammer = None
    if extras is not None and config.use_hammer:
        hammer = pad_holes(extras.hammer_multipliers, fill=1)

    total = vegas_points(team_a, team_b, scores, pars, config, hammer)
    if total == 0:
        return settlement.result(GameMode.VEGAS, 'Vegas')

    winners, losers = (team_a, team_b) if total > 0 else (team_b, team_a)
    share = round_money(abs(total) * config.bet_per_point / len(winners))
    settlement.settle_teams(winners, losers, share)

    return settlement.result(GameMode.VEGAS, 'Vegas')


def _settle_team_margin(
    settlement: Settlement, winners: Team, losers: Team, margin: float, stake: float
) -> None:
    payout = round_money(margin * stake)
    share = round_money(payout / len(winners))
    settlement.settle_teams(winners, losers, share)


def best_ball_metrics(team_a: Team, team_b: Team, scores: Scores, match_mode: str) -> Tuple[int, int]:
    """
    Best-ball totals per team (stroke) or holes won per team (match).

    Only holes where both teams have a score count.
    """
    metric_a = metric_b = 0
    for hole in range(HOLES):
        a_scores = team_hole_scores(team_a, scores, hole)
        b_scores = team_hole_scores(team_b, scores, hole)
        if not a_scores or not b_scores:
            continue
        best_a, best_b = min(a_scores), min(b_scores)
        if match_mode == 'stroke':
            metric_a += best_a
            metric_b += best_b
        elif best_a < best_b:
            metric_a += 1
        elif best_b < best_a:
            metric_b += 1
    return metric_a, metric_b


def calc_best_ball(players: Sequence[Player], scores: Scores, config: BestBallConfig) -> GameResult:
    """Best Ball: each team's low score per hole, compared by strokes or holes won."""
    settlement = Settlement(players, TAG_BEST_BALL)
    teams = resolve_teams(players, config.team_a, config.team_b, 'Best Ball')
    if teams is None:
        return settlement.result(GameMode.BEST_BALL, 'Best Ball')
    team_a, team_b = teams

    metric_a, metric_b = best_ball_metrics(team_a, team_b, scores, config.match_mode)
    if metric_a == metric_b:
        return settlement.result(GameMode.BEST_BALL, 'Best Ball')

    if config.match_mode == 'stroke':
        a_wins = metric_a < metric_b
    else:
        a_wins = metric_a > metric_b
    winners, losers = (team_a, team_b) if a_wins else (team_b, team_a)
    _settle_team_margin(settlement, winners, losers, abs(metric_a - metric_b), config.bet_amount)

    return settlement.result(GameMode.BEST_BALL, 'Best Ball')


def scotch_points(team_a: Team, team_b: Team, scores: Scores) -> Tuple[int, int]:
    """Scotch points per team over holes where each team has two or more scores."""
    points_a = points_b = 0
    for hole in range(HOLES):
        a_scores = team_hole_scores(team_a, scores, hole)
        b_scores = team_hole_scores(team_b, scores, hole)
        if len(a_scores) < 2 or len(b_scores) < 2:
            continue

        if min(a_scores) < min(b_scores):
            points_a += SCOTCH_LOW_BALL_POINTS
        elif min(b_scores) < min(a_scores):
            points_b += SCOTCH_LOW_BALL_POINTS

        if sum(a_scores) < sum(b_scores):
            points_a += SCOTCH_LOW_TOTAL_POINTS
        elif sum(b_scores) < sum(a_scores):
            points_b += SCOTCH_LOW_TOTAL_POINTS
    return points_a, points_b


def scotch_teams(players: Sequence[Player], config: ScotchConfig) -> Optional[Tuple[Team, Team]]:
    """Scotch teams, or None unless both sides have two or more players."""
    teams = resolve_teams(players, config.team_a, config.team_b, 'Scotch')
    if teams is None or len(teams[0]) < 2 or len(teams[1]) < 2:
        return None
    return teams


def calc_scotch(players: Sequence[Player], scores: Scores, config: ScotchConfig) -> GameResult:
    """
    Scotch: two points for low ball and three for low team total on each hole.

    Both teams need two or more members, and a hole counts once each team
    has at least two scores on it.
    """
    settlement = Settlement(players, TAG_SCOTCH)
    teams = scotch_teams(players, config)
    if teams is None:
        return settlement.result(GameMode.SCOTCH, 'Scotch')
    team_a, team_b = teams

    points_a, points_b = scotch_points(team_a, team_b, scores)
    if points_a == points_b:
        return settlement.result(GameMode.SCOTCH, 'Scotch')

    winners, losers = (team_a, team_b) if points_a > points_b else (team_b, team_a)
    _settle_team_margin(settlement, winners, losers, abs(points_a - points_b), config.bet_per_point)

    return settlement.result(GameMode.SCOTCH, 'Scotch')


def sixes_segments(players: Sequence[Player]) -> List[Tuple[int, int, Team, Team]]:
    """(start, end inclusive, team A, team B) for each segment; empty under four players."""
    if len(players) < 4:
        return []
    four = list(players[:4])
    return [
        (start, end, [four[i] for i in team_a_idx], [four[i] for i in team_b_idx])
        for start, end, team_a_idx, team_b_idx in SIXES_SEGMENTS
    ]


def segment_holes_won(
    team_a: Team, team_b: Team, scores: Scores, start: int, end: int
) -> Tuple[int, int, int]:
    """Best-ball holes won by each team over start..end inclusive, and holes compared."""
    wins_a = wins_b = compared = 0
    for hole in range(start, end + 1):
        a_scores = team_hole_scores(team_a, scores, hole)
        b_scores = team_hole_scores(team_b, scores, hole)
        if not a_scores or not b_scores:
            continue
        compared += 1
        if min(a_scores) < min(b_scores):
            wins_a += 1
        elif min(b_scores) < min(a_scores):
            wins_b += 1
    return wins_a, wins_b, compared


def calc_sixes(players: Sequence[Player], scores: Scores, config: SixesConfig) -> GameResult:
    """
    Sixes: the first four players rotate partners every six holes.

    Each six-hole segment is a best-ball match; the team winning more holes
    takes bet_per_segment from each opponent. Tied segments push.
    """
    settlement = Settlement(players, TAG_SIXES)

    for start, end, team_a, team_b in sixes_segments(players):
        wins_a, wins_b, _ = segment_holes_won(team_a, team_b, scores, start, end)
        if wins_a == wins_b:
            continue
        winners, losers = (team_a, team_b) if wins_a > wins_b else (team_b, team_a)
        settlement.settle_teams(winners, losers, config.bet_per_segment)

    return settlement.result(GameMode.SIXES, 'Sixes')
