"""Live mid-round standings for each selected game.

Each view folds the scores and annotations entered so far with the same
helpers the calculators use and describes the standing as short display
lines. Games without a dedicated view show their running net ledger.
Nothing here settles money.
"""

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .constants import BACK_NINE, FRONT_NINE, HOLES, NASSAU_LEGS, TAG_NASSAU
from .engine import GAME_LABELS, calculate_game, prepare_extras
from .models import (
    GameExtras,
    GameMode,
    GameResult,
    LiveStatus,
    LiveStatusLine,
    Player,
    PressMatch,
    StatusColor,
    pad_holes,
)
from .presses import match_range_holes_won, stroke_range_totals
from .primitives import Scores, card_for, handicap_allowances, stableford_total
from .schemas import (
    BestBallConfig,
    DotsConfig,
    EngineSettings,
    GameConfigBase,
    GameEntry,
    NassauConfig,
    ScotchConfig,
    VegasConfig,
    parse_game_entry,
)
from .stroke_games import calc_keep_score, nines_points, rabbit_holder, skins_tally
from .team_games import (
    Team,
    best_ball_metrics,
    resolve_teams,
    scotch_points,
    scotch_teams,
    segment_holes_won,
    sixes_segments,
    vegas_points,
    vegas_teams,
)
from .tracked_games import bbb_points, count_dots, snake_run

logger = logging.getLogger('sidegames.live')

LiveView = Callable[[Sequence[Player], Scores, GameConfigBase, GameExtras], List[LiveStatusLine]]

LEG_SHORT_NAMES = {'Front 9': 'F9', 'Back 9': 'B9', 'Full 18': '18'}


def team_name(team: Team) -> str:
    """First names joined with '/', e.g. 'Alice/Bob'."""
    return '/'.join(p.name.split(' ')[0] for p in team)


def holes_completed(players: Sequence[Player], scores: Scores) -> int:
    """Holes up to and including the latest hole every player has scored."""
    completed = 0
    for hole in range(HOLES):
        if players and all(card_for(scores, p.id)[hole] is not None for p in players):
            completed = hole + 1
    return completed


def ranked_lines(
    players: Sequence[Player], values: Mapping[str, float], unit: str
) -> List[LiveStatusLine]:
    """One line per player, highest first; the leader is green once anyone has a point."""
    ranked = sorted(players, key=lambda p: values[p.id], reverse=True)
    best = values[ranked[0].id] if ranked else 0
    return [
        LiveStatusLine(
            f'{p.name} {values[p.id]:g} {unit}',
            StatusColor.GREEN if best > 0 and values[p.id] == best else StatusColor.NEUTRAL,
            p.id,
        )
        for p in ranked
    ]


def running_net_lines(players: Sequence[Player], result: GameResult) -> List[LiveStatusLine]:
    """Each player's net so far in a settled-as-of-now result."""
    lines = []
    for player in players:
        amount = result.net.get(player.name, 0.0)
        if amount > 0:
            color = StatusColor.GREEN
        elif amount < 0:
            color = StatusColor.RED
        else:
            color = StatusColor.NEUTRAL
        lines.append(LiveStatusLine(f'{player.name} {amount:+.2f}', color, player.id))
    return lines


# Per-game views


def _scorecard_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    ids = {p.name: p.id for p in players}
    started = any(s is not None for p in players for s in card_for(scores, p.id))
    return [
        LiveStatusLine(
            f'{entry.rank}. {entry.name}: {entry.total}',
            StatusColor.GREEN if started and entry.rank == 1 else StatusColor.NEUTRAL,
            ids.get(entry.name),
        )
        for entry in calc_keep_score(players, scores).leaderboard or []
    ]


def _tax_man_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    lines = []
    for player in players:
        entered = [s for s in card_for(scores, player.id) if s is not None]
        if not entered:
            lines.append(LiveStatusLine(f'{player.name} --', StatusColor.YELLOW, player.id))
            continue
        # Under the target so far is on course to win
        diff = sum(entered) - player.tax_man
        color = StatusColor.GREEN if diff < 0 else StatusColor.RED
        lines.append(LiveStatusLine(f'{player.name} {diff:+d}', color, player.id))
    return lines


def _stroke_leg_line(players, scores, start, end, short, allowances) -> LiveStatusLine:
    totals = sorted(
        stroke_range_totals(players, scores, start, end, allowances), key=lambda pair: pair[1]
    )
    if len(totals) < 2:
        return LiveStatusLine(f'{short}: --')
    (leader, best), (_, second) = totals[0], totals[1]
    if best == second:
        return LiveStatusLine(f'{short}: Tied')
    return LiveStatusLine(f'{short}: {leader.name} -{second - best}', StatusColor.GREEN, leader.id)


def _match_leg_line(players, scores, start, end, short, allowances) -> LiveStatusLine:
    holes_won, _ = match_range_holes_won(players, scores, start, end, allowances)
    ranked = sorted(players, key=lambda p: holes_won[p.id], reverse=True)
    if len(ranked) < 2 or holes_won[ranked[0].id] == 0:
        return LiveStatusLine(f'{short}: --')
    lead = holes_won[ranked[0].id] - holes_won[ranked[1].id]
    if lead == 0:
        return LiveStatusLine(f'{short}: AS')
    return LiveStatusLine(f'{short}: {ranked[0].name} {lead}UP', StatusColor.GREEN, ranked[0].id)


def _press_lines(presses: Sequence[PressMatch]) -> List[LiveStatusLine]:
    lines = []
    for short, (start, end) in (('F9', FRONT_NINE), ('B9', BACK_NINE)):
        count = sum(1 for p in presses if p.game == TAG_NASSAU and start <= p.start_hole < end)
        if count:
            suffix = 'es' if count > 1 else ''
            lines.append(LiveStatusLine(f'{short}: {count} press{suffix}', StatusColor.YELLOW))
    return lines


def nassau_label(config: NassauConfig) -> str:
    label = 'Nassau (Match)' if config.mode == 'match' else 'Nassau'
    return label + ' w/ HCP' if config.use_handicaps else label


def _nassau_lines(players, scores, config: NassauConfig, extras) -> List[LiveStatusLine]:
    allowances = handicap_allowances(players) if config.use_handicaps else None
    leg_line = _match_leg_line if config.mode == 'match' else _stroke_leg_line
    lines = [
        leg_line(players, scores, start, end, LEG_SHORT_NAMES[leg_name], allowances)
        for leg_name, _, start, end in NASSAU_LEGS
    ]
    return lines + _press_lines(extras.press_matches)


def _skins_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    skins_won, carryover = skins_tally(players, scores, holes_completed(players, scores))
    lines = []
    for player in players:
        won = skins_won[player.id]
        if won:
            suffix = 's' if won > 1 else ''
            line = LiveStatusLine(f'{player.name} {won} skin{suffix}', StatusColor.GREEN, player.id)
            lines.append(line)
    if carryover:
        lines.append(LiveStatusLine(f'carry: {carryover}', StatusColor.YELLOW))
    return lines or [LiveStatusLine('No skins yet')]


def _vegas_lines(players, scores, config: VegasConfig, extras) -> List[LiveStatusLine]:
    teams = vegas_teams(players, config, extras)
    if teams is None:
        return [LiveStatusLine('Teams not set')]
    team_a, team_b = teams

    hammer = extras.hammer_multipliers if config.use_hammer else None
    points = vegas_points(team_a, team_b, scores, extras.pars, config, hammer)
    header = LiveStatusLine(f'{team_name(team_a)} vs {team_name(team_b)}')
    if points == 0:
        return [header, LiveStatusLine('All square')]
    leader = team_a if points > 0 else team_b
    return [header, LiveStatusLine(f'{team_name(leader)} +{abs(points)}', StatusColor.GREEN)]


def _best_ball_lines(players, scores, config: BestBallConfig, extras) -> List[LiveStatusLine]:
    teams = resolve_teams(players, config.team_a, config.team_b, 'Best Ball')
    if teams is None:
        return [LiveStatusLine('Teams not set')]
    team_a, team_b = teams

    metric_a, metric_b = best_ball_metrics(team_a, team_b, scores, config.match_mode)
    margin = abs(metric_a - metric_b)
    if margin == 0:
        return [LiveStatusLine('All square')]
    if config.match_mode == 'stroke':
        leader = team_a if metric_a < metric_b else team_b
        return [LiveStatusLine(f'{team_name(leader)} -{margin}', StatusColor.GREEN)]
    leader = team_a if metric_a > metric_b else team_b
    return [LiveStatusLine(f'{team_name(leader)} +{margin} holes', StatusColor.GREEN)]


def _bbb_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    return ranked_lines(players, bbb_points(players, extras.bbb), 'pts')


def _snake_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    holder_id, held = snake_run(extras.snake)
    holder = next((p for p in players if p.id == holder_id), None)
    if holder is None:
        return [LiveStatusLine('No holder')]
    return [LiveStatusLine(f'{holder.name} ({held}h)', StatusColor.RED, holder.id)]


def _stableford_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    points = {p.id: stableford_total(card_for(scores, p.id), extras.pars) for p in players}
    return ranked_lines(players, points, 'pts')


def _rabbit_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    holder = rabbit_holder(players, scores)
    if holder is None:
        return [LiveStatusLine('Uncaught')]
    return [LiveStatusLine(f'{holder.name} holds', StatusColor.RED, holder.id)]


def _dots_lines(players, scores, config: DotsConfig, extras) -> List[LiveStatusLine]:
    dots = count_dots(players, scores, extras.pars, extras.dots, config)
    return ranked_lines(players, dots, 'dots')


def _sixes_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    segments = sixes_segments(players)
    if not segments:
        return [LiveStatusLine('Need 4 players')]

    lines = []
    for number, (start, end, team_a, team_b) in enumerate(segments, start=1):
        wins_a, wins_b, compared = segment_holes_won(team_a, team_b, scores, start, end)
        if not compared:
            continue
        if wins_a == wins_b:
            lines.append(LiveStatusLine(f'S{number}: AS'))
            continue
        leader = team_a if wins_a > wins_b else team_b
        high, low = max(wins_a, wins_b), min(wins_a, wins_b)
        text = f'S{number}: {team_name(leader)} {high}-{low}'
        lines.append(LiveStatusLine(text, StatusColor.GREEN))
    return lines or [LiveStatusLine('In progress')]


def _nines_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    return ranked_lines(players, nines_points(players, scores), 'pts')


def _scotch_lines(players, scores, config: ScotchConfig, extras) -> List[LiveStatusLine]:
    teams = scotch_teams(players, config)
    if teams is None:
        return [LiveStatusLine('Teams not set')]
    team_a, team_b = teams

    points_a, points_b = scotch_points(team_a, team_b, scores)
    if points_a == points_b:
        return [LiveStatusLine(f'{team_name(team_a)} {points_a}-{points_b} {team_name(team_b)}')]
    leader = team_a if points_a > points_b else team_b
    high, low = max(points_a, points_b), min(points_a, points_b)
    return [LiveStatusLine(f'{team_name(leader)} leads {high}-{low}', StatusColor.GREEN)]


def _ctp_lines(players, scores, config, extras) -> List[LiveStatusLine]:
    wins = {p.id: 0 for p in players}
    for hole, state in enumerate(pad_holes(extras.ctp)):
        if extras.pars[hole] == 3 and state is not None and state.winner_id in wins:
            wins[state.winner_id] += 1

    lines = [
        LiveStatusLine(f'{p.name} {wins[p.id]} CTP', StatusColor.GREEN, p.id)
        for p in players
        if wins[p.id]
    ]
    return lines or [LiveStatusLine('No CTP yet')]


# Games missing from this table show their running net ledger
LIVE_VIEWS: Dict[GameMode, LiveView] = {
    GameMode.KEEP_SCORE: _scorecard_lines,
    GameMode.TAXMAN: _tax_man_lines,
    GameMode.NASSAU: _nassau_lines,
    GameMode.SKINS: _skins_lines,
    GameMode.VEGAS: _vegas_lines,
    GameMode.BEST_BALL: _best_ball_lines,
    GameMode.BINGO_BANGO_BONGO: _bbb_lines,
    GameMode.SNAKE: _snake_lines,
    GameMode.STABLEFORD: _stableford_lines,
    GameMode.RABBIT: _rabbit_lines,
    GameMode.DOTS: _dots_lines,
    GameMode.SIXES: _sixes_lines,
    GameMode.NINES: _nines_lines,
    GameMode.SCOTCH: _scotch_lines,
    GameMode.CTP: _ctp_lines,
}


def game_status(
    entry: GameEntry,
    players: Sequence[Player],
    scores: Scores,
    extras: GameExtras,
    settings: Optional[EngineSettings] = None,
) -> LiveStatus:
    """Live standing for one game; extras is expected to come from prepare_extras()."""
    view = LIVE_VIEWS.get(entry.mode)
    if view is None:
        result = calculate_game(entry, players, scores, extras, settings)
        return LiveStatus(entry.mode, result.label, running_net_lines(players, result))

    if entry.mode is GameMode.NASSAU:
        label = nassau_label(entry.config)
    else:
        label = GAME_LABELS[entry.mode]
    return LiveStatus(entry.mode, label, view(players, scores, entry.config, extras))


def live_status(
    players: Sequence[Player],
    games: Iterable[GameEntry | dict],
    scores: Scores,
    extras: Optional[GameExtras] = None,
    settings: Optional[EngineSettings] = None,
) -> List[LiveStatus]:
    """
    Mid-round standing for every selected game, in selection order.

    Works on any partially entered round and never mutates its inputs.

    Args:
        players: Round roster
        games: Ordered GameEntry objects or raw {mode, config} dicts
        scores: Player id -> per-hole scores (None = not entered)
        extras: Pars, hole annotations, teams and presses
        settings: Default par, Aces & Deuces tie policy, zero-sum tolerance

    Returns:
        One LiveStatus per game

    Raises:
        ValueError: If a game entry has an unknown mode or malformed config
    """
    settings = settings if settings is not None else EngineSettings()
    entries = [parse_game_entry(game) for game in games]
    extras = prepare_extras(extras, settings)

    completed = holes_completed(players, scores)
    logger.debug(f'Live status for {len(entries)} games after {completed} holes')
    return [game_status(entry, players, scores, extras, settings) for entry in entries]
