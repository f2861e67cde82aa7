"""Dispatcher that runs a round's selected games and folds their ledgers together."""

import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional, Sequence

from .constants import DEFAULT_PAR
from .models import GameExtras, GameMode, GameResult, MultiGameResults, Player, pad_holes
from .primitives import Scores, init_net
from .schemas import AcesDeucesConfig, EngineSettings, GameConfigBase, GameEntry, parse_game_entry
from .stroke_games import (
    calc_aces_deuces,
    calc_head_to_head,
    calc_keep_score,
    calc_nassau,
    calc_nines,
    calc_quota,
    calc_rabbit,
    calc_skins,
    calc_stableford,
    calc_tax_man,
)
from .team_games import calc_best_ball, calc_scotch, calc_sixes, calc_vegas
from .tracked_games import (
    calc_arnies,
    calc_banker,
    calc_bingo_bango_bongo,
    calc_ctp,
    calc_dots,
    calc_snake,
    calc_trouble,
    calc_wolf,
)
from .validators import validate_zero_sum

logger = logging.getLogger('sidegames.engine')

Calculator = Callable[[Sequence[Player], Scores, GameConfigBase, GameExtras], GameResult]

# Every calculator is adapted to (players, scores, config, extras); extras.pars is always set
CALCULATORS: dict[GameMode, Calculator] = {
    GameMode.TAXMAN: lambda players, scores, config, extras: calc_tax_man(players, scores, config),
    GameMode.NASSAU: lambda players, scores, config, extras: calc_nassau(
        players, scores, config, extras.press_matches
    ),
    GameMode.SKINS: lambda players, scores, config, extras: calc_skins(players, scores, config),
    GameMode.WOLF: lambda players, scores, config, extras: calc_wolf(
        players, scores, extras.wolf, config
    ),
    GameMode.BINGO_BANGO_BONGO: lambda players, scores, config, extras: calc_bingo_bango_bongo(
        players, extras.bbb, config
    ),
    GameMode.SNAKE: lambda players, scores, config, extras: calc_snake(players, extras.snake, config),
    GameMode.VEGAS: lambda players, scores, config, extras: calc_vegas(
        players, scores, extras.pars, config, extras
    ),
    GameMode.CTP: lambda players, scores, config, extras: calc_ctp(
        players, extras.pars, extras.ctp, config
    ),
    GameMode.TROUBLE: lambda players, scores, config, extras: calc_trouble(
        players, extras.trouble, config
    ),
    GameMode.ARNIES: lambda players, scores, config, extras: calc_arnies(
        players, extras.arnies, config
    ),
    GameMode.BANKER: lambda players, scores, config, extras: calc_banker(
        players, scores, extras.banker, config
    ),
    GameMode.KEEP_SCORE: lambda players, scores, config, extras: calc_keep_score(players, scores),
    GameMode.HEAD_TO_HEAD: lambda players, scores, config, extras: calc_head_to_head(
        players, scores, config, extras.press_matches
    ),
    GameMode.BEST_BALL: lambda players, scores, config, extras: calc_best_ball(
        players, scores, config
    ),
    GameMode.STABLEFORD: lambda players, scores, config, extras: calc_stableford(
        players, scores, extras.pars, config
    ),
    GameMode.RABBIT: lambda players, scores, config, extras: calc_rabbit(players, scores, config),
    GameMode.DOTS: lambda players, scores, config, extras: calc_dots(
        players, scores, extras.pars, extras.dots, config
    ),
    GameMode.SIXES: lambda players, scores, config, extras: calc_sixes(players, scores, config),
    GameMode.NINES: lambda players, scores, config, extras: calc_nines(players, scores, config),
    GameMode.SCOTCH: lambda players, scores, config, extras: calc_scotch(players, scores, config),
    GameMode.ACES_DEUCES: lambda players, scores, config, extras: calc_aces_deuces(
        players, scores, config
    ),
    GameMode.QUOTA: lambda players, scores, config, extras: calc_quota(
        players, scores, extras.pars, config
    ),
}

GAME_LABELS = {
    GameMode.TAXMAN: 'Tax Man',
    GameMode.NASSAU: 'Nassau',
    GameMode.SKINS: 'Skins',
    GameMode.WOLF: 'Wolf',
    GameMode.BINGO_BANGO_BONGO: 'Bingo Bango Bongo',
    GameMode.SNAKE: 'Snake',
    GameMode.VEGAS: 'Vegas',
    GameMode.CTP: 'Closest to Pin',
    GameMode.TROUBLE: 'Trouble',
    GameMode.ARNIES: 'Arnies',
    GameMode.BANKER: 'Banker',
    GameMode.KEEP_SCORE: 'Keep Score',
    GameMode.HEAD_TO_HEAD: 'Head to Head',
    GameMode.BEST_BALL: 'Best Ball',
    GameMode.STABLEFORD: 'Stableford',
    GameMode.RABBIT: 'Rabbit',
    GameMode.DOTS: 'Dots/Junk',
    GameMode.SIXES: 'Sixes',
    GameMode.NINES: 'Nines',
    GameMode.SCOTCH: 'Scotch',
    GameMode.ACES_DEUCES: 'Aces & Deuces',
    GameMode.QUOTA: 'Quota',
}


def resolve_pars(extras: GameExtras, default_par: int = DEFAULT_PAR) -> list[int]:
    """Pars for the round, filling any gap with the default par."""
    return [default_par if par is None else par for par in pad_holes(extras.pars)]


def prepare_extras(extras: Optional[GameExtras], settings: EngineSettings) -> GameExtras:
    """Copy of extras with pars and hammer multipliers padded to a full round."""
    extras = extras if extras is not None else GameExtras()
    return replace(
        extras,
        pars=resolve_pars(extras, settings.default_par),
        hammer_multipliers=pad_holes(extras.hammer_multipliers, fill=1),
    )


def calculate_game(
    entry: GameEntry,
    players: Sequence[Player],
    scores: Scores,
    extras: GameExtras,
    settings: Optional[EngineSettings] = None,
) -> GameResult:
    """
    Run one game's calculator.

    Games with fewer than two players return an empty result for the mode.
    extras is expected to come from prepare_extras().
    """
    settings = settings if settings is not None else EngineSettings()
    if len(players) < 2:
        logger.debug(f'{entry.mode.value}: fewer than 2 players, returning empty result')
        return GameResult(mode=entry.mode, label=GAME_LABELS[entry.mode], net=init_net(players))

    config = entry.config
    if isinstance(config, AcesDeucesConfig) and config.tie_policy is None:
        config = config.model_copy(update={'tie_policy': settings.aces_deuces_tie_policy})

    logger.debug(f'Running {entry.mode.value} for {len(players)} players')
    result = CALCULATORS[entry.mode](players, scores, config, extras)
    validate_zero_sum(result, settings.zero_sum_tolerance)
    return result


def calculate_all_games(
    players: Sequence[Player],
    games: Iterable[GameEntry | dict],
    scores: Scores,
    extras: Optional[GameExtras] = None,
    settings: Optional[EngineSettings] = None,
) -> MultiGameResults:
    """
    Settle every selected game for one round.

    Each game runs exactly once, in selection order, against the same
    inputs. The combined ledger is the per-player sum of every game's net.
    Nothing is read from disk: settings default to EngineSettings() and the
    CLI passes get_config() in explicitly.

    Args:
        players: Round roster
        games: Ordered GameEntry objects or raw {mode, config} dicts
        scores: Player id -> per-hole scores (None = not entered)
        extras: Pars, hole annotations, teams and presses
        settings: Default par, Aces & Deuces tie policy, zero-sum tolerance

    Returns:
        MultiGameResults with per-game results and the combined ledger

    Raises:
        ValueError: If a game entry has an unknown mode or malformed config
    """
    settings = settings if settings is not None else EngineSettings()
    entries = [parse_game_entry(game) for game in games]
    extras = prepare_extras(extras, settings)

    results = [calculate_game(entry, players, scores, extras, settings) for entry in entries]

    combined = init_net(players)
    for result in results:
        for name, amount in result.net.items():
            if name in combined:
                combined[name] += amount
    combined = {name: round(amount, 2) + 0.0 for name, amount in combined.items()}

    logger.debug(f'Settled {len(results)} games for {len(players)} players')
    return MultiGameResults(
        player_names=[p.name for p in players],
        games=results,
        combined_net=combined,
    )
