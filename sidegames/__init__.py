from .models import (
    GameMode,
    Player,
    Payout,
    GameResult,
    MultiGameResults,
    LeaderboardEntry,
    PressMatch,
    GameExtras,
    WolfHole,
    BingoBangoBongoHole,
    SnakeHole,
    CtpHole,
    TroubleHole,
    ArniesHole,
    BankerHole,
    DotsHole,
    StatusColor,
    LiveStatusLine,
    LiveStatus,
)
from .schemas import GameEntry, EngineSettings, ExtrasInput, RoundFile, parse_game_entry
from .engine import CALCULATORS, calculate_game, calculate_all_games
from .live import LIVE_VIEWS, live_status
from .stroke_games import (
    calc_tax_man,
    calc_nassau,
    calc_skins,
    calc_stableford,
    calc_quota,
    calc_rabbit,
    calc_aces_deuces,
    calc_nines,
    calc_head_to_head,
    calc_keep_score,
)
from .team_games import calc_vegas, calc_best_ball, calc_scotch, calc_sixes
from .tracked_games import (
    calc_wolf,
    calc_bingo_bango_bongo,
    calc_snake,
    calc_ctp,
    calc_trouble,
    calc_arnies,
    calc_banker,
    calc_dots,
)
from .presses import (
    resolve_nassau_presses,
    resolve_h2h_presses,
    find_auto_presses,
    find_h2h_auto_presses,
)
from .validators import validate_team_partition, validate_zero_sum

__all__ = [
    # Models
    'GameMode',
    'Player',
    'Payout',
    'GameResult',
    'MultiGameResults',
    'LeaderboardEntry',
    'PressMatch',
    'GameExtras',
    'WolfHole',
    'BingoBangoBongoHole',
    'SnakeHole',
    'CtpHole',
    'TroubleHole',
    'ArniesHole',
    'BankerHole',
    'DotsHole',
    'StatusColor',
    'LiveStatusLine',
    'LiveStatus',
    # Input parsing
    'GameEntry',
    'ExtrasInput',
    'RoundFile',
    'EngineSettings',
    'parse_game_entry',
    # Dispatcher
    'CALCULATORS',
    'calculate_game',
    'calculate_all_games',
    # Live standings
    'LIVE_VIEWS',
    'live_status',
    # Stroke games
    'calc_tax_man',
    'calc_nassau',
    'calc_skins',
    'calc_stableford',
    'calc_quota',
    'calc_rabbit',
    'calc_aces_deuces',
    'calc_nines',
    'calc_head_to_head',
    'calc_keep_score',
    # Team games
    'calc_vegas',
    'calc_best_ball',
    'calc_scotch',
    'calc_sixes',
    # Annotation-tracked games
    'calc_wolf',
    'calc_bingo_bango_bongo',
    'calc_snake',
    'calc_ctp',
    'calc_trouble',
    'calc_arnies',
    'calc_banker',
    'calc_dots',
    # Presses
    'resolve_nassau_presses',
    'resolve_h2h_presses',
    'find_auto_presses',
    'find_h2h_auto_presses',
    # Validation
    'validate_team_partition',
    'validate_zero_sum',
]
