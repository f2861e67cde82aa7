"""Data models for the side-game settlement engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

from .constants import HOLES


class GameMode(str, Enum):
    """Game mode tags, as stored on a GameEntry."""
    TAXMAN = 'taxman'
    NASSAU = 'nassau'
    SKINS = 'skins'
    WOLF = 'wolf'
    BINGO_BANGO_BONGO = 'bingoBangoBongo'
    SNAKE = 'snake'
    VEGAS = 'vegas'
    CTP = 'ctp'
    TROUBLE = 'trouble'
    ARNIES = 'arnies'
    BANKER = 'banker'
    KEEP_SCORE = 'keepScore'
    HEAD_TO_HEAD = 'headToHead'
    BEST_BALL = 'bestBall'
    STABLEFORD = 'stableford'
    RABBIT = 'rabbit'
    DOTS = 'dots'
    SIXES = 'sixes'
    NINES = 'nines'
    SCOTCH = 'scotch'
    ACES_DEUCES = 'acesDeuces'
    QUOTA = 'quota'

    @classmethod
    def _missing_(cls, value):
        # Accept kebab-case tags ('keep-score', 'aces-deuces') and 'scorecard'
        if isinstance(value, str):
            if value == 'scorecard':
                return cls.KEEP_SCORE
            head, *rest = value.split('-')
            camel = head + ''.join(part.capitalize() for part in rest)
            for member in cls:
                if member.value.lower() == camel.lower():
                    return member
        return None


@dataclass(frozen=True)
class Player:
    """Snapshot of a player for one settlement computation.

    tax_man is both the Tax Man target score and the handicap proxy used by
    Quota and handicap-adjusted games.
    """
    id: str
    name: str
    tax_man: int = 0


@dataclass(frozen=True)
class Payout:
    """A directed settlement instruction: payer owes payee amount."""
    payer: str
    payee: str
    amount: float
    game: str

    def to_dict(self) -> Dict[str, object]:
        return {'from': self.payer, 'to': self.payee, 'amount': self.amount, 'game': self.game}


@dataclass
class LeaderboardEntry:
    rank: int
    name: str
    total: int


@dataclass
class GameResult:
    """Outcome of one game: payout lines plus a zero-sum net ledger keyed by name."""
    mode: GameMode
    label: str
    payouts: List[Payout] = field(default_factory=list)
    net: Dict[str, float] = field(default_factory=dict)
    leaderboard: Optional[List[LeaderboardEntry]] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            'mode': self.mode.value,
            'label': self.label,
            'payouts': [p.to_dict() for p in self.payouts],
            'net': dict(self.net),
        }
        if self.leaderboard is not None:
            data['leaderboard'] = [
                {'rank': e.rank, 'name': e.name, 'total': e.total} for e in self.leaderboard
            ]
        return data


@dataclass
class MultiGameResults:
    """Combined results of every selected game for one round."""
    player_names: List[str]
    games: List[GameResult] = field(default_factory=list)
    combined_net: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            'playerNames': list(self.player_names),
            'games': [g.to_dict() for g in self.games],
            'combinedNet': dict(self.combined_net),
        }


class StatusColor(str, Enum):
    """Display hint for a live status line."""
    GREEN = 'green'
    RED = 'red'
    YELLOW = 'yellow'
    NEUTRAL = 'neutral'


@dataclass(frozen=True)
class LiveStatusLine:
    text: str
    color: StatusColor = StatusColor.NEUTRAL
    player_id: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {'text': self.text, 'color': self.color.value}
        if self.player_id is not None:
            data['playerId'] = self.player_id
        return data


@dataclass
class LiveStatus:
    """Mid-round standing for one game; nothing is settled."""
    mode: GameMode
    label: str
    lines: List[LiveStatusLine] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            'mode': self.mode.value,
            'label': self.label,
            'lines': [line.to_dict() for line in self.lines],
        }


# Hole annotation records, one optional record per hole per tracked game


@dataclass(frozen=True)
class WolfHole:
    wolf_player_id: str
    partner_id: Optional[str] = None  # None = lone wolf


@dataclass(frozen=True)
class BingoBangoBongoHole:
    bingo_id: Optional[str] = None  # first on the green
    bango_id: Optional[str] = None  # closest once all are on
    bongo_id: Optional[str] = None  # first to hole out


@dataclass(frozen=True)
class SnakeHole:
    three_putter_ids: Tuple[str, ...] = ()  # order matters; last one holds the snake


@dataclass(frozen=True)
class CtpHole:
    winner_id: Optional[str] = None


@dataclass(frozen=True)
class TroubleHole:
    troubles: Dict[str, Tuple[str, ...]] = field(default_factory=dict)  # player id -> trouble tags


@dataclass(frozen=True)
class ArniesHole:
    qualified_player_ids: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class BankerHole:
    banker_id: Optional[str] = None
    bet_override: Optional[float] = None


@dataclass(frozen=True)
class DotsHole:
    sandy_player_ids: FrozenSet[str] = frozenset()
    greenie_id: Optional[str] = None


HoleAnnotation = Union[
    WolfHole,
    BingoBangoBongoHole,
    SnakeHole,
    CtpHole,
    TroubleHole,
    ArniesHole,
    BankerHole,
    DotsHole,
]


@dataclass(frozen=True)
class PressMatch:
    """Side bet over holes start_hole..end_hole (0-based, inclusive)."""
    game: str  # 'nassau' or 'h2h-{idA}-{idB}'
    start_hole: int
    end_hole: int = HOLES - 1
    bet_amount: float = 0.0


def pad_holes(values: Optional[Sequence], fill=None) -> list:
    """Normalise a per-hole sequence to exactly HOLES entries."""
    values = list(values or [])
    if len(values) >= HOLES:
        return values[:HOLES]
    return values + [fill] * (HOLES - len(values))


def _empty_holes() -> list:
    return [None] * HOLES


@dataclass
class GameExtras:
    """Per-round inputs beyond raw scores: pars, hole annotations, teams, presses."""
    pars: Optional[List[int]] = None
    wolf: List[Optional[WolfHole]] = field(default_factory=_empty_holes)
    bbb: List[Optional[BingoBangoBongoHole]] = field(default_factory=_empty_holes)
    snake: List[Optional[SnakeHole]] = field(default_factory=_empty_holes)
    ctp: List[Optional[CtpHole]] = field(default_factory=_empty_holes)
    trouble: List[Optional[TroubleHole]] = field(default_factory=_empty_holes)
    arnies: List[Optional[ArniesHole]] = field(default_factory=_empty_holes)
    banker: List[Optional[BankerHole]] = field(default_factory=_empty_holes)
    dots: List[Optional[DotsHole]] = field(default_factory=_empty_holes)
    vegas_team_a: List[str] = field(default_factory=list)
    vegas_team_b: List[str] = field(default_factory=list)
    press_matches: List[PressMatch] = field(default_factory=list)
    hammer_multipliers: List[int] = field(default_factory=lambda: [1] * HOLES)
