"""Pydantic schemas for game configuration and round input validation."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_PAR, HOLES, TIE_POLICY_ALL_PLAY, TIE_POLICY_CANCEL
from .models import (
    ArniesHole,
    BankerHole,
    BingoBangoBongoHole,
    CtpHole,
    DotsHole,
    GameExtras,
    GameMode,
    PressMatch,
    SnakeHole,
    TroubleHole,
    WolfHole,
    pad_holes,
)


class GameConfigBase(BaseModel):
    """Shared option-bag behaviour: camelCase or snake_case keys, unknown keys ignored."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = 'ignore'
        frozen = True


class StakeConfig(GameConfigBase):
    """Games that settle with a single flat stake."""

    bet_amount: float = Field(default=5, ge=0)


class TaxManConfig(GameConfigBase):
    tax_amount: float = Field(default=10, ge=0)


class NassauConfig(StakeConfig):
    bet_front: Optional[float] = Field(default=None, ge=0)
    bet_back: Optional[float] = Field(default=None, ge=0)
    bet_overall: Optional[float] = Field(default=None, ge=0)
    mode: Literal['stroke', 'match'] = 'stroke'
    use_handicaps: bool = False

    def leg_stake(self, field_name: str) -> float:
        """Stake for a leg, falling back to bet_amount."""
        value = getattr(self, field_name)
        return self.bet_amount if value is None else value


class SkinsConfig(GameConfigBase):
    bet_per_skin: float = Field(default=5, ge=0)


class PerHoleConfig(StakeConfig):
    """Stake per hole; bet_per_hole overrides bet_amount when given."""

    bet_per_hole: Optional[float] = Field(default=None, ge=0)

    @property
    def stake(self) -> float:
        return self.bet_amount if self.bet_per_hole is None else self.bet_per_hole


class WolfConfig(PerHoleConfig):
    bet_amount: float = Field(default=1, ge=0)


class BingoBangoBongoConfig(StakeConfig):
    bet_amount: float = Field(default=1, ge=0)


class SnakeConfig(StakeConfig):
    snake_amount: Optional[float] = Field(default=None, ge=0)

    @property
    def stake(self) -> float:
        return self.bet_amount if self.snake_amount is None else self.snake_amount


class CtpConfig(StakeConfig):
    pass


class TroubleConfig(StakeConfig):
    bet_amount: float = Field(default=1, ge=0)


class ArniesConfig(StakeConfig):
    pass


class BankerConfig(StakeConfig):
    pass


class KeepScoreConfig(GameConfigBase):
    pass


class HeadToHeadConfig(StakeConfig):
    match_mode: Literal['match', 'stroke'] = 'match'
    use_handicaps: bool = False


class TeamConfig(GameConfigBase):
    team_a: list[str] = Field(default_factory=list)
    team_b: list[str] = Field(default_factory=list)


class BestBallConfig(TeamConfig):
    bet_amount: float = Field(default=5, ge=0)
    match_mode: Literal['match', 'stroke'] = 'stroke'


class StablefordConfig(StakeConfig):
    bet_amount: float = Field(default=1, ge=0)


class RabbitConfig(StakeConfig):
    rabbit_amount: Optional[float] = Field(default=None, ge=0)

    @property
    def stake(self) -> float:
        return self.bet_amount if self.rabbit_amount is None else self.rabbit_amount


class DotsConfig(GameConfigBase):
    bet_per_dot: float = Field(default=1, ge=0)
    eagle: bool = True
    birdie: bool = True
    sandy: bool = True
    greenie: bool = True


class SixesConfig(GameConfigBase):
    bet_per_segment: float = Field(default=5, ge=0)


class PointsConfig(GameConfigBase):
    bet_per_point: float = Field(default=1, ge=0)


class NinesConfig(PointsConfig):
    pass


class ScotchConfig(TeamConfig):
    bet_per_point: float = Field(default=1, ge=0)


class VegasConfig(TeamConfig):
    bet_per_point: float = Field(default=1, ge=0)
    flip_bird: bool = False
    use_hammer: bool = False


class AcesDeucesConfig(PerHoleConfig):
    bet_amount: float = Field(default=2, ge=0)
    tie_policy: Optional[Literal['all_play', 'cancel']] = None


class QuotaConfig(PointsConfig):
    quotas: Optional[dict[str, int]] = None


CONFIG_SCHEMAS: dict[GameMode, type[GameConfigBase]] = {
    GameMode.TAXMAN: TaxManConfig,
    GameMode.NASSAU: NassauConfig,
    GameMode.SKINS: SkinsConfig,
    GameMode.WOLF: WolfConfig,
    GameMode.BINGO_BANGO_BONGO: BingoBangoBongoConfig,
    GameMode.SNAKE: SnakeConfig,
    GameMode.VEGAS: VegasConfig,
    GameMode.CTP: CtpConfig,
    GameMode.TROUBLE: TroubleConfig,
    GameMode.ARNIES: ArniesConfig,
    GameMode.BANKER: BankerConfig,
    GameMode.KEEP_SCORE: KeepScoreConfig,
    GameMode.HEAD_TO_HEAD: HeadToHeadConfig,
    GameMode.BEST_BALL: BestBallConfig,
    GameMode.STABLEFORD: StablefordConfig,
    GameMode.RABBIT: RabbitConfig,
    GameMode.DOTS: DotsConfig,
    GameMode.SIXES: SixesConfig,
    GameMode.NINES: NinesConfig,
    GameMode.SCOTCH: ScotchConfig,
    GameMode.ACES_DEUCES: AcesDeucesConfig,
    GameMode.QUOTA: QuotaConfig,
}


class GameEntry(BaseModel):
    """A selected game: its mode tag and the option bag for that mode."""

    mode: GameMode
    config: GameConfigBase

    @model_validator(mode='before')
    @classmethod
    def parse_config(cls, data):
        """Parse config through the schema for its mode."""
        if not isinstance(data, dict):
            return data
        try:
            mode = GameMode(data.get('mode'))
        except ValueError:
            return data

        schema = CONFIG_SCHEMAS[mode]
        config = data.get('config')
        if config is None:
            config = {}
        if isinstance(config, schema):
            return {**data, 'mode': mode}
        if isinstance(config, GameConfigBase):
            raise ValueError(f'{type(config).__name__} is not a config for {mode.value}')
        return {**data, 'mode': mode, 'config': schema.model_validate(config)}

    class Config:
        frozen = True


def parse_game_entry(raw: dict | GameEntry) -> GameEntry:
    """
    Build a GameEntry from a raw {mode, config} mapping.

    Missing config fields take the documented per-mode defaults.

    Raises:
        ValueError: If the mode tag is unknown or the config is malformed
    """
    if isinstance(raw, GameEntry):
        return raw

    mode_value = raw.get('mode')
    try:
        mode = GameMode(mode_value)
    except ValueError as e:
        raise ValueError(f'Unknown game mode: {mode_value!r}') from e

    try:
        return GameEntry.model_validate({'mode': mode, 'config': raw.get('config')})
    except ValidationError as e:
        raise ValueError(f'Invalid config for {mode.value}:\n{e}') from e


# Round input file (CLI) schemas


class PlayerInput(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    tax_man: int = Field(default=0, alias='taxMan')

    class Config:
        populate_by_name = True
        extra = 'forbid'


class RoundFile(BaseModel):
    """Complete round.json structure consumed by the settle-round CLI."""

    players: list[PlayerInput]
    scores: dict[str, list[Optional[int]]]
    pars: Optional[list[int]] = None
    games: list[dict]
    extras: dict = Field(default_factory=dict)

    @field_validator('players')
    @classmethod
    def validate_unique_players(cls, v):
        """Ensure player ids and names are unique."""
        ids = [p.id for p in v]
        names = [p.name for p in v]
        if len(set(ids)) != len(ids):
            raise ValueError('Duplicate player id in roster')
        if len(set(names)) != len(names):
            raise ValueError('Duplicate player name in roster')
        return v

    @field_validator('pars')
    @classmethod
    def validate_pars(cls, v):
        """Ensure pars cover exactly one round."""
        if v is not None and len(v) != HOLES:
            raise ValueError(f'pars must have {HOLES} entries, got {len(v)}')
        return v

    @field_validator('games')
    @classmethod
    def validate_games(cls, v):
        """Ensure at least one game is selected."""
        if not v:
            raise ValueError('At least one game must be selected')
        return v

    class Config:
        extra = 'forbid'


class EngineSettings(BaseModel):
    """Engine-wide settings loaded from engine_config.json."""

    default_par: int = Field(default=DEFAULT_PAR, ge=3, le=6)
    aces_deuces_tie_policy: str = Field(default=TIE_POLICY_ALL_PLAY)
    zero_sum_tolerance: float = Field(default=0.01, ge=0)

    @field_validator('aces_deuces_tie_policy')
    @classmethod
    def validate_tie_policy(cls, v):
        """Ensure the tie policy is a known convention."""
        if v not in (TIE_POLICY_ALL_PLAY, TIE_POLICY_CANCEL):
            raise ValueError(f'Invalid tie policy: {v}')
        return v

    class Config:
        extra = 'forbid'


# Per-hole annotation input (camelCase JSON as produced by scorecard clients)


class WolfHoleInput(GameConfigBase):
    wolf_player_id: str
    partner_id: Optional[str] = None


class BingoBangoBongoHoleInput(GameConfigBase):
    bingo_id: Optional[str] = None
    bango_id: Optional[str] = None
    bongo_id: Optional[str] = None


class SnakeHoleInput(GameConfigBase):
    three_putter_ids: list[str] = Field(default_factory=list)


class CtpHoleInput(GameConfigBase):
    winner_id: Optional[str] = None


class TroubleHoleInput(GameConfigBase):
    troubles: dict[str, list[str]] = Field(default_factory=dict)


class ArniesHoleInput(GameConfigBase):
    qualified_player_ids: list[str] = Field(default_factory=list)


class BankerHoleInput(GameConfigBase):
    banker_id: Optional[str] = None
    bet_override: Optional[float] = Field(default=None, ge=0)


class DotsHoleInput(GameConfigBase):
    sandy_player_ids: list[str] = Field(default_factory=list)
    greenie_id: Optional[str] = None


class PressMatchInput(GameConfigBase):
    game: str
    start_hole: int = Field(..., ge=0, lt=HOLES)
    end_hole: int = Field(default=HOLES - 1, ge=0, lt=HOLES)
    bet_amount: float = Field(default=0, ge=0)


class ExtrasInput(GameConfigBase):
    """Raw extras block: per-hole annotations, Vegas teams, presses, hammer multipliers."""

    pars: Optional[list[int]] = None
    wolf: list[Optional[WolfHoleInput]] = Field(default_factory=list)
    bbb: list[Optional[BingoBangoBongoHoleInput]] = Field(default_factory=list)
    snake: list[Optional[SnakeHoleInput]] = Field(default_factory=list)
    ctp: list[Optional[CtpHoleInput]] = Field(default_factory=list)
    trouble: list[Optional[TroubleHoleInput]] = Field(default_factory=list)
    arnies: list[Optional[ArniesHoleInput]] = Field(default_factory=list)
    banker: list[Optional[BankerHoleInput]] = Field(default_factory=list)
    dots: list[Optional[DotsHoleInput]] = Field(default_factory=list)
    vegas_team_a: list[str] = Field(default_factory=list)
    vegas_team_b: list[str] = Field(default_factory=list)
    press_matches: list[PressMatchInput] = Field(default_factory=list)
    hammer_multipliers: Optional[list[int]] = None

    @field_validator('wolf', 'bbb', 'snake', 'ctp', 'trouble', 'arnies', 'banker', 'dots')
    @classmethod
    def validate_hole_count(cls, v):
        """Ensure annotation lists don't run past the last hole."""
        if len(v) > HOLES:
            raise ValueError(f'annotations cover {len(v)} holes (max {HOLES})')
        return v

    def to_extras(self) -> GameExtras:
        """Convert to the engine's immutable hole records, padded to a full round."""

        def holes(items, build):
            return pad_holes([None if item is None else build(item) for item in items])

        return GameExtras(
            pars=self.pars,
            wolf=holes(self.wolf, lambda h: WolfHole(h.wolf_player_id, h.partner_id)),
            bbb=holes(self.bbb, lambda h: BingoBangoBongoHole(h.bingo_id, h.bango_id, h.bongo_id)),
            snake=holes(self.snake, lambda h: SnakeHole(tuple(h.three_putter_ids))),
            ctp=holes(self.ctp, lambda h: CtpHole(h.winner_id)),
            trouble=holes(
                self.trouble,
                lambda h: TroubleHole({pid: tuple(tags) for pid, tags in h.troubles.items()}),
            ),
            arnies=holes(self.arnies, lambda h: ArniesHole(frozenset(h.qualified_player_ids))),
            banker=holes(self.banker, lambda h: BankerHole(h.banker_id, h.bet_override)),
            dots=holes(self.dots, lambda h: DotsHole(frozenset(h.sandy_player_ids), h.greenie_id)),
            vegas_team_a=list(self.vegas_team_a),
            vegas_team_b=list(self.vegas_team_b),
            press_matches=[
                PressMatch(p.game, p.start_hole, p.end_hole, p.bet_amount) for p in self.press_matches
            ],
            hammer_multipliers=pad_holes(self.hammer_multipliers, fill=1),
        )
