"""Unit tests for team game calculators."""

from sidegames.models import GameExtras
from sidegames.schemas import BestBallConfig, ScotchConfig, SixesConfig, VegasConfig
from sidegames.team_games import (
    calc_best_ball,
    calc_scotch,
    calc_sixes,
    calc_vegas,
    vegas_team_number,
)

PARS = [4] * 18
TEAMS = {'teamA': ['a', 'b'], 'teamB': ['c', 'd']}


class TestVegasNumber:
    """Tests for combining two scores into a team number."""

    def test_par_or_better_puts_low_first(self):
        """Test that a par lets the team lead with its low score."""
        assert vegas_team_number(4, 5, 4) == 45

    def test_over_par_puts_high_first(self):
        """Test that two scores over par lead with the high score."""
        assert vegas_team_number(5, 6, 4) == 65

    def test_double_digit_leads(self):
        """Test that a double-digit score always leads the number."""
        assert vegas_team_number(4, 10, 4) == 104

    def test_flip_forces_high_first(self):
        """Test the flip-the-bird penalty."""
        assert vegas_team_number(4, 5, 4, force_high=True) == 54


class TestVegas:
    """Tests for Vegas settlement."""

    def test_tied_round_pushes(self, four_players, even_scores):
        """Test that equal team numbers all round settle nothing."""
        result = calc_vegas(four_players, even_scores, PARS, VegasConfig(**TEAMS))
        assert result.payouts == []
        assert all(amount == 0 for amount in result.net.values())

    def test_winning_team_collects(self, four_players, even_scores):
        """Test that the lower team number wins the point difference."""
        scores = dict(even_scores, b=[5] + [4] * 17, c=[5] + [4] * 17, d=[5] + [4] * 17)
        result = calc_vegas(four_players, scores, PARS, VegasConfig(**TEAMS))
        # 45 against 55 on the first hole
        assert len(result.payouts) == 4
        assert all(p.amount == 5 for p in result.payouts)
        assert result.net == {'Alice': 10, 'Bob': 10, 'Cara': -10, 'Dan': -10}

    def test_flip_the_bird(self, four_players, even_scores):
        """Test that a birdie forces the opponents' number high-first."""
        scores = dict(even_scores, a=[3] + [4] * 17, b=[5] + [4] * 17, d=[5] + [4] * 17)
        plain = calc_vegas(four_players, scores, PARS, VegasConfig(**TEAMS))
        flipped = calc_vegas(four_players, scores, PARS, VegasConfig(**TEAMS, flipBird=True))
        # 35 against 45, or 35 against 54 once flipped
        assert plain.net['Alice'] == 10
        assert flipped.net['Alice'] == 19

    def test_hammer_multiplier(self, four_players, even_scores):
        """Test that hammer multipliers scale a hole's points when enabled."""
        scores = dict(even_scores, b=[5] + [4] * 17, c=[5] + [4] * 17, d=[5] + [4] * 17)
        extras = GameExtras(hammer_multipliers=[2] + [1] * 17)
        result = calc_vegas(
            four_players, scores, PARS, VegasConfig(**TEAMS, useHammer=True), extras
        )
        assert result.net['Alice'] == 20

    def test_short_hammer_list(self, four_players, even_scores):
        """Test that unlisted holes play at a multiplier of one."""
        scores = dict(even_scores, b=[4] * 17 + [5], c=[4] * 17 + [5], d=[4] * 17 + [5])
        extras = GameExtras(hammer_multipliers=[2])
        result = calc_vegas(
            four_players, scores, PARS, VegasConfig(**TEAMS, useHammer=True), extras
        )
        # 45 against 55 on the last hole, not doubled
        assert result.net['Alice'] == 10

    def test_teams_fall_back_to_extras(self, four_players, even_scores):
        """Test that extras supply the teams when the config names none."""
        scores = dict(even_scores, c=[5] + [4] * 17, d=[5] + [4] * 17)
        extras = GameExtras(vegas_team_a=['a', 'b'], vegas_team_b=['c', 'd'])
        result = calc_vegas(four_players, scores, PARS, VegasConfig(), extras)
        assert result.net['Alice'] > 0

    def test_missing_team_is_empty(self, four_players, even_scores):
        """Test that a game without two teams returns an empty result."""
        result = calc_vegas(four_players, even_scores, PARS, VegasConfig(teamA=['a', 'b']))
        assert result.payouts == []

    def test_incomplete_hole_skipped(self, four_players, even_scores):
        """Test that a hole counts only when every team member has scored."""
        scores = dict(even_scores, b=[None] + [4] * 17, c=[9] + [4] * 17)
        result = calc_vegas(four_players, scores, PARS, VegasConfig(**TEAMS))
        assert result.payouts == []


class TestBestBall:
    """Tests for Best Ball."""

    def test_stroke_mode_split_share(self, four_players, even_scores):
        """Test that the payout is split across the winning team."""
        scores = dict(even_scores, a=[3] + [4] * 17)
        result = calc_best_ball(four_players, scores, BestBallConfig(**TEAMS))
        assert all(p.amount == 2.5 for p in result.payouts)
        assert result.net == {'Alice': 5, 'Bob': 5, 'Cara': -5, 'Dan': -5}

    def test_match_mode_counts_holes(self, four_players, even_scores):
        """Test that match mode pays on holes won, not stroke margin."""
        scores = dict(even_scores, a=[1] + [4] * 17)
        result = calc_best_ball(four_players, scores, BestBallConfig(**TEAMS, matchMode='match'))
        assert result.net['Alice'] == 5

    def test_overlapping_teams_rejected(self, four_players, even_scores):
        """Test that an invalid partition settles nothing."""
        config = BestBallConfig(teamA=['a', 'b'], teamB=['b', 'c'])
        result = calc_best_ball(four_players, even_scores, config)
        assert result.payouts == []
        assert sum(result.net.values()) == 0


class TestScotch:
    """Tests for Scotch points."""

    def test_low_ball_and_low_total(self, four_players, even_scores):
        """Test that one hole can award both categories to one team."""
        scores = dict(even_scores, a=[3] + [4] * 17)
        result = calc_scotch(four_players, scores, ScotchConfig(**TEAMS))
        # 5 points at $1, split between two winners
        assert all(p.amount == 2.5 for p in result.payouts)
        assert result.net == {'Alice': 5, 'Bob': 5, 'Cara': -5, 'Dan': -5}

    def test_split_categories(self, four_players, even_scores):
        """Test that low ball and low total can go to different teams."""
        # Team A low ball 3, total 10; team B low ball 4, total 8
        scores = dict(even_scores, a=[3] + [4] * 17, b=[7] + [4] * 17)
        result = calc_scotch(four_players, scores, ScotchConfig(**TEAMS))
        # Team B wins by a point; each loser pays each winner half of it
        assert all(p.amount == 0.5 for p in result.payouts)
        assert result.net == {'Alice': -1, 'Bob': -1, 'Cara': 1, 'Dan': 1}

    def test_teams_need_two_players(self, four_players, even_scores):
        """Test that a one-player side is not a Scotch game."""
        config = ScotchConfig(teamA=['a'], teamB=['c', 'd'])
        result = calc_scotch(four_players, even_scores, config)
        assert result.payouts == []


class TestSixes:
    """Tests for rotating-partner Sixes."""

    def test_first_segment_winner(self, four_players, even_scores):
        """Test that the first six holes pair seats one and two."""
        scores = dict(even_scores, a=[3] + [4] * 17)
        result = calc_sixes(four_players, scores, SixesConfig())
        assert result.net == {'Alice': 10, 'Bob': 10, 'Cara': -10, 'Dan': -10}

    def test_partners_rotate(self, four_players, even_scores):
        """Test that a birdie on hole 7 pays Alice's second partner."""
        card = [4] * 18
        card[6] = 3
        scores = dict(even_scores, a=card)
        result = calc_sixes(four_players, scores, SixesConfig(betPerSegment=1))
        assert result.net == {'Alice': 2, 'Bob': -2, 'Cara': 2, 'Dan': -2}

    def test_needs_four_players(self, three_players, even_scores):
        """Test that fewer than four players settles nothing."""
        result = calc_sixes(three_players, even_scores, SixesConfig())
        assert result.payouts == []
