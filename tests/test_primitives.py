"""Unit tests for shared scoring primitives."""

import pytest

from sidegames.models import Player
from sidegames.primitives import (
    Settlement,
    adjusted_score,
    card_for,
    handicap_allowances,
    hole_scores,
    round_money,
    sole_low,
    stableford_points,
    stableford_total,
    strokes_received,
    sum_scores,
)


class TestRoundMoney:
    """Tests for two-decimal payment rounding."""

    def test_half_rounds_away_from_zero(self):
        """Test that an exact half cent rounds up in magnitude."""
        assert round_money(0.125) == 0.13
        assert round_money(-0.125) == -0.13

    def test_thirds(self):
        """Test rounding of a repeating fraction."""
        assert round_money(10 / 3) == 3.33

    def test_zero_is_positive_zero(self):
        """Test that zero stays a plain zero."""
        assert str(round_money(0)) == '0.0'
        assert str(round_money(-0.001)) == '0.0'


class TestScoreHelpers:
    """Tests for card access and range sums."""

    def test_sum_short_circuits_on_missing(self, make_card):
        """Test that any missing hole makes the range total unavailable."""
        card = make_card(overrides={4: None})
        assert sum_scores(card, 0, 4) == 16
        assert sum_scores(card, 0, 9) is None

    def test_unknown_player_gets_empty_card(self):
        """Test that a player missing from the mapping has an all-empty card."""
        card = card_for({}, 'ghost')
        assert card == [None] * 18

    def test_short_card_is_padded(self):
        """Test that partially entered cards are padded to 18 holes."""
        card = card_for({'a': [4, 5]}, 'a')
        assert len(card) == 18
        assert card[:3] == [4, 5, None]

    def test_hole_scores_skips_blanks(self, two_players):
        """Test that only entered scores are returned for a hole."""
        pairs = hole_scores(two_players, {'a': [4], 'b': []}, 0)
        assert [(p.id, s) for p, s in pairs] == [('a', 4)]

    def test_sole_low(self, two_players):
        """Test sole-low detection and tie handling."""
        alice, bob = two_players
        assert sole_low([(alice, 3), (bob, 4)]) == alice
        assert sole_low([(alice, 4), (bob, 4)]) is None
        assert sole_low([]) is None


class TestHandicaps:
    """Tests for handicap allowances and stroke allocation."""

    def test_allowance_relative_to_low_handicap(self):
        """Test that allowances are measured from the group's lowest handicap."""
        players = [Player('a', 'A', 18), Player('b', 'B', 8)]
        assert handicap_allowances(players) == {'a': 10, 'b': 0}

    def test_empty_group(self):
        """Test that an empty group has no allowances."""
        assert handicap_allowances([]) == {}

    def test_strokes_follow_difficulty_rank(self):
        """Test that a stroke lands only where the allowance reaches the hole's rank."""
        # Hole 1 is rank 1, hole 2 is rank 10
        assert strokes_received(1, 0) == 1
        assert strokes_received(1, 1) == 0
        assert strokes_received(10, 1) == 1
        assert strokes_received(0, 0) == 0

    def test_adjusted_score_without_allowances(self):
        """Test that gross is returned when handicaps are off."""
        assert adjusted_score(5, 'a', 0, None) == 5
        assert adjusted_score(5, 'a', 0, {'a': 1}) == 4


class TestStableford:
    """Tests for Stableford point values."""

    @pytest.mark.parametrize(
        'score,par,points',
        [(2, 5, 5), (3, 5, 4), (3, 4, 3), (4, 4, 2), (5, 4, 1), (6, 4, 0), (9, 4, 0)],
    )
    def test_points(self, score, par, points):
        """Test the points table from albatross down to double bogey."""
        assert stableford_points(score, par) == points

    def test_total_ignores_blank_holes(self, make_card):
        """Test that only entered holes earn points."""
        card = make_card(overrides={0: 3, 1: None})
        assert stableford_total(card, [4] * 18) == 3 + 2 * 16


class TestSettlement:
    """Tests for the payout accumulator."""

    def test_pay_records_line_and_ledger(self, two_players):
        """Test that a payment updates both the payout list and the ledger."""
        alice, bob = two_players
        settlement = Settlement(two_players, 'skins')
        settlement.pay(bob, alice, 5)

        assert len(settlement.payouts) == 1
        assert settlement.payouts[0].payer == 'Bob'
        assert settlement.payouts[0].payee == 'Alice'
        assert settlement.payouts[0].game == 'skins'
        assert settlement.net == {'Alice': 5, 'Bob': -5}

    def test_zero_and_self_payments_skipped(self, two_players):
        """Test that zero amounts and self-payments are dropped."""
        alice, bob = two_players
        settlement = Settlement(two_players, 'skins')
        settlement.pay(bob, alice, 0)
        settlement.pay(alice, alice, 5)
        assert settlement.payouts == []

    def test_absorb_keeps_tags(self, two_players):
        """Test that absorbed lines keep their own game tag."""
        alice, bob = two_players
        base = Settlement(two_players, 'nassau')
        press = Settlement(two_players, 'nassau-press')
        base.pay(bob, alice, 5)
        press.pay(alice, bob, 2)
        base.absorb(press)

        assert [p.game for p in base.payouts] == ['nassau', 'nassau-press']
        assert base.net == {'Alice': 3, 'Bob': -3}

    def test_result_ledger_sums_to_zero(self, three_players):
        """Test that split payments still produce a zero-sum ledger."""
        alice, bob, cara = three_players
        settlement = Settlement(three_players, 'vegas')
        settlement.settle_teams([alice, bob], [cara], round_money(10 / 3))
        result = settlement.result('vegas', 'Vegas')
        assert abs(sum(result.net.values())) < 1e-9
        assert result.net['Cara'] == -6.66
