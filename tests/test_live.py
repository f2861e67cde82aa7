"""Tests for mid-round live standings."""

import pytest

from sidegames.live import LIVE_VIEWS, holes_completed, live_status
from sidegames.models import (
    BingoBangoBongoHole,
    CtpHole,
    GameExtras,
    GameMode,
    LiveStatus,
    LiveStatusLine,
    Player,
    PressMatch,
    SnakeHole,
    StatusColor,
    WolfHole,
)

TEAMS = {'teamA': ['a', 'b'], 'teamB': ['c', 'd']}


def texts(status):
    return [line.text for line in status.lines]


def single(players, game, scores, extras=None):
    """Live status for one game."""
    statuses = live_status(players, [game], scores, extras)
    assert len(statuses) == 1
    return statuses[0]


class TestLiveStatus:
    """Tests for the live dispatcher."""

    def test_one_status_per_game_in_order(self, four_players):
        """Test that every mode yields a status, in selection order."""
        games = [{'mode': mode.value} for mode in GameMode]
        statuses = live_status(four_players, games, {'a': [4], 'b': [5]})
        assert [s.mode for s in statuses] == list(GameMode)
        assert all(s.label for s in statuses)

    def test_unknown_mode_raises(self, two_players):
        """Test that an unknown mode is rejected like it is at settlement."""
        with pytest.raises(ValueError, match='Unknown game mode'):
            live_status(two_players, [{'mode': 'croquet'}], {})

    def test_inputs_not_mutated(self, four_players):
        """Test that building standings leaves scores and extras alone."""
        scores = {'a': [3, 4], 'b': [4, 4]}
        extras = GameExtras(hammer_multipliers=[2], ctp=[CtpHole('a')])
        live_status(four_players, [{'mode': m.value} for m in GameMode], scores, extras)
        assert scores == {'a': [3, 4], 'b': [4, 4]}
        assert extras.pars is None
        assert extras.hammer_multipliers == [2]

    def test_holes_completed(self, two_players):
        """Test that only holes every player has scored count as complete."""
        assert holes_completed(two_players, {'a': [4, 4, 4], 'b': [4, 4]}) == 2
        assert holes_completed(two_players, {}) == 0
        assert holes_completed([], {'a': [4]}) == 0

    def test_serialisation(self):
        """Test the camelCase wire shape of a status."""
        status = LiveStatus(
            GameMode.SNAKE,
            'Snake',
            [LiveStatusLine('Alice (1h)', StatusColor.RED, 'a'), LiveStatusLine('carry: 1')],
        )
        assert status.to_dict() == {
            'mode': 'snake',
            'label': 'Snake',
            'lines': [
                {'text': 'Alice (1h)', 'color': 'red', 'playerId': 'a'},
                {'text': 'carry: 1', 'color': 'neutral'},
            ],
        }


class TestStrokeViews:
    """Tests for standings of score-only games."""

    def test_scorecard_leader(self, two_players):
        """Test that the scorecard ranks entered totals and marks the leader."""
        status = single(two_players, {'mode': 'keepScore'}, {'a': [4, 5], 'b': [4, 4]})
        assert status.label == 'Keep Score'
        assert texts(status) == ['1. Bob: 8', '2. Alice: 9']
        assert status.lines[0].color == StatusColor.GREEN
        assert status.lines[0].player_id == 'b'

    def test_tax_man_running_diff(self, two_players):
        """Test the running total against each player's target."""
        status = single(two_players, {'mode': 'taxman'}, {'a': [4, 4]})
        assert texts(status) == ['Alice -82', 'Bob --']
        assert [line.color for line in status.lines] == [StatusColor.GREEN, StatusColor.YELLOW]

    def test_nassau_match_legs(self, two_players):
        """Test match-play legs and the press count for the front nine."""
        scores = {'a': [3, 3, 4], 'b': [4, 4, 4]}
        extras = GameExtras(press_matches=[PressMatch('nassau', 2, 8, 5)])
        status = single(two_players, {'mode': 'nassau', 'config': {'mode': 'match'}}, scores, extras)
        assert status.label == 'Nassau (Match)'
        assert texts(status) == ['F9: Alice 2UP', 'B9: --', '18: Alice 2UP', 'F9: 1 press']
        assert status.lines[-1].color == StatusColor.YELLOW

    def test_nassau_match_all_square(self, two_players):
        """Test that level holes won read as all square."""
        game = {'mode': 'nassau', 'config': {'mode': 'match'}}
        status = single(two_players, game, {'a': [3, 4], 'b': [4, 3]})
        assert texts(status)[0] == 'F9: AS'

    def test_nassau_stroke_needs_complete_leg(self, two_players):
        """Test that a stroke leg is only compared once every hole is in."""
        scores = {'a': [4] * 9, 'b': [5] + [4] * 8}
        status = single(two_players, {'mode': 'nassau'}, scores)
        assert status.label == 'Nassau'
        assert texts(status) == ['F9: Alice -1', 'B9: --', '18: --']

    def test_nassau_handicap_label(self, two_players):
        """Test the handicap suffix on the label."""
        status = single(two_players, {'mode': 'nassau', 'config': {'useHandicaps': True}}, {})
        assert status.label == 'Nassau w/ HCP'

    def test_skins_with_carry(self, three_players):
        """Test skins won so far and the skins riding on the next hole."""
        scores = {'a': [3, 3, 4], 'b': [3, 4, 4], 'c': [4, 4, 4]}
        status = single(three_players, {'mode': 'skins'}, scores)
        assert texts(status) == ['Alice 2 skins', 'carry: 1']
        assert [line.color for line in status.lines] == [StatusColor.GREEN, StatusColor.YELLOW]

    def test_skins_ignore_unfinished_hole(self, two_players):
        """Test that a hole some players haven't finished doesn't carry yet."""
        status = single(two_players, {'mode': 'skins'}, {'a': [3, 4], 'b': [4]})
        assert texts(status) == ['Alice 1 skin']

    def test_no_skins_yet(self, two_players):
        """Test the placeholder before any hole is scored."""
        assert texts(single(two_players, {'mode': 'skins'}, {})) == ['No skins yet']

    def test_rabbit_holder(self, two_players):
        """Test that the last outright hole winner holds the rabbit."""
        status = single(two_players, {'mode': 'rabbit'}, {'a': [3, 4], 'b': [4, 3]})
        assert texts(status) == ['Bob holds']
        assert status.lines[0].color == StatusColor.RED

    def test_rabbit_uncaught(self, two_players):
        """Test that a tied card leaves the rabbit loose."""
        assert texts(single(two_players, {'mode': 'rabbit'}, {'a': [4], 'b': [4]})) == ['Uncaught']

    def test_nines_ranked(self, two_players):
        """Test Nines points ranked with the leader marked."""
        status = single(two_players, {'mode': 'nines'}, {'a': [3], 'b': [4]})
        assert texts(status) == ['Alice 5 pts', 'Bob 3 pts']
        assert [line.color for line in status.lines] == [StatusColor.GREEN, StatusColor.NEUTRAL]

    def test_nines_shared_lead(self, two_players):
        """Test that tied players both lead on split points."""
        status = single(two_players, {'mode': 'nines'}, {'a': [4], 'b': [4]})
        assert texts(status) == ['Alice 4 pts', 'Bob 4 pts']
        assert all(line.color == StatusColor.GREEN for line in status.lines)

    def test_stableford_ranked(self, two_players):
        """Test Stableford points against the default par."""
        status = single(two_players, {'mode': 'stableford'}, {'a': [4], 'b': [3]})
        assert texts(status) == ['Bob 3 pts', 'Alice 2 pts']


class TestTeamViews:
    """Tests for standings of team games."""

    def test_vegas_running_points(self, four_players):
        """Test that Vegas shows points so far for the leading team."""
        scores = {'a': [4], 'b': [4], 'c': [5], 'd': [5]}
        status = single(four_players, {'mode': 'vegas', 'config': TEAMS}, scores)
        # 44 against 55
        assert texts(status) == ['Alice/Bob vs Cara/Dan', 'Alice/Bob +11']

    def test_vegas_without_teams(self, four_players):
        """Test the placeholder when no teams are picked."""
        assert texts(single(four_players, {'mode': 'vegas'}, {})) == ['Teams not set']

    def test_best_ball_stroke(self, four_players):
        """Test the best-ball stroke margin so far."""
        scores = {'a': [3], 'b': [4], 'c': [4], 'd': [4]}
        status = single(four_players, {'mode': 'bestBall', 'config': TEAMS}, scores)
        assert texts(status) == ['Alice/Bob -1']

    def test_best_ball_match(self, four_players):
        """Test holes up in match mode."""
        scores = {'a': [3, 4], 'b': [4, 4], 'c': [4, 3], 'd': [4, 4]}
        config = dict(TEAMS, matchMode='match')
        status = single(four_players, {'mode': 'bestBall', 'config': config}, scores)
        assert texts(status) == ['All square']

    def test_scotch_leader(self, four_players):
        """Test Scotch points with low ball and low total to one team."""
        scores = {'a': [3], 'b': [4], 'c': [4], 'd': [4]}
        status = single(four_players, {'mode': 'scotch', 'config': TEAMS}, scores)
        assert texts(status) == ['Alice/Bob leads 5-0']

    def test_sixes_segment_lines(self, four_players):
        """Test that only segments with holes played are listed."""
        scores = {'a': [3], 'b': [4], 'c': [4], 'd': [4]}
        status = single(four_players, {'mode': 'sixes'}, scores)
        assert texts(status) == ['S1: Alice/Bob 1-0']

    def test_sixes_needs_four(self, three_players):
        """Test the placeholder for a short group."""
        assert texts(single(three_players, {'mode': 'sixes'}, {})) == ['Need 4 players']

    def test_sixes_not_started(self, four_players):
        """Test the placeholder before any segment hole is played."""
        assert texts(single(four_players, {'mode': 'sixes'}, {})) == ['In progress']


class TestTrackedViews:
    """Tests for standings of annotation-tracked games."""

    def test_snake_run(self, two_players):
        """Test that the holder's run counts annotated holes since they took it."""
        extras = GameExtras(snake=[SnakeHole(('a',)), None, SnakeHole(()), SnakeHole(('b', 'a'))])
        status = single(two_players, {'mode': 'snake'}, {}, extras)
        assert texts(status) == ['Alice (3h)']
        assert status.lines[0].player_id == 'a'

    def test_snake_no_holder(self, two_players):
        """Test the placeholder before any three-putt."""
        assert texts(single(two_players, {'mode': 'snake'}, {})) == ['No holder']

    def test_snake_holder_off_roster(self, two_players):
        """Test that an unknown three-putter isn't shown as holder."""
        extras = GameExtras(snake=[SnakeHole(('zz',))])
        assert texts(single(two_players, {'mode': 'snake'}, {}, extras)) == ['No holder']

    def test_bbb_points(self, two_players):
        """Test Bingo Bango Bongo points so far."""
        extras = GameExtras(bbb=[BingoBangoBongoHole('a', 'a', 'b')])
        status = single(two_players, {'mode': 'bingoBangoBongo'}, {}, extras)
        assert texts(status) == ['Alice 2 pts', 'Bob 1 pts']

    def test_dots_count(self, two_players):
        """Test that a birdie shows as a dot."""
        status = single(two_players, {'mode': 'dots'}, {'a': [3], 'b': [4]})
        assert texts(status) == ['Alice 1 dots', 'Bob 0 dots']

    def test_ctp_on_par_threes(self, two_players):
        """Test that only par-3 winners are counted."""
        extras = GameExtras(pars=[3] * 18, ctp=[CtpHole('a')])
        status = single(two_players, {'mode': 'ctp'}, {}, extras)
        assert texts(status) == ['Alice 1 CTP']

    def test_ctp_none_yet(self, two_players):
        """Test that a winner on a par 4 is not a CTP."""
        extras = GameExtras(ctp=[CtpHole('a')])
        assert texts(single(two_players, {'mode': 'ctp'}, {}, extras)) == ['No CTP yet']


class TestRunningNet:
    """Tests for games shown through their running ledger."""

    def test_views_skip_money_games(self):
        """Test which modes fall back to the running ledger."""
        assert set(GameMode) - set(LIVE_VIEWS) == {
            GameMode.WOLF,
            GameMode.TROUBLE,
            GameMode.ARNIES,
            GameMode.BANKER,
            GameMode.HEAD_TO_HEAD,
            GameMode.ACES_DEUCES,
            GameMode.QUOTA,
        }

    def test_wolf_running_net(self, four_players):
        """Test the running Wolf ledger after one lone-wolf win."""
        extras = GameExtras(wolf=[WolfHole('a')])
        scores = {'a': [3], 'b': [4], 'c': [4], 'd': [4]}
        status = single(four_players, {'mode': 'wolf', 'config': {'betPerHole': 1}}, scores, extras)
        assert status.label == 'Wolf'
        assert texts(status) == ['Alice +3.00', 'Bob -1.00', 'Cara -1.00', 'Dan -1.00']
        assert [line.color for line in status.lines] == [
            StatusColor.GREEN,
            StatusColor.RED,
            StatusColor.RED,
            StatusColor.RED,
        ]

    def test_single_player_is_neutral(self):
        """Test that a one-player roster shows a flat ledger."""
        status = single([Player('a', 'Alice')], {'mode': 'banker'}, {'a': [4]})
        assert texts(status) == ['Alice +0.00']
        assert status.lines[0].color == StatusColor.NEUTRAL
