"""Shared scoring primitives used by every game calculator."""

import math
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .constants import HOLE_HANDICAP_STROKES, HOLES
from .models import GameMode, GameResult, Payout, Player, pad_holes

Scores = Mapping[str, Sequence[Optional[int]]]


def round_money(value: float) -> float:
    """Round a payment to cents, half away from zero."""
    cents = math.floor(abs(value) * 100 + 0.5)
    return math.copysign(cents / 100, value) if cents else 0.0


def init_net(players: Iterable[Player]) -> Dict[str, float]:
    """Zero ledger keyed by player name."""
    return {p.name: 0.0 for p in players}


def card_for(scores: Scores, player_id: str) -> List[Optional[int]]:
    """A player's 18-hole card; unknown players get an empty card."""
    return pad_holes(scores.get(player_id))


def sum_scores(card: Sequence[Optional[int]], start: int, end: int) -> Optional[int]:
    """Sum holes start..end-1, or None if any hole in the range is missing."""
    total = 0
    for hole in range(start, end):
        score = card[hole] if hole < len(card) else None
        if score is None:
            return None
        total += score
    return total


def hole_scores(
    players: Sequence[Player], scores: Scores, hole: int
) -> List[tuple[Player, int]]:
    """(player, score) pairs for everyone with a score on this hole."""
    pairs = []
    for player in players:
        score = card_for(scores, player.id)[hole]
        if score is not None:
            pairs.append((player, score))
    return pairs


def sole_low(pairs: Sequence[tuple[Player, int]]) -> Optional[Player]:
    """The single player holding the lowest score, or None on a tie."""
    if not pairs:
        return None
    low = min(score for _, score in pairs)
    leaders = [player for player, score in pairs if score == low]
    return leaders[0] if len(leaders) == 1 else None


# Handicaps


def handicap_allowances(players: Iterable[Player]) -> Dict[str, int]:
    """Strokes each player receives relative to the lowest handicap in the group."""
    players = list(players)
    if not players:
        return {}
    low = min(p.tax_man for p in players)
    return {p.id: p.tax_man - low for p in players}


def strokes_received(allowance: int, hole: int) -> int:
    """One stroke on a hole iff the allowance reaches that hole's difficulty rank."""
    return 1 if allowance >= HOLE_HANDICAP_STROKES[hole] else 0


def net_score(gross: int, allowance: int, hole: int) -> int:
    return gross - strokes_received(allowance, hole)


def adjusted_score(
    gross: int, player_id: str, hole: int, allowances: Optional[Mapping[str, int]]
) -> int:
    """Net score when allowances are in play, gross otherwise."""
    if not allowances:
        return gross
    return net_score(gross, allowances.get(player_id, 0), hole)


def stableford_points(score: int, par: int) -> int:
    """
    Stableford points for one hole.

    Scoring:
        - Albatross or better: 5
        - Eagle: 4
        - Birdie: 3
        - Par: 2
        - Bogey: 1
        - Double bogey or worse: 0
    """
    diff = score - par
    if diff <= -3:
        return 5
    if diff == -2:
        return 4
    if diff == -1:
        return 3
    if diff == 0:
        return 2
    if diff == 1:
        return 1
    return 0


def stableford_total(card: Sequence[Optional[int]], pars: Sequence[int]) -> int:
    """Stableford points over every entered hole."""
    return sum(
        stableford_points(score, pars[hole])
        for hole, score in enumerate(card[:HOLES])
        if score is not None
    )


class Settlement:
    """
    Accumulates payout lines and the matching net ledger for one game.

    Every payment is recorded once in payouts and applied symmetrically to
    the ledger, so the ledger always sums to zero.
    """

    def __init__(self, players: Iterable[Player], game: str):
        self.game = game
        self.payouts: List[Payout] = []
        self.net = init_net(players)

    def pay(self, payer: Player, payee: Player, amount: float, game: Optional[str] = None) -> None:
        """Record payer owing payee amount (already rounded by the caller)."""
        if amount <= 0 or payer.id == payee.id:
            return
        self.payouts.append(Payout(payer.name, payee.name, amount, game or self.game))
        self.net[payer.name] = self.net.get(payer.name, 0.0) - amount
        self.net[payee.name] = self.net.get(payee.name, 0.0) + amount

    def collect_from_each(
        self, winner: Player, others: Iterable[Player], amount: float, game: Optional[str] = None
    ) -> None:
        for other in others:
            self.pay(other, winner, amount, game)

    def pay_each(
        self, loser: Player, others: Iterable[Player], amount: float, game: Optional[str] = None
    ) -> None:
        for other in others:
            self.pay(loser, other, amount, game)

    def settle_teams(
        self, winners: Sequence[Player], losers: Sequence[Player], share: float
    ) -> None:
        """Each loser pays each winner the share."""
        for winner in winners:
            for loser in losers:
                self.pay(loser, winner, share)

    def absorb(self, other: 'Settlement') -> None:
        """Fold another settlement's lines (e.g. presses) into this one."""
        self.payouts.extend(other.payouts)
        for name, amount in other.net.items():
            self.net[name] = self.net.get(name, 0.0) + amount

    def result(self, mode: GameMode, label: str) -> GameResult:
        net = {name: round(amount, 2) + 0.0 for name, amount in self.net.items()}
        return GameResult(mode=mode, label=label, payouts=list(self.payouts), net=net)
