"""
Trade Candidate Generator

Enumerates bilateral trades between the requesting team and another team.
Only trades where the requesting team receives strictly more Endzone Value
than it gives are built.

Search bounds per opposing team:
- 1v1: every eligible pair
- 2v2: index-ordered pairs, fairness >= 0.60, first 10 accepted
- 3v3: first 50 index-ordered combinations attempted, fairness >= 0.50,
  first 5 accepted
"""

import logging
import uuid
from collections.abc import Iterable, Iterator, Sequence
from itertools import combinations, islice, product

from endzone_trades.models import (
    TeamRoster,
    TradeAsset,
    TradeProposal,
    TradeSide,
    TradeType,
    ValuedPlayer,
)
from endzone_trades.services.fairness import fairness_score, fairness_tier, strategic_score

logger = logging.getLogger(__name__)

TWO_FOR_TWO_MIN_FAIRNESS = 0.60
TWO_FOR_TWO_LIMIT = 10

THREE_FOR_THREE_MIN_FAIRNESS = 0.50
THREE_FOR_THREE_MAX_ATTEMPTS = 50
THREE_FOR_THREE_LIMIT = 5


def total_value(players: Sequence[ValuedPlayer]) -> int:
    return sum(p.endzone_value for p in players)


def build_trade(
    user_team: TeamRoster,
    user_gives: Sequence[ValuedPlayer],
    other_team: TeamRoster,
    other_gives: Sequence[ValuedPlayer],
    trade_type: TradeType,
) -> TradeProposal:
    """Assemble a proposal; team A is always the requesting team."""
    value_given = total_value(user_gives)
    value_received = total_value(other_gives)
    score = fairness_score(value_given, value_received)
    net = value_received - value_given

    giving = [TradeAsset.from_player(p) for p in user_gives]
    receiving = [TradeAsset.from_player(p) for p in other_gives]

    reasoning = []
    if trade_type.is_multi_player:
        reasoning.append(f"Multi-player trade: {len(giving)}v{len(receiving)}")
    reasoning.append(f"Trade fairness: {score * 100:.1f}%")
    reasoning.append(f"Net gain: +{net} EV")

    return TradeProposal(
        trade_id=uuid.uuid4().hex,
        team_a=TradeSide(
            owner_id=user_team.owner_id,
            team_name=user_team.team_name,
            giving=giving,
            receiving=receiving,
            net_value=net,
        ),
        team_b=TradeSide(
            owner_id=other_team.owner_id,
            team_name=other_team.team_name,
            giving=receiving,
            receiving=giving,
            net_value=-net,
        ),
        fairness_score=score,
        fairness_tier=fairness_tier(score),
        trade_type=trade_type,
        reasoning=reasoning,
    )


class TradeCandidateGenerator:
    """
    Generates user-favourable trade candidates for one requesting team.

    Usage:
        generator = TradeCandidateGenerator(user_team)
        simple = generator.simple_trades(other_teams, limit=10)
        multi = generator.multi_player_trades(other_teams, limit=10)
    """

    def __init__(self, user_team: TeamRoster):
        self.user_team = user_team
        self.user_players = user_team.tradeable_players

    def _matched(
        self,
        other_team: TeamRoster,
        pairings: Iterable[tuple[Sequence[ValuedPlayer], Sequence[ValuedPlayer]]],
        trade_type: TradeType,
        min_fairness: float = 0.0,
    ) -> Iterator[TradeProposal]:
        for user_side, other_side in pairings:
            given = total_value(user_side)
            received = total_value(other_side)
            if received <= given:
                continue
            if fairness_score(given, received) < min_fairness:
                continue
            yield build_trade(self.user_team, user_side, other_team, other_side, trade_type)

    def one_for_one(self, other_team: TeamRoster) -> list[TradeProposal]:
        """Every single-player swap where the user gains value."""
        pairings = (
            ((mine,), (theirs,))
            for mine, theirs in product(self.user_players, other_team.tradeable_players)
        )
        return list(self._matched(other_team, pairings, TradeType.ONE_FOR_ONE))

    def two_for_two(self, other_team: TeamRoster) -> list[TradeProposal]:
        """First accepted 2v2 swaps in index order."""
        pairings = product(
            combinations(self.user_players, 2),
            combinations(other_team.tradeable_players, 2),
        )
        accepted = self._matched(
            other_team, pairings, TradeType.TWO_FOR_TWO, TWO_FOR_TWO_MIN_FAIRNESS
        )
        return list(islice(accepted, TWO_FOR_TWO_LIMIT))

    def three_for_three(self, other_team: TeamRoster) -> list[TradeProposal]:
        """
        First accepted 3v3 swaps in index order.

        The attempt cap counts combinations before the gain and fairness
        checks, so it can be used up entirely by rejected candidates.
        """
        pairings = islice(
            product(
                combinations(self.user_players, 3),
                combinations(other_team.tradeable_players, 3),
            ),
            THREE_FOR_THREE_MAX_ATTEMPTS,
        )
        accepted = self._matched(
            other_team, pairings, TradeType.THREE_FOR_THREE, THREE_FOR_THREE_MIN_FAIRNESS
        )
        return list(islice(accepted, THREE_FOR_THREE_LIMIT))

    def simple_trades(
        self, other_teams: Iterable[TeamRoster], limit: int
    ) -> list[TradeProposal]:
        """1v1 candidates across all other teams, best strategic score first."""
        trades: list[TradeProposal] = []
        for other in other_teams:
            found = self.one_for_one(other)
            logger.debug("%s: %d 1v1 candidates", other.team_name, len(found))
            trades.extend(found)
        return sorted(trades, key=strategic_score, reverse=True)[:limit]

    def multi_player_trades(
        self, other_teams: Iterable[TeamRoster], limit: int
    ) -> list[TradeProposal]:
        """2v2 and 3v3 candidates across all other teams, best strategic score first."""
        trades: list[TradeProposal] = []
        for other in other_teams:
            two = self.two_for_two(other)
            three = self.three_for_three(other)
            logger.debug(
                "%s: %d 2v2 / %d 3v3 candidates", other.team_name, len(two), len(three)
            )
            trades.extend(two)
            trades.extend(three)
        return sorted(trades, key=strategic_score, reverse=True)[:limit]
