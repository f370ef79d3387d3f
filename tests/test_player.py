"""Tests for the player decision policy."""
from collections import Counter

import pytest

from cardsim.core.game_state import GameRules
from cardsim.core.player import ActionType, Decision, Player, select_leader_index
from cardsim.core.random_source import CryptoRandomSource


def make_player(cards, score=0, rng=None):
    player = Player("A", cards, GameRules(), rng or CryptoRandomSource())
    player.score = score
    return player


class TestPlayerSetup:

    def test_draws_initial_hand(self):
        player = make_player([3, -1, 7, -4, 2, 9, -6])
        assert player.positive_cards == [3, 7, 2]
        assert player.negative_cards == [-1, -4]
        assert player.queued_cards == [9, -6]
        assert player.card_count == 7

    def test_short_deal_draws_what_exists(self):
        player = make_player([4, -2])
        assert player.has_cards_left
        assert player.queued_cards == []

    def test_queued_cards_alone_do_not_count(self):
        player = make_player([])
        player.hand.queued.append(5)
        assert not player.has_cards_left
        assert not player.is_exhausted


class TestScoring:

    def test_award_adds(self):
        player = make_player([])
        player.award(7)
        assert player.score == 7

    def test_penalize_clamps_at_zero(self):
        player = make_player([], score=3)
        player.penalize(-5)
        assert player.score == 0

    def test_penalize_subtracts(self):
        player = make_player([], score=12)
        player.penalize(-5)
        assert player.score == 7


class TestDecisionPolicy:

    def test_skip_without_cards(self):
        decision = make_player([]).turn(0, [0, 0])
        assert decision.action == ActionType.SKIP

    def test_priority_win_beats_penalty(self):
        player = make_player([5, -3, -1, 2, 1], score=25)
        decision = player.turn(0, [25, 10, 10, 10])
        assert decision == Decision(ActionType.AWARD, points=5, target_index=0)
        assert 5 not in player.positive_cards

    def test_priority_win_uses_exact_card_not_largest(self):
        player = make_player([4, 9, -2], score=26)
        decision = player.turn(0, [26, 22, 0])
        assert decision.action == ActionType.AWARD
        assert decision.points == 4

    def test_penalizes_leader_over_threshold_with_mildest_card(self):
        player = make_player([6, -5, -1, -3])
        decision = player.turn(0, [0, 12, 21, 4])
        assert decision == Decision(ActionType.PENALIZE, points=-1, target_index=2)
        assert player.negative_cards == [-5, -3]

    def test_penalizes_leader_exactly_at_threshold(self):
        player = make_player([7, -4, 3, -2])
        decision = player.turn(0, [0, 20, 6])
        assert decision == Decision(ActionType.PENALIZE, points=-2, target_index=1)
        assert player.positive_cards == [7, 3]
        assert player.negative_cards == [-4]

    def test_awards_largest_when_leader_below_threshold(self):
        player = make_player([2, 8, -4, 5])
        decision = player.turn(1, [19, 0, 3])
        assert decision == Decision(ActionType.AWARD, points=8, target_index=1)

    def test_plays_penalty_when_only_negatives_remain(self):
        player = make_player([-2, -6])
        decision = player.turn(2, [4, 9, 0])
        assert decision == Decision(ActionType.PENALIZE, points=-2, target_index=1)

    def test_draws_one_card_after_playing(self):
        player = make_player([1, 2, 3, 4, 5, 6, 7])
        player.turn(0, [0, 0])
        assert player.positive_cards == [1, 2, 3, 4, 6]
        assert player.queued_cards == [7]
        assert player.card_count == 6

    def test_card_count_only_drops_by_played_cards(self):
        player = make_player([3, -1, 4, -1, 5, -9, 2, 6, -5, 3])
        played = 0
        while player.has_cards_left:
            player.turn(0, [player.score, 25])
            played += 1
            assert player.card_count == 10 - played
        assert player.is_exhausted


class TestLeaderSelection:

    def test_single_leader(self):
        assert select_leader_index(0, [30, 5, 12, 7], CryptoRandomSource()) == 2

    def test_self_is_excluded(self):
        assert select_leader_index(1, [3, 40, 8], CryptoRandomSource()) == 2

    def test_requires_an_opponent(self):
        with pytest.raises(ValueError):
            select_leader_index(0, [5], CryptoRandomSource())

    def test_ties_split_uniformly(self):
        rng = CryptoRandomSource()
        trials = 4000
        picks = Counter(select_leader_index(0, [0, 20, 20, 5], rng) for _ in range(trials))
        assert set(picks) == {1, 2}
        # Generous bounds: roughly 6 standard deviations either side of 50%
        assert 0.45 < picks[1] / trials < 0.55

    def test_tie_break_reaches_turn(self):
        targets = Counter()
        for _ in range(400):
            player = make_player([-1])
            targets[player.turn(0, [0, 20, 20, 5]).target_index] += 1
        assert set(targets) == {1, 2}
