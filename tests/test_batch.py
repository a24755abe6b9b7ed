"""Tests for the Monte Carlo batch runner."""

import numpy as np

from pokerodds.game.cards import DECK_ORDER
from pokerodds.game.evaluator import HandCategory
from pokerodds.simulation.batch import BatchTally, run_batch


def _run(cards, hole, board, num_opponents=1, trials=200, seed=0, excluded=None):
    hole = cards(hole)
    board = cards(board)
    if excluded is None:
        excluded = hole + board
    return run_batch(
        hole,
        board,
        excluded,
        5 - len(board),
        num_opponents,
        trials,
        np.random.default_rng(seed),
    )


class TestRunBatch:
    def test_counts_add_up(self, cards):
        tally = _run(cards, "AsKh", "", num_opponents=3, trials=300)
        assert tally.trials == 300

    def test_royal_on_board_always_ties(self, cards):
        tally = _run(cards, "2c3d", "AsKsQsJsTs", num_opponents=4)
        assert tally.ties == 200
        assert tally.wins == tally.losses == 0
        assert tally.best_category == HandCategory.ROYAL_FLUSH

    def test_nuts_never_lose(self, cards):
        # Quad aces with the case ace on board cannot be beaten or tied
        tally = _run(cards, "AsAh", "AdAc7h2s9d", num_opponents=2)
        assert tally.wins == 200
        assert tally.best_category == HandCategory.FOUR_OF_A_KIND

    def test_best_category_tracks_maximum(self, cards):
        tally = _run(cards, "7h7d", "7s2c9h", trials=300)
        assert tally.best_category >= HandCategory.THREE_OF_A_KIND

    def test_same_seed_same_tally(self, cards):
        first = _run(cards, "JhTh", "9h8c2d", num_opponents=2, seed=42)
        second = _run(cards, "JhTh", "9h8c2d", num_opponents=2, seed=42)
        assert first == second

    def test_short_deck_deals_one_opponent(self, cards):
        hole = cards("2c3d")
        board = cards("AsKsQh9h5c")
        # Any two of these beat hero's ace high, so every trial is a loss
        # exactly when one opponent is dealt and the other eight sit out
        remaining = cards("KdKhQd")
        excluded = [c for c in DECK_ORDER if c not in remaining]

        tally = run_batch(hole, board, excluded, 0, 9, 50, np.random.default_rng(5))
        assert tally.losses == 50
        assert tally.wins == tally.ties == 0
        assert tally.best_category == HandCategory.HIGH_CARD

    def test_no_opponent_dealt_counts_as_win(self, cards):
        hole = cards("2c7d")
        board = cards("AsKsQsJs9h")
        remaining = [c for c in DECK_ORDER if c not in hole + board][:1]
        excluded = [c for c in DECK_ORDER if c not in remaining]

        tally = run_batch(hole, board, excluded, 0, 3, 20, np.random.default_rng(5))
        assert tally.wins == 20

    def test_zero_trials(self, cards):
        tally = _run(cards, "AsKh", "", trials=0)
        assert tally == BatchTally()
        assert tally.best_category is None


class TestBatchTally:
    def test_merge_sums_counts(self):
        a = BatchTally(3, 1, 2, HandCategory.ONE_PAIR)
        b = BatchTally(4, 0, 5, HandCategory.FLUSH)
        merged = a.merge(b)
        assert (merged.wins, merged.ties, merged.losses) == (7, 1, 7)
        assert merged.best_category == HandCategory.FLUSH

    def test_merge_commutes(self):
        a = BatchTally(3, 1, 2, HandCategory.STRAIGHT)
        b = BatchTally(4, 0, 5, HandCategory.TWO_PAIR)
        assert a.merge(b) == b.merge(a)

    def test_empty_is_identity(self):
        a = BatchTally(1, 2, 3, HandCategory.HIGH_CARD)
        assert BatchTally().merge(a) == a
        assert a.merge(BatchTally()) == a
