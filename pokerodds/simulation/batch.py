"""Monte Carlo batch runner."""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

from pokerodds.game.cards import Card, Deck
from pokerodds.game.evaluator import HandCategory, evaluate


@dataclass(frozen=True)
class BatchTally:
    """Win/tie/loss counts for one batch of trials."""
    wins: int = 0
    ties: int = 0
    losses: int = 0
    best_category: Optional[HandCategory] = None  # None until a trial has run

    @property
    def trials(self) -> int:
        return self.wins + self.ties + self.losses

    def merge(self, other: "BatchTally") -> "BatchTally":
        """Combine two tallies. Order does not matter."""
        if self.best_category is None:
            best = other.best_category
        elif other.best_category is None:
            best = self.best_category
        else:
            best = max(self.best_category, other.best_category)

        return BatchTally(
            wins=self.wins + other.wins,
            ties=self.ties + other.ties,
            losses=self.losses + other.losses,
            best_category=best,
        )


def run_batch(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    excluded_cards: Iterable[Card],
    cards_needed_for_board: int,
    num_opponents: int,
    trial_count: int,
    rng: np.random.Generator,
) -> BatchTally:
    """
    Run `trial_count` independent trials against random opponents.

    Each trial shuffles a fresh deck without the excluded cards, completes
    the board, then deals opponents two cards at a time. When the deck runs
    short, the remaining opponents sit out that trial.

    Args:
        hole_cards: Hero's two hole cards
        community_cards: Known board cards
        excluded_cards: Cards that must never be dealt
        cards_needed_for_board: Board cards to draw per trial
        num_opponents: Opponents to deal in per trial
        trial_count: Number of trials
        rng: Randomness source, owned by this batch

    Returns:
        BatchTally for this batch alone
    """
    hole = list(hole_cards)
    board = list(community_cards)
    excluded = frozenset(excluded_cards)

    wins = ties = losses = 0
    best_category: Optional[HandCategory] = None

    for _ in range(trial_count):
        deck = Deck(excluded, rng)
        full_board = board + deck.draw(cards_needed_for_board)

        hero = evaluate(hole, full_board)
        if best_category is None or hero.category > best_category:
            best_category = hero.category

        best_opponent = None
        for _ in range(num_opponents):
            if len(deck) < 2:
                break
            opponent = evaluate(deck.draw(2), full_board)
            if best_opponent is None or opponent > best_opponent:
                best_opponent = opponent

        # With nobody dealt in, hero takes the pot
        if best_opponent is None or hero > best_opponent:
            wins += 1
        elif hero == best_opponent:
            ties += 1
        else:
            losses += 1

    return BatchTally(wins=wins, ties=ties, losses=losses, best_category=best_category)
