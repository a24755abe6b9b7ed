"""
Best-hand evaluation for hold'em.

Hands are ranked by category first and then by a category-specific
tie-break sequence of rank values, compared lexicographically. Six and
seven card inputs are resolved by taking the maximum over every 5-card
subset.
"""

from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from typing import Iterable, Optional, Sequence

from .cards import Card


class HandCategory(IntEnum):
    """Hand categories from weakest to strongest."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'Full House'."""
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}


@dataclass(frozen=True, order=True)
class EvaluatedHand:
    """A hand category plus its ordered tie-break ranks."""
    category: HandCategory
    kickers: tuple[int, ...]

    def __str__(self) -> str:
        return f"{self.category.label} {list(self.kickers)}"


# 5-card index combinations out of 7 cards, C(7,5) = 21
SEVEN_CARD_COMBINATIONS: tuple[tuple[int, ...], ...] = tuple(combinations(range(7), 5))

WHEEL = frozenset({14, 5, 4, 3, 2})


def straight_high(ranks: Sequence[int]) -> Optional[int]:
    """
    Return the high card of a 5-card straight, or None.

    The wheel (A-2-3-4-5) counts as a straight with high card 5.
    """
    unique = sorted(set(ranks), reverse=True)
    if len(unique) < 5:
        return None

    for i in range(len(unique) - 4):
        if unique[i] - unique[i + 4] == 4:
            return unique[i]

    if WHEEL.issubset(unique):
        return 5
    return None


def evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    """Evaluate exactly five cards."""
    ranks = sorted((c.rank for c in cards), reverse=True)

    rank_counts: dict[int, int] = {}
    suit_counts: dict[int, int] = {}
    for card in cards:
        rank_counts[card.rank] = rank_counts.get(card.rank, 0) + 1
        suit_counts[card.suit] = suit_counts.get(card.suit, 0) + 1

    is_flush = 5 in suit_counts.values()
    high = straight_high(ranks)

    # (rank, count) ordered by count, then rank, both descending
    groups = sorted(rank_counts.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    top_rank, top_count = groups[0]

    if is_flush and high == 14:
        return EvaluatedHand(HandCategory.ROYAL_FLUSH, (14,))

    if is_flush and high is not None:
        return EvaluatedHand(HandCategory.STRAIGHT_FLUSH, (high,))

    if top_count == 4:
        return EvaluatedHand(HandCategory.FOUR_OF_A_KIND, (top_rank, groups[1][0]))

    if top_count == 3 and len(groups) > 1 and groups[1][1] >= 2:
        return EvaluatedHand(HandCategory.FULL_HOUSE, (top_rank, groups[1][0]))

    if is_flush:
        return EvaluatedHand(HandCategory.FLUSH, tuple(ranks))

    if high is not None:
        return EvaluatedHand(HandCategory.STRAIGHT, (high,))

    if top_count == 3:
        kickers = [rank for rank, _ in groups[1:3]]
        return EvaluatedHand(HandCategory.THREE_OF_A_KIND, (top_rank, *kickers))

    if top_count == 2 and groups[1][1] == 2:
        kicker = groups[2][0] if len(groups) > 2 else 0
        return EvaluatedHand(HandCategory.TWO_PAIR, (top_rank, groups[1][0], kicker))

    if top_count == 2:
        kickers = [rank for rank, _ in groups[1:4]]
        return EvaluatedHand(HandCategory.ONE_PAIR, (top_rank, *kickers))

    return EvaluatedHand(HandCategory.HIGH_CARD, tuple(ranks))


def evaluate(
    hole_cards: Iterable[Card],
    community_cards: Iterable[Card] = (),
) -> EvaluatedHand:
    """
    Evaluate the best 5-card hand from hole and community cards.

    Args:
        hole_cards: The player's hole cards
        community_cards: Board cards (0-5)

    Returns:
        Best EvaluatedHand. With fewer than 5 cards in total, a high card
        hand using every given rank as tie-break.
    """
    cards = list(hole_cards) + list(community_cards)
    count = len(cards)

    if count < 5:
        ranks = sorted((c.rank for c in cards), reverse=True)
        return EvaluatedHand(HandCategory.HIGH_CARD, tuple(ranks))

    if count == 5:
        return evaluate_five(cards)

    if count == 7:
        subsets = (
            [cards[a], cards[b], cards[c], cards[d], cards[e]]
            for a, b, c, d, e in SEVEN_CARD_COMBINATIONS
        )
    else:
        subsets = combinations(cards, 5)

    return max(evaluate_five(subset) for subset in subsets)


def compare_hands(
    hand1: Iterable[Card],
    hand2: Iterable[Card],
    board: Iterable[Card],
) -> int:
    """Return 1 if hand1 wins on the board, -1 if hand2 wins, 0 on a tie."""
    board = list(board)
    h1 = evaluate(hand1, board)
    h2 = evaluate(hand2, board)
    if h1 > h2:
        return 1
    if h2 > h1:
        return -1
    return 0
