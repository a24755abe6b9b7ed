"""Game representation module."""

from .cards import Card, Rank, Suit, Deck, all_cards, build_deck, parse_cards
from .evaluator import (
    HandCategory,
    EvaluatedHand,
    evaluate,
    evaluate_five,
    compare_hands,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Deck",
    "all_cards",
    "build_deck",
    "parse_cards",
    "HandCategory",
    "EvaluatedHand",
    "evaluate",
    "evaluate_five",
    "compare_hands",
]
