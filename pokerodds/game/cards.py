"""Card and deck representation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Union

import numpy as np


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "s", 1: "h", 2: "d", 3: "c"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}


@dataclass(frozen=True, order=True)
class Card:
    """A playing card, ordered by rank then suit."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '10h', '2c'."""
        s = s.strip()
        if s.startswith("10"):
            s = "T" + s[2:]
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=STR_RANK[rank_char], suit=STR_SUIT[suit_char])


# The 52-card universe in a fixed order, so a seeded shuffle is reproducible
DECK_ORDER: tuple[Card, ...] = tuple(
    Card(int(rank), int(suit))
    for suit in Suit
    for rank in Rank
)
_UNIVERSE = frozenset(DECK_ORDER)


def all_cards() -> frozenset[Card]:
    """Return the full 52-card universe."""
    return _UNIVERSE


def parse_cards(cards: Union[str, Iterable[Union[str, Card]]]) -> list[Card]:
    """
    Parse cards from notation or pass through Card instances.

    Accepts 'AsKh', 'As Kh', 'As,Kh' or an iterable mixing strings and Cards.
    """
    if isinstance(cards, str):
        text = cards.replace(",", " ").replace("10", "T")
        tokens = []
        for chunk in text.split():
            if len(chunk) % 2:
                raise ValueError(f"Invalid card string: {chunk}")
            tokens.extend(chunk[i:i + 2] for i in range(0, len(chunk), 2))
        return [Card.from_string(t) for t in tokens]

    return [c if isinstance(c, Card) else Card.from_string(c) for c in cards]


class Deck:
    """
    The undealt remainder of a 52-card deck.

    Built from the universe minus already-known cards. Cards are drawn from
    the back of the current order and never more than once.
    """

    def __init__(
        self,
        excluding: Iterable[Card] = (),
        rng: Optional[np.random.Generator] = None,
    ):
        dead = set(excluding)
        self.cards: list[Card] = [c for c in DECK_ORDER if c not in dead]
        if rng is not None:
            self.shuffle(rng)

    def shuffle(self, rng: Optional[np.random.Generator] = None) -> None:
        """Shuffle the remaining cards with the given generator."""
        if rng is None:
            rng = np.random.default_rng()
        order = rng.permutation(len(self.cards))
        self.cards = [self.cards[i] for i in order]

    def draw(self, n: int = 1) -> list[Card]:
        """Remove and return n cards from the back of the deck."""
        if n > len(self.cards):
            raise ValueError(f"Cannot draw {n} cards, only {len(self.cards)} remaining")
        if n <= 0:
            return []
        drawn = self.cards[-n:]
        del self.cards[-n:]
        drawn.reverse()
        return drawn

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: Card) -> bool:
        return card in self.cards


def build_deck(
    excluding: Iterable[Card] = (),
    rng: Optional[np.random.Generator] = None,
) -> Deck:
    """Return a shuffled deck of every card not in `excluding`."""
    return Deck(excluding, rng if rng is not None else np.random.default_rng())
