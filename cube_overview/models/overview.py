"""Overview and deck data models."""

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class Deck:
    """An archetype shown in the overview, illustrated by a few cards."""

    title: str
    mana: list[str]  # e.g., ["u", "b"]
    stars: int
    cards: list[str] = field(default_factory=list)

    def __post_init__(self):
        # Accept "ub" as shorthand for ["u", "b"]
        if isinstance(self.mana, str):
            self.mana = list(self.mana)

    @classmethod
    def from_dict(cls, data: dict) -> "Deck":
        """Build a deck from a parsed definition entry."""
        mana = data.get("mana") or []
        cards = data.get("cards") or []

        if not isinstance(cards, list):
            raise TypeError("'cards' must be a list")

        return cls(
            title=str(data["title"]),
            mana=list(mana),
            stars=int(data.get("stars", 0)),
            cards=[str(c) for c in cards],
        )


@dataclass
class Overview:
    """A cube description followed by its archetype decks."""

    title: str
    description: str
    decks: list[Deck] = field(default_factory=list)

    @property
    def all_cards(self) -> list[str]:
        """Every card used as an image, in deck order."""
        return [card for deck in self.decks for card in deck.cards]

    def repeated_cards(self) -> dict[str, int]:
        """Cards used in more than one place, with their use counts."""
        counts = Counter(self.all_cards)
        return {card: count for card, count in sorted(counts.items()) if count > 1}
