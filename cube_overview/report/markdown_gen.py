"""Markdown rendering of cube overviews."""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from cube_overview.contracts import CardSearchProtocol, CatalogProtocol, RendererProtocol
from cube_overview.data.scryfall import build_search_query
from cube_overview.errors import RepeatedCardError
from cube_overview.models.overview import Deck, Overview

logger = logging.getLogger(__name__)

HORIZONTAL_RULE = "-" * 30
STAR = "⭐"

DECK_TEMPLATE = (
    "### {{ mana | mana_symbols }} {{ title }} {{ stars | star_rating }}\n"
    "<<{{ images | join }}>>"
)

# Default template if file not found
DEFAULT_OVERVIEW_TEMPLATE = (
    "## {{ title }}\n"
    "\n"
    "{{ rule }}\n"
    "\n"
    "{{ description }}\n"
    "\n"
    "## Archetypes and inspiration\n"
    "\n"
    "{{ rule }}"
    "{% for block in deck_blocks %}\n\n{{ block }}{% endfor %}"
)


def mana_symbols(mana: list[str]) -> str:
    """Wrap each colour code in braces, e.g. ["w", "u"] → "{w}{u}"."""
    return "".join(f"{{{m}}}" for m in mana)


def star_rating(stars: int) -> str:
    return STAR * stars


def image_embed(card_name: str, card_id: str) -> str:
    """Image link for a card printing, e.g. "[[!Counterspell|<id>]]"."""
    return f"[[!{card_name}|{card_id}]]"


def _create_environment(template_dir: Path) -> Environment:
    # No autoescape: the output is Markdown
    if template_dir.exists():
        env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,
        )
    else:
        env = Environment(autoescape=False)

    env.filters["mana_symbols"] = mana_symbols
    env.filters["star_rating"] = star_rating
    return env


class DeckRenderer:
    """Renders one deck as a heading followed by its card images."""

    def __init__(
        self,
        cube_cobra: CatalogProtocol,
        scryfall: CardSearchProtocol,
        env: Optional[Environment] = None,
    ):
        """
        Initialize deck renderer.

        Args:
            cube_cobra: Client for the cube's card list
            scryfall: Client for card search
            env: Optional Jinja2 environment with the deck filters installed
        """
        self.cube_cobra = cube_cobra
        self.scryfall = scryfall
        self.env = env or _create_environment(Path("templates"))
        self.template = self.env.from_string(DECK_TEMPLATE)

    def card_image(self, card_name: str) -> str:
        """
        Resolve a card to the exact printing in the cube and embed its image.

        Raises:
            CardNotFoundError: If the card is not in the cube or not on Scryfall
            TooManyCardsError: If the printing is ambiguous on Scryfall
        """
        cube_card = self.cube_cobra.card_by_name(card_name)

        query = build_search_query(
            card_name,
            cube_card["Set"],
            cube_card["Collector Number"],
        )
        scryfall_card = self.scryfall.find_card_by(query)

        return image_embed(card_name, scryfall_card["id"])

    def render(self, deck: Deck) -> str:
        """Render a deck block. Any failed lookup aborts the whole deck."""
        images = [self.card_image(card_name) for card_name in deck.cards]

        logger.debug(f"Rendered deck {deck.title!r} with {len(images)} images")

        return self.template.render(
            mana=deck.mana,
            title=deck.title,
            stars=deck.stars,
            images=images,
        )


class OverviewRenderer:
    """Renders a full cube overview document."""

    def __init__(
        self,
        deck_renderer: RendererProtocol,
        template_dir: str = "templates",
        template_name: str = "overview.md.j2",
    ):
        """
        Initialize overview renderer.

        Args:
            deck_renderer: Renderer used for each deck block
            template_dir: Directory containing Jinja2 templates
            template_name: Name of template file
        """
        self.deck_renderer = deck_renderer
        self.template_dir = Path(template_dir)
        self.template_name = template_name
        self.env = _create_environment(self.template_dir)

    def _get_template(self) -> str:
        """Get template content."""
        template_path = self.template_dir / self.template_name

        if template_path.exists():
            return template_path.read_text(encoding="utf-8")
        else:
            logger.debug(
                f"Template not found at {template_path}, using default"
            )
            return DEFAULT_OVERVIEW_TEMPLATE

    def validate(self, overview: Overview) -> None:
        """
        Check that no card illustrates more than one deck.

        Raises:
            RepeatedCardError: For the first repeated card (alphabetically)
        """
        repeated = overview.repeated_cards()

        if repeated:
            card, count = next(iter(repeated.items()))
            logger.error(f"Repeated cards: {repeated}")
            raise RepeatedCardError(card, count)

    def render(self, overview: Overview) -> str:
        """
        Render the overview document.

        Args:
            overview: Overview to render

        Returns:
            Markdown string
        """
        self.validate(overview)

        deck_blocks = [self.deck_renderer.render(deck) for deck in overview.decks]

        template = self.env.from_string(self._get_template())

        return template.render(
            title=overview.title,
            description=overview.description,
            rule=HORIZONTAL_RULE,
            deck_blocks=deck_blocks,
        )

    def save(self, overview: Overview, output_path: str) -> str:
        """
        Render the overview and save it to a file.

        Returns:
            Path to saved file
        """
        content = self.render(overview)

        filepath = Path(output_path)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)

        logger.info(f"Overview saved to {filepath}")

        return str(filepath)
