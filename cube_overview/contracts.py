"""Interface contracts for module integration and validation.

Contracts define the methods each stage of the overview pipeline must
provide, so fakes and real implementations can be checked against them.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, runtime_checkable


# ============================================================================
# Protocol Definitions (Duck Typing Interfaces)
# ============================================================================


@runtime_checkable
class FetcherProtocol(Protocol):
    """Protocol for URL fetchers."""

    def fetch(self, url: str, validate: Optional[Callable[[str], object]] = None) -> str:
        """Return the response body for a URL, checking fresh bodies with validate."""
        ...


@runtime_checkable
class CatalogProtocol(Protocol):
    """Protocol for cube card list clients."""

    def card_by_name(self, name: str) -> dict:
        """Return the cube row for a card, with a digits-only collector number."""
        ...


@runtime_checkable
class CardSearchProtocol(Protocol):
    """Protocol for card search clients."""

    def find_card_by(self, query: str) -> dict:
        """Return the single card matching a search query."""
        ...


@runtime_checkable
class RendererProtocol(Protocol):
    """Protocol for deck and overview renderers."""

    def render(self, item: object) -> str:
        """Render an item to Markdown."""
        ...


# ============================================================================
# Contract Dataclasses (For Testing & Validation)
# ============================================================================


@dataclass
class Contract:
    """Contract specification: a set of required callable methods."""

    required_methods: list[str] = field(default_factory=list)

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = []

        for method in self.required_methods:
            if not hasattr(instance, method):
                errors.append(f"Missing required method: {method}")
            elif not callable(getattr(instance, method)):
                errors.append(f"Method {method} is not callable")

        return len(errors) == 0, errors


@dataclass
class SearchContract(Contract):
    """Contract specification for card search clients."""

    required_methods: list[str] = field(
        default_factory=lambda: ["find_card_by"]
    )
    required_fields: list[str] = field(default_factory=lambda: ["id"])

    def validate_output(self, card: dict) -> tuple[bool, str]:
        """Validate that a search result carries the fields we embed."""
        for name in self.required_fields:
            if name not in card:
                return False, f"Search result missing field: {name}"
        return True, ""


@dataclass
class CatalogContract(Contract):
    """Contract specification for cube card list clients."""

    required_methods: list[str] = field(
        default_factory=lambda: ["card_by_name"]
    )
    required_fields: list[str] = field(
        default_factory=lambda: ["name", "Set", "Collector Number"]
    )

    def validate_output(self, card: dict) -> tuple[bool, str]:
        """Validate a catalog row."""
        for name in self.required_fields:
            if name not in card:
                return False, f"Catalog row missing field: {name}"
        if not card["Collector Number"].isdigit():
            return False, f"Collector number not normalized: {card['Collector Number']!r}"
        return True, ""


# ============================================================================
# Contract Registry
# ============================================================================


CONTRACTS = {
    "fetcher": Contract(required_methods=["fetch"]),
    "catalog": CatalogContract(),
    "search": SearchContract(),
    "renderer": Contract(required_methods=["render"]),
}


def validate_all_contracts(modules: dict[str, object]) -> dict[str, tuple[bool, list[str]]]:
    """
    Validate all modules against their contracts.

    Args:
        modules: Dict mapping contract name to module instance

    Returns:
        Dict mapping contract name to (is_valid, errors) tuple
    """
    results = {}

    for name, instance in modules.items():
        if name in CONTRACTS:
            contract = CONTRACTS[name]
            is_valid, errors = contract.validate(instance)
            results[name] = (is_valid, errors)
        else:
            results[name] = (False, [f"Unknown contract: {name}"])

    return results
