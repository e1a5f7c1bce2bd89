"""Deterministic parsing of free-text ingredient lines."""

import re
from collections.abc import Iterable

from cookbook.models.ingredient_catalog import CatalogIngredient

_QUANTITY = re.compile(
    r"^(?:(?:\d+(?:[.,/]\d+)?|[½⅓⅔¼¾⅛])(?:\s*[-–]\s*(?:\d+(?:[.,/]\d+)?))?\s*)+"
)
_UNIT = re.compile(
    r"^(?:cups?|c|tbsps?|tablespoons?|tsps?|teaspoons?|g|grams?|kg|mg|ml|l|liters?|litres?|"
    r"oz|ounces?|lbs?|pounds?|pinch(?:es)?|dash(?:es)?|cloves?|cans?|slices?|sticks?|"
    r"handfuls?|bunch(?:es)?|pieces?)\.?\s+(?:of\s+)?",
    re.I,
)
_PARENTHETICAL = re.compile(r"\([^)]*\)")


class IngredientLineParser:
    """Match and split ingredient lines using deterministic rules."""

    @staticmethod
    def find_catalog_match(
        line: str, entries: Iterable[CatalogIngredient]
    ) -> CatalogIngredient | None:
        """Find the catalog entry whose name appears in the line.

        Only whole words count, optionally with an "s" or "es" plural; the
        longest matching name wins.

        Examples:
        - "2 cups brown sugar" with ["sugar", "brown sugar"] -> "brown sugar"
        - "3 eggs" with ["egg"] -> "egg"
        - "2 cups rice" with ["ice"] -> None
        """
        text_lower = line.lower()
        candidates = sorted(entries, key=lambda e: len(e.normalized_name), reverse=True)

        for entry in candidates:
            if re.search(rf"\b{re.escape(entry.normalized_name)}(?:e?s)?\b", text_lower):
                return entry

        return None

    @staticmethod
    def guess_name(line: str) -> str | None:
        """Extract an ingredient name from a free-text line.

        Rules:
        - Drop preparation notes after the first comma and anything in parentheses
        - Strip a leading quantity ("2", "1/2", "1-2", "½")
        - Strip a leading unit word ("cups", "tbsp", "g", optionally followed by "of")
        """
        text = _PARENTHETICAL.sub(" ", line.split(",", 1)[0])
        text = _QUANTITY.sub("", text.strip())
        text = _UNIT.sub("", text)
        text = " ".join(text.split())
        return text or None
