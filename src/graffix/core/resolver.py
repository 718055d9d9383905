"""Glyph asset resolution.

Maps a character and its position context to the asset used to draw it.
"""

from dataclasses import dataclass

from graffix.config.settings import STRAIGHT_MODE
from graffix.core.rules import DEFAULT_CATALOG, AssetCatalog
from graffix.exceptions import AssetNotFoundError


@dataclass(frozen=True)
class ResolvedAsset:
    """An asset chosen for a character.

    Attributes:
        character: The input character
        path: Asset file name relative to the asset directory
        variant: One of "standard", "alternate", "first", "last"
    """

    character: str
    path: str
    variant: str

    @property
    def key(self) -> str:
        """Cache key: character plus variant."""
        return f"{self.character}:{self.variant}"


class AssetResolver:
    """Chooses the asset for a character.

    Precedence, highest first:
    1. First-position asset, for the first letter outside straight mode
    2. Last-position asset, for the last letter outside straight mode
    3. Alternate asset, when requested
    4. Standard asset
    """

    def __init__(self, catalog: AssetCatalog = DEFAULT_CATALOG) -> None:
        self.catalog = catalog

    def resolve(
        self,
        character: str,
        is_first: bool = False,
        is_last: bool = False,
        is_alternate: bool = False,
        mode: str = STRAIGHT_MODE,
    ) -> ResolvedAsset:
        """Resolve the asset for a character.

        Args:
            character: Character to draw
            is_first: Character is first in the text
            is_last: Character is last in the text
            is_alternate: Alternate variant requested by the rule engine
            mode: Style mode id

        Returns:
            The resolved asset

        Raises:
            AssetNotFoundError: If no standard asset exists for the character
        """
        styled = mode != STRAIGHT_MODE

        if styled and is_first and character in self.catalog.first:
            return ResolvedAsset(character, self.catalog.first[character], "first")

        if styled and is_last and character in self.catalog.last:
            return ResolvedAsset(character, self.catalog.last[character], "last")

        if is_alternate and character in self.catalog.alternate:
            return ResolvedAsset(character, self.catalog.alternate[character], "alternate")

        if character in self.catalog.standard:
            return ResolvedAsset(character, self.catalog.standard[character], "standard")

        raise AssetNotFoundError(character)
