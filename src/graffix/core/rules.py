"""Letter rule tables: asset catalog, alternates, rotation and overlap rules.

All lookups in this module are pure. The tables describe the built-in
letter set; a catalog discovered from an asset directory can replace the
built-in asset tables.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

ALTERNATE_RUN_LETTERS = frozenset({"m", "e"})

_ASSET_NAME_RE = re.compile(r"^(?P<char>[a-z])(?P<variant>[12])(?:-(?P<position>first|last))?\.svg$")


@dataclass(frozen=True)
class AssetCatalog:
    """Maps characters to asset file names for each variant.

    Attributes:
        standard: Standard asset per character
        alternate: Alternate ("char2") asset per character
        first: Asset used for the first letter of a styled word
        last: Asset used for the last letter of a styled word
    """

    standard: Mapping[str, str]
    alternate: Mapping[str, str] = field(default_factory=dict)
    first: Mapping[str, str] = field(default_factory=dict)
    last: Mapping[str, str] = field(default_factory=dict)

    def has_alternate(self, char: str) -> bool:
        return char in self.alternate

    def characters(self) -> list[str]:
        return sorted(self.standard)

    @classmethod
    def from_directory(cls, directory: Path) -> "AssetCatalog":
        """Discover a catalog from asset file names.

        Files follow the naming convention ``a1.svg`` (standard),
        ``a2.svg`` (alternate), ``a1-first.svg`` and ``a1-last.svg``.
        Other files are ignored.

        Args:
            directory: Directory containing the SVG assets

        Returns:
            Catalog of the assets found
        """
        standard: dict[str, str] = {}
        alternate: dict[str, str] = {}
        first: dict[str, str] = {}
        last: dict[str, str] = {}

        for path in sorted(directory.glob("*.svg")):
            match = _ASSET_NAME_RE.match(path.name)
            if match is None:
                continue
            char = match["char"]
            position = match["position"]
            if position == "first":
                first[char] = path.name
            elif position == "last":
                last[char] = path.name
            elif match["variant"] == "2":
                alternate[char] = path.name
            else:
                standard[char] = path.name

        return cls(standard=standard, alternate=alternate, first=first, last=last)


def _standard_assets() -> dict[str, str]:
    return {c: f"{c}1.svg" for c in "abcdefghijklmnopqrstuvwxyz"}


DEFAULT_CATALOG = AssetCatalog(
    standard=MappingProxyType(_standard_assets()),
    alternate=MappingProxyType({c: f"{c}2.svg" for c in "elmo"}),
    first=MappingProxyType({c: f"{c}1-first.svg" for c in "abcdjopy"}),
    last=MappingProxyType({c: f"{c}1-last.svg" for c in "ciklotxy"}),
)


@dataclass(frozen=True)
class OverlapRule:
    """Overlap fractions allowed after a given letter.

    Attributes:
        min_overlap: Tightest fraction of the previous glyph's ink width
        max_overlap: Loosest fraction, where the search starts
        special_cases: Max overlap override per following letter
    """

    min_overlap: float
    max_overlap: float
    special_cases: Mapping[str, float] = field(default_factory=dict)


DEFAULT_OVERLAP = OverlapRule(min_overlap=0.1, max_overlap=0.25)

LETTER_OVERLAP_RULES: Mapping[str, OverlapRule] = MappingProxyType(
    {
        "a": OverlapRule(0.1, 0.3, {"b": 0.2, "l": 0.2}),
        "c": OverlapRule(0.12, 0.3, {"o": 0.35}),
        "e": OverlapRule(0.1, 0.3),
        "f": OverlapRule(0.15, 0.35, {"f": 0.25}),
        "i": OverlapRule(0.05, 0.15),
        "j": OverlapRule(0.05, 0.15),
        "l": OverlapRule(0.05, 0.18, {"l": 0.12}),
        "m": OverlapRule(0.08, 0.22),
        "o": OverlapRule(0.12, 0.3, {"o": 0.35}),
        "r": OverlapRule(0.15, 0.35),
        "t": OverlapRule(0.15, 0.35, {"t": 0.25}),
        "v": OverlapRule(0.12, 0.3),
        "w": OverlapRule(0.1, 0.25),
        "y": OverlapRule(0.12, 0.3),
    }
)

# Pairs that need a looser fit than their rule suggests
OVERLAP_EXCEPTIONS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "b": frozenset({"b", "d", "h", "k", "l"}),
        "d": frozenset({"b", "d", "h", "k", "l"}),
        "h": frozenset({"b", "d", "h", "k", "l"}),
        "k": frozenset({"o", "e", "a"}),
        "l": frozenset({"b", "d", "h", "k", "l", "t"}),
        "t": frozenset({"h", "l"}),
    }
)

LETTER_ROTATION_RULES: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "a": {"y": -4},
        "b": {"o": -3},
        "c": {"o": 3},
        "l": {"l": 5, "o": -3},
        "o": {"o": -5, "y": 4},
        "r": {"a": 3},
        "t": {"t": -4},
        "v": {"e": -3},
        "y": {"o": 4},
    }
)


def get_overlap_rule(prev_char: str) -> OverlapRule:
    """Get the overlap rule applying after prev_char."""
    return LETTER_OVERLAP_RULES.get(prev_char.lower(), DEFAULT_OVERLAP)


def is_overlap_exception(prev_char: str, char: str) -> bool:
    return char.lower() in OVERLAP_EXCEPTIONS.get(prev_char.lower(), frozenset())


def should_use_alternate(
    char: str,
    index: int,
    sequence: Sequence[str],
    catalog: AssetCatalog = DEFAULT_CATALOG,
) -> bool:
    """Decide whether the character at index uses its alternate asset.

    An 'o' following another 'o' alternates. An 'm' or 'e' alternates at
    every even position (2nd, 4th, ...) of its run of identical letters.
    No other letter alternates, and only letters with an alternate asset
    in the catalog qualify.

    Args:
        char: Character at index
        index: Position in sequence
        sequence: Whole character sequence
        catalog: Catalog used to check that an alternate exists

    Returns:
        True if the alternate asset should be used
    """
    if not catalog.has_alternate(char):
        return False

    if index == 0 or sequence[index - 1] != char:
        return False

    if char == "o":
        return True

    if char in ALTERNATE_RUN_LETTERS:
        run_length = 1
        for i in range(index - 1, -1, -1):
            if sequence[i] != char:
                break
            run_length += 1
        return run_length % 2 == 0

    return False


def get_rotation(char: str, prev_char: str | None) -> float:
    """Look up the rotation of char when it follows prev_char.

    Returns:
        Rotation in degrees, 0 when there is no rule or no previous letter
    """
    if not prev_char:
        return 0
    rules = LETTER_ROTATION_RULES.get(prev_char.lower())
    if not rules:
        return 0
    return rules.get(char.lower(), 0)
