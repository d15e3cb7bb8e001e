"""Resolve report labels to registered delivery types.

Matchers are tried in order and the first one returning a type wins:
exact name, substring in either direction, then carrier nicknames.
"""
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..domain.delivery_type import DeliveryType
from ..domain.report import MatchedReportLine, ParsedReportLine

Matcher = Callable[[str, Sequence[DeliveryType]], Optional[DeliveryType]]

# keyword contained in a type name -> nicknames drivers type for it
KEYWORD_ALIASES: dict[str, tuple[str, ...]] = {
    "ヤマト": ("yamato", "やまと", "ヤマト"),
    "佐川": ("sagawa", "さがわ", "佐川"),
    "ネコポス": ("nekopos", "ねこぽす", "ネコポス"),
    "宅急便": ("takkyubin", "たっきゅうびん"),
}


def match_exact(label: str, types: Sequence[DeliveryType]) -> Optional[DeliveryType]:
    key = label.casefold()
    return next((t for t in types if t.name.casefold() == key), None)


def match_substring(label: str, types: Sequence[DeliveryType]) -> Optional[DeliveryType]:
    key = label.casefold()
    for t in types:
        name = t.name.casefold()
        # an empty name would be a substring of every label
        if name and (key in name or name in key):
            return t
    return None


def match_keyword_alias(label: str, types: Sequence[DeliveryType]) -> Optional[DeliveryType]:
    key = label.casefold()
    for keyword, aliases in KEYWORD_ALIASES.items():
        if any(alias.casefold() in key for alias in aliases):
            found = next((t for t in types if keyword in t.name), None)
            if found:
                return found
    return None


MATCHERS: Tuple[Matcher, ...] = (match_exact, match_substring, match_keyword_alias)


def find_delivery_type(
    label: str,
    types: Sequence[DeliveryType],
    matchers: Sequence[Matcher] = MATCHERS,
) -> Optional[DeliveryType]:
    for matcher in matchers:
        found = matcher(label, types)
        if found is not None:
            return found
    return None


def match_report_lines(
    lines: Iterable[ParsedReportLine],
    types: Sequence[DeliveryType],
) -> tuple[list[MatchedReportLine], list[str]]:
    """Return matched entries and the labels that resolved to nothing."""
    matched: list[MatchedReportLine] = []
    unmatched: list[str] = []
    for line in lines:
        t = find_delivery_type(line.raw_type_name, types)
        if t is None:
            unmatched.append(line.raw_type_name)
            continue
        matched.append(
            MatchedReportLine(
                delivery_type_id=t.id,
                delivery_type_name=t.name,
                quantity=line.quantity,
                unit_price=t.unit_price,
                amount=t.unit_price * line.quantity,
            )
        )
    return matched, unmatched
