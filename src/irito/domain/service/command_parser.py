"""Domain service: Command Parser.

Turns a raw transcript into a typed Intent. Recognized phrasings are kept
as an ordered list of (pattern, builder) pairs and evaluated top to
bottom; the first pattern that matches wins. Parsing is pure: no I/O and
no state, so the same transcript always yields the same Intent.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Callable

from irito.domain.model.intent import (
    CheckAutoOrder,
    CheckStock,
    Inbound,
    Intent,
    Outbound,
    ShowAreaStock,
    ShowLowStock,
    Unrecognized,
)

IntentBuilder = Callable[[re.Match], Intent]

_CODE_TOKEN = re.compile(r"[A-Z0-9-]*[A-Z0-9][A-Z0-9-]*", re.IGNORECASE | re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def normalize(transcript: str) -> str:
    """NFKC-fold the text and collapse whitespace runs.

    Speech engines return full-width digits and Latin letters
    (``５０個``, ``ＡＢＣ１２３``) as often as ASCII ones.
    """
    text = unicodedata.normalize("NFKC", transcript)
    return _WHITESPACE.sub(" ", text).strip()


def extract_product_code(span: str) -> str:
    """Pull a product code such as ``ABC123`` or ``XYZ-456`` out of *span*.

    Falls back to the trimmed span, which then acts as a free-text
    product reference.
    """
    match = _CODE_TOKEN.search(span)
    if match:
        return match.group(0)
    return span.strip()


def _movement(intent_type: type) -> IntentBuilder:
    def build(match: re.Match[str]) -> Intent:
        return intent_type(
            product_code=extract_product_code(match.group("product")),
            quantity=int(match.group("quantity")),
        )

    return build


# Priority order matters: the first matching pattern decides the intent.
COMMAND_PATTERNS: list[tuple[re.Pattern[str], IntentBuilder]] = [
    (
        re.compile(r"(?P<product>.+?)\s*を\s*(?P<quantity>\d+)\s*個\s*入荷", re.IGNORECASE),
        _movement(Inbound),
    ),
    (
        re.compile(r"(?P<product>.+?)\s*を\s*(?P<quantity>\d+)\s*個\s*出荷", re.IGNORECASE),
        _movement(Outbound),
    ),
    (
        re.compile(r"(?P<product>.+?)\s*の\s*在庫\s*(?:数)?\s*(?:を)?\s*確認", re.IGNORECASE),
        lambda m: CheckStock(product_code=extract_product_code(m.group("product"))),
    ),
    (
        re.compile(r"(?:安全在庫|最小在庫)\s*を\s*下回った\s*商品\s*を?\s*表示", re.IGNORECASE),
        lambda m: ShowLowStock(),
    ),
    (
        re.compile(r"(?P<area>.+?(?:区域|エリア))\s*の\s*在庫\s*状況\s*を?\s*表示", re.IGNORECASE),
        lambda m: ShowAreaStock(area=m.group("area").strip()),
    ),
    (
        re.compile(r"自動発注\s*状況\s*を?\s*確認", re.IGNORECASE),
        lambda m: CheckAutoOrder(),
    ),
]


class CommandParser:

    def __init__(
        self,
        patterns: list[tuple[re.Pattern[str], IntentBuilder]] | None = None,
    ) -> None:
        self._patterns = list(COMMAND_PATTERNS if patterns is None else patterns)

    def parse(self, transcript: str) -> Intent:
        """Classify *transcript* into an Intent.

        Returns ``Unrecognized`` carrying the raw input when no pattern
        matches.
        """
        text = normalize(transcript)
        for pattern, build in self._patterns:
            match = pattern.search(text)
            if match:
                return build(match)
        return Unrecognized(raw_text=transcript)
