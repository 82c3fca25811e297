"""
Plate extraction from raw OCR text.

OCR output on plates is noisy: separators get lost and characters misread.
The strict pattern catches clean reads of conventional plate shapes; the
broad pattern salvages degraded reads that still have a plate-like length.
"""
import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class PlatePattern:
    name: str
    rules: tuple[re.Pattern, ...]

    def first_match(self, text: str) -> str | None:
        for rule in self.rules:
            m = rule.search(text)
            if m:
                return m.group(0).upper()
        return None


STRICT_PLATE = PlatePattern(
    name="strict",
    rules=(
        # MH12AB1234, DL1C12345
        re.compile(r"[A-Z]{2}[0-9]{1,2}[A-Z]{1,2}[0-9]{3,5}", re.IGNORECASE),
        # 22BH1234A
        re.compile(r"[0-9]{2}[A-Z]{2}[0-9]{4}[A-Z]", re.IGNORECASE),
    ),
)

# Maximal alphanumeric run; a 14+ char run is prose, not a plate
BROAD_PLATE = PlatePattern(
    name="broad",
    rules=(re.compile(r"(?<![A-Z0-9])[A-Z0-9]{8,13}(?![A-Z0-9])", re.IGNORECASE),),
)

PLATE_PATTERNS: tuple[PlatePattern, ...] = (STRICT_PLATE, BROAD_PLATE)


def normalize(raw_text: str) -> str:
    return _WHITESPACE.sub("", raw_text or "")


def extract_plate(raw_text: str, patterns: tuple[PlatePattern, ...] = PLATE_PATTERNS) -> str | None:
    """Return the first plate-shaped substring of raw_text, upper-cased, or None."""
    text = normalize(raw_text)
    if not text:
        return None
    for pattern in patterns:
        plate = pattern.first_match(text)
        if plate:
            return plate
    return None
