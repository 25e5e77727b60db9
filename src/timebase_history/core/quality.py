"""Sample quality classification.

Timebase reports an OPC-style quality code with every sample. Bits 6 and 7
(mask ``0xC0``) hold the quality field:

    0  bad
    1  uncertain
    2  uncertain
    3  good

Uncertain codes map to :attr:`QualityStatus.UNKNOWN`.
"""

from timebase_history.core.models import QualityCategory, QualityStatus


QUALITY_MASK = 0xC0
QUALITY_SHIFT = 6

_STATUS_BY_FIELD = {
    0: QualityStatus.BAD,
    1: QualityStatus.UNKNOWN,
    2: QualityStatus.UNKNOWN,
    3: QualityStatus.GOOD,
}


def to_int16(code: int) -> int:
    """Fold an integer into the signed 16-bit range."""
    return ((code + 0x8000) & 0xFFFF) - 0x8000


def classify(code: int) -> QualityCategory:
    """Classify a raw quality code.

    Args:
        code: Raw signed 16-bit quality code

    Returns:
        Quality category carrying the raw code
    """
    raw = to_int16(code)
    field = (raw & QUALITY_MASK) >> QUALITY_SHIFT
    return QualityCategory(status=_STATUS_BY_FIELD[field], code=raw)
