"""Alignment of several tag series into one forward-filled table."""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from timebase_history.core.models import AlignedRow, Sample, TagSeries, Value


def _flatten(series_list: Sequence[TagSeries]) -> List[Tuple[int, Sample]]:
    """Pair every sample with its tag position, sorted by timestamp.

    The sort is stable, so equal timestamps keep series order.
    """
    pairs = [
        (position, sample)
        for position, series in enumerate(series_list)
        for sample in series.samples
    ]
    pairs.sort(key=lambda pair: pair[1].timestamp)
    return pairs


def align(
    series_list: Sequence[TagSeries],
    start: Optional[datetime] = None,
    emit_final: bool = False
) -> List[AlignedRow]:
    """Align tag series into change-driven, forward-filled rows.

    A row is emitted each time a sample arrives with a timestamp later than
    the pending one. The row holds every tag's latest value and stays valid
    until the next row.

    With ``emit_final=False`` the state reached after the last timestamp is
    never emitted, because no later sample closes it. ``emit_final=True``
    emits it as a last row.

    Args:
        series_list: Series in column order
        start: Timestamp of the first row, defaults to the earliest sample
        emit_final: Emit the state at the last timestamp as a final row

    Returns:
        Rows in ascending timestamp order, one value per series

    Raises:
        ValueError: If `start` is naive
    """
    if start is not None and start.utcoffset() is None:
        raise ValueError(f"start must be timezone-aware: {start.isoformat()}")

    pairs = _flatten(series_list)
    if not pairs:
        return []

    current: List[Optional[Value]] = [None] * len(series_list)
    pending = start if start is not None else pairs[0][1].timestamp
    rows: List[AlignedRow] = []

    for position, sample in pairs:
        if sample.timestamp > pending:
            rows.append(AlignedRow(timestamp=pending, values=tuple(current)))
            pending = sample.timestamp
        current[position] = sample.value

    if emit_final:
        rows.append(AlignedRow(timestamp=pending, values=tuple(current)))

    logger.debug(
        f"Aligned {len(pairs)} samples from {len(series_list)} tags into {len(rows)} rows"
    )
    return rows
