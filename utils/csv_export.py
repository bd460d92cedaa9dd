"""Batch sweep CSV export."""

from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Iterable, Union

from models.sweep_row import SweepRow
from utils.constants import SWEEP_CSV_HEADER

_FOUR_PLACES = Decimal('0.0001')


def format_fixed4(value: float) -> str:
    """
    Format to 4 decimals rounding exact binary ties away from zero.

    2/64 = 0.03125 becomes "0.0313" (format() would give "0.0312").
    """
    return str(Decimal(value).quantize(_FOUR_PLACES, rounding=ROUND_HALF_UP))


def format_sweep_csv(rows: Iterable[SweepRow]) -> str:
    """Header line plus rows joined by newlines, no trailing newline."""
    lines = [
        f"{row.block_size},{row.k},{format_fixed4(row.rate)},"
        f"{row.transform},{format_fixed4(row.psnr)}"
        for row in rows
    ]
    return SWEEP_CSV_HEADER + "\n" + "\n".join(lines)


def export_sweep_csv(rows: Iterable[SweepRow], csv_path: Union[str, Path]) -> Path:
    """Write sweep rows to csv_path."""
    csv_path = Path(csv_path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with open(csv_path, 'w', newline='') as f:
        f.write(format_sweep_csv(rows))
    return csv_path
