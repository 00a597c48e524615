from pathlib import Path
from typing import Iterable, Union

from .history import PlacementRecord

HEADER = "# penrose placement history"


def format_record(record: PlacementRecord) -> str:
    label = record.tile_type.label
    if record.is_root:
        return f"root {label}"
    return f"on {record.anchor} side {record.side} {label}"


def print_history(records: Iterable[PlacementRecord], *, header: bool = True) -> str:
    lines = [HEADER] if header else []
    lines.extend(format_record(record) for record in records)
    return "\n".join(lines) + "\n"


def write_history(path: Union[str, Path], records: Iterable[PlacementRecord]) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(print_history(records), encoding="utf-8")
    return output_path
