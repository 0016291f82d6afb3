import csv
import json
from pathlib import Path
from typing import Iterable

from .errors import FilesystemError
from .models import ActionRecord

FIELDS = ["kind", "src", "dst", "suffix", "overwrote", "performed"]


class ActionJournal:
    """Writes a run's action log as JSON, plus a CSV copy next to it."""
    def __init__(self, path: Path):
        self.json_path = path.with_suffix(".json") if path.suffix.lower() == ".csv" else path
        self.csv_path = self.json_path.with_suffix(".csv")

    @staticmethod
    def _row(r: ActionRecord) -> dict:
        return {
            "kind": r.kind.value,
            "src": str(r.src) if r.src is not None else None,
            "dst": str(r.dst),
            "suffix": r.suffix,
            "overwrote": r.overwrote,
            "performed": r.performed,
        }

    def write(self, records: Iterable[ActionRecord]) -> None:
        rows = [self._row(r) for r in records]
        try:
            self.json_path.parent.mkdir(parents=True, exist_ok=True)
            self.json_path.write_text(json.dumps(rows, indent=2), encoding="utf-8")
            with self.csv_path.open("w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=FIELDS)
                writer.writeheader()
                for row in rows:
                    writer.writerow({k: "" if v is None else v for k, v in row.items()})
        except OSError as exc:
            raise FilesystemError(f"Cannot write journal {self.json_path}: {exc}") from exc
