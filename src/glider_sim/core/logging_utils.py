"""Buffered run recording for path searches and trajectories."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import IO, Optional, Sequence


def _unique_run_id(root_dir: Path, run_id: Optional[str]) -> str:
    """``run_id`` (or a timestamp id) with a numeric suffix if it is taken."""

    if run_id:
        base, pattern = run_id, "{}_{}"
    else:
        base, pattern = datetime.now().strftime("%Y%m%d_%H%M%S") + "_run", "{}_{:02d}"
    candidate = base
    suffix = 0
    while (root_dir / candidate).exists():
        suffix += 1
        candidate = pattern.format(base, suffix)
    return candidate


class _CsvBuffer:
    """CSV file with a header and a row buffer flushed every ``threshold`` rows."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self._fh: IO[str] = path.open("w", newline="")
        self._fh.write(",".join(header) + "\n")
        self._fh.flush()
        self._rows: list[str] = []
        self._threshold = max(1, threshold)

    def append(self, row: str) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._rows:
            self._fh.write("\n".join(self._rows) + "\n")
            self._fh.flush()
            self._rows.clear()

    def close(self) -> None:
        self.flush()
        self._fh.close()


class RunLogger:
    """Buffered logger that stores search candidates and trajectories as CSV.

    Parameters
    ----------
    root_dir:
        Directory that receives one folder per run.
    run_id:
        Optional folder name. Defaults to ``YYYYmmdd_HHMMSS_run``; a taken
        name gets ``_1``, ``_2`` (or ``_01``, ``_02`` for timestamps) appended.
    candidates_flush_threshold:
        Buffered candidate rows before they are written out.
    trajectory_flush_threshold:
        Buffered trajectory rows before they are written out.
    """

    CANDIDATES_HEADER = [
        "attempt",
        "x",
        "y",
        "handedness",
        "score",
        "planet_switches",
        "path_length",
        "penalty",
    ]
    TRAJECTORY_HEADER = ["step", "x", "y", "potential"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        candidates_flush_threshold: int = 200,
        trajectory_flush_threshold: int = 500,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.run_id = _unique_run_id(self.root_dir, run_id)
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.candidates_path = self.run_dir / "candidates.csv"
        self.trajectory_path = self.run_dir / "trajectory.csv"
        self.meta_path = self.run_dir / "meta.json"
        self._candidates = _CsvBuffer(
            self.candidates_path, self.CANDIDATES_HEADER, candidates_flush_threshold
        )
        self._trajectory = _CsvBuffer(
            self.trajectory_path, self.TRAJECTORY_HEADER, trajectory_flush_threshold
        )

        # Read by tools that default to the latest run.
        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        """Dump run settings and results to ``meta.json``; unknown types become strings."""

        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True, default=str)

    def log_candidate(self, values: Sequence[object]) -> None:
        """Buffer one row describing a scored search attempt."""

        self._candidates.append(self._format_row(values))

    def log_point(self, values: Sequence[float]) -> None:
        self._trajectory.append(self._format_row(values))

    def close(self) -> None:
        self._candidates.close()
        self._trajectory.close()

    @classmethod
    def _format_row(cls, values: Sequence[object]) -> str:
        return ",".join(cls._format_value(v) for v in values)

    @staticmethod
    def _format_value(value: object) -> str:
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, float):
            return f"{value:.10g}"
        return str(value)

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["RunLogger"]
