"""Buffered CSV logging of session ticks and lifecycle events."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, TextIO

# Column layout of ``Snapshot.as_row()`` per scenario kind.
TIMESERIES_HEADERS: dict[str, list[str]] = {
    "projectile": ["t", "x", "y", "vy"],
    "pendulum": ["t", "theta", "omega"],
    "spring": ["t", "x", "v"],
    "circular": ["t", "angle", "x", "y"],
    "collision": ["t", "x1", "y1", "vx1", "vy1", "x2", "y2", "vx2", "vy2"],
    "electric": ["t", "q1", "q2"],
}

EVENTS_HEADER = ["t", "tick", "type", "details"]


def format_cell(value: object) -> str:
    """Numbers as ``.10g``; text is quoted when it holds a comma or quote."""

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:.10g}"
    text = str(value)
    if "," in text or '"' in text:
        text = '"' + text.replace('"', '""') + '"'
    return text


class CsvChannel:
    """One CSV file with a header row and a row buffer flushed in batches."""

    def __init__(self, path: Path, header: Sequence[str], flush_threshold: int) -> None:
        self.path = path
        self._threshold = max(1, flush_threshold)
        self._rows: list[str] = []
        self._fh: Optional[TextIO] = path.open("w", newline="", encoding="utf-8")
        self._fh.write(",".join(header) + "\n")

    @property
    def pending(self) -> int:
        return len(self._rows)

    def append(self, values: Sequence[object]) -> None:
        self._rows.append(",".join(format_cell(v) for v in values))
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._fh is None or not self._rows:
            return
        self._fh.write("\n".join(self._rows) + "\n")
        self._fh.flush()
        self._rows.clear()

    def close(self) -> None:
        if self._fh is None:
            return
        self.flush()
        self._fh.close()
        self._fh = None


def allocate_run_dir(root_dir: Path, base_id: str) -> Path:
    """Create ``root_dir/base_id``, appending ``_01``, ``_02``... if taken."""

    candidate = root_dir / base_id
    suffix = 1
    while candidate.exists():
        candidate = root_dir / f"{base_id}_{suffix:02d}"
        suffix += 1
    candidate.mkdir(parents=True, exist_ok=False)
    return candidate


class RunLogger:
    """Writes one session run to ``<root_dir>/<run_id>/``.

    The run folder holds ``timeseries.csv`` (one row per logged tick, columns
    from :data:`TIMESERIES_HEADERS`), ``events.csv`` (lifecycle and
    collision events) and ``meta.json``. ``last_run.txt`` in the root points
    at the newest run. Run ids default to ``YYYYmmdd_HHMMSS_<scenario>``.
    """

    EVENTS_HEADER = EVENTS_HEADER

    def __init__(
        self,
        scenario: str,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        if scenario not in TIMESERIES_HEADERS:
            raise ValueError(f"No time series layout for scenario {scenario!r}")
        self.scenario = scenario
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        base_id = run_id or f"{datetime.now():%Y%m%d_%H%M%S}_{scenario}"
        self.run_dir = allocate_run_dir(self.root_dir, base_id)
        self.run_id = self.run_dir.name
        self.meta_path = self.run_dir / "meta.json"

        self._timeseries = CsvChannel(
            self.run_dir / "timeseries.csv",
            TIMESERIES_HEADERS[scenario],
            timeseries_flush_threshold,
        )
        self._events = CsvChannel(
            self.run_dir / "events.csv", EVENTS_HEADER, events_flush_threshold
        )
        self.closed = False

        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    @property
    def timeseries_path(self) -> Path:
        return self._timeseries.path

    @property
    def events_path(self) -> Path:
        return self._events.path

    # ------------------------------------------------------------------
    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[float]) -> None:
        self._timeseries.append(values)

    def log_event(self, values: Sequence[object]) -> None:
        """Append ``[t, tick, type, details]`` to the events file."""

        self._events.append(values)

    def close(self) -> None:
        if self.closed:
            return
        self._timeseries.close()
        self._events.close()
        self.closed = True

    # ------------------------------------------------------------------
    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = [
    "EVENTS_HEADER",
    "TIMESERIES_HEADERS",
    "CsvChannel",
    "RunLogger",
    "allocate_run_dir",
    "format_cell",
]
