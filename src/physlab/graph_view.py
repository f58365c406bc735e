"""Render the analytic chart and worked answer for a scenario handoff."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import parse_qsl

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from physlab.core.analytic import AnalyticSummary, summarize_query
from physlab.core.config import RENDER_CFG, RenderCfg

SERIES_COLORS = ("#854F6C", "#DFB6B2", "#522B5B")


def _hex(color: tuple[int, int, int]) -> str:
    return "#{:02X}{:02X}{:02X}".format(*color[:3])


def plot_summary(summary: AnalyticSummary, out_path: Path, cfg: RenderCfg = RENDER_CFG) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=cfg.chart_size_inches)
    if summary.chart == "bar":
        labels = list(summary.x_values)
        positions = np.arange(len(labels))
        width = 0.8 / max(1, len(summary.series))
        for idx, series in enumerate(summary.series):
            ax.bar(
                positions + (idx - (len(summary.series) - 1) / 2) * width,
                series.values,
                width,
                label=series.label,
                color=SERIES_COLORS[idx % len(SERIES_COLORS)],
            )
        ax.set_xticks(positions)
        ax.set_xticklabels(labels)
        ax.axhline(0.0, color=_hex(cfg.ink_color), linewidth=0.8)
    else:
        for idx, series in enumerate(summary.series):
            ax.plot(
                summary.x_values,
                series.values,
                label=series.label,
                color=SERIES_COLORS[idx % len(SERIES_COLORS)],
            )
        ax.set_xlabel(summary.x_label)
    ax.set_title(summary.title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(out_path, dpi=cfg.chart_dpi)
    plt.close(fig)
    return out_path


def write_chart(
    query: Mapping[str, str],
    out_dir: Path,
    cfg: RenderCfg = RENDER_CFG,
) -> tuple[Path, AnalyticSummary]:
    summary = summarize_query(query)
    out_path = out_dir / f"{summary.kind.value}_summary.png"
    plot_summary(summary, out_path, cfg)
    return out_path, summary


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Handoff query string, e.g. 'sim=projectile&speed=30&angle=40'.",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("figures"),
        help="Directory for the generated chart.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    query = dict(parse_qsl(args.query.lstrip("?"), keep_blank_values=True))
    try:
        out_path, summary = write_chart(query, args.out_dir)
    except ValueError as exc:
        print(exc)
        return 2
    print(summary.title)
    print(summary.problem)
    print(summary.answer)
    print(f"Chart saved to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
