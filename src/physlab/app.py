"""
PhysLab - Interactive Physics Sandbox
=====================================

Live view: one scenario at a time, fixed-step ticks driven once per frame.

Keys
----
1-6          switch scenario
Space        pause / resume
R            reset from the current parameters
Up / Down    choose the parameter to adjust
Left / Right nudge the chosen parameter (rebuilds the session)
G            write the analytic chart for the current parameters
Esc          quit
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional
from urllib.parse import parse_qsl

import pygame

from physlab.core.config import RENDER_CFG, SIM_CFG
from physlab.core.controller import SessionController
from physlab.core.logging_utils import RunLogger
from physlab.core.model import Snapshot
from physlab.core.timekeeping import FrameScheduler
from physlab.data.scenarios import (
    DEFAULT_SCENARIO_KIND,
    SCENARIO_DISPLAY_ORDER,
    SCENARIOS,
    ParameterSet,
    ScenarioKind,
)
from physlab.graph_view import write_chart
from physlab.render import (
    ButtonBar,
    ButtonVisualStyle,
    draw_snapshot,
    draw_text_lines,
    hud_lines,
    load_font,
)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive physics sandbox.")
    parser.add_argument(
        "--scenario",
        choices=[kind.value for kind in ScenarioKind],
        default=DEFAULT_SCENARIO_KIND.value,
    )
    parser.add_argument("--log", action="store_true", help="Record ticks and events to CSV.")
    parser.add_argument("--log-dir", type=Path, default=Path("data/runs"))
    parser.add_argument("--figures-dir", type=Path, default=Path("figures"))
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    pygame.init()
    pygame.display.set_caption("PhysLab - Interactive Physics Sandbox")
    screen = pygame.display.set_mode((RENDER_CFG.width, RENDER_CFG.height))
    clock = pygame.time.Clock()
    font = load_font(RENDER_CFG.font_names, RENDER_CFG.font_size)

    arena_offset = (0, RENDER_CFG.hud_height)
    scheduler = FrameScheduler()
    latest: dict[str, Snapshot] = {}
    status_text = ""
    selected_param = 0

    def on_frame(snapshot: Snapshot) -> None:
        latest["frame"] = snapshot

    def make_logger(params: ParameterSet) -> Optional[RunLogger]:
        if not args.log:
            return None
        return RunLogger(params.kind.value, root_dir=args.log_dir)

    controller = SessionController(
        scheduler,
        cfg=SIM_CFG,
        on_frame=on_frame,
        logger_factory=make_logger,
    )

    def current_params() -> ParameterSet:
        return controller.parameters

    def select(kind: ScenarioKind) -> None:
        nonlocal selected_param
        selected_param = 0
        latest.clear()
        controller.select(kind)

    def toggle_pause() -> None:
        controller.toggle_pause()

    def reset() -> None:
        controller.reset()

    def write_graph() -> None:
        nonlocal status_text
        query = dict(parse_qsl(controller.handoff_query()))
        path, summary = write_chart(query, args.figures_dir)
        status_text = f"Chart saved to {path} | {summary.answer}"
        print(f"Chart saved to {path}")
        print(summary.problem)
        print(summary.answer)

    def nudge(steps: int) -> None:
        params = current_params()
        name = params.scenario.params[selected_param].name
        controller.nudge(name, steps)

    def quit_app() -> None:
        controller.shutdown()
        pygame.quit()
        sys.exit()

    style = ButtonVisualStyle(
        base_color=RENDER_CFG.button_color,
        hover_color=RENDER_CFG.button_hover_color,
        text_color=RENDER_CFG.button_text_color,
        radius=RENDER_CFG.button_radius,
    )
    buttons = ButtonBar(right=RENDER_CFG.width - 10, top=10, style=style)
    buttons.add(
        lambda: "Pause" if controller.session and controller.session.running else "Resume",
        toggle_pause,
    )
    buttons.add("Reset", reset)
    buttons.add("Graph", write_graph)

    number_keys = {pygame.K_1 + idx: kind for idx, kind in enumerate(SCENARIO_DISPLAY_ORDER)}

    select(ScenarioKind.parse(args.scenario))

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_app()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    quit_app()
                elif event.key in number_keys:
                    select(number_keys[event.key])
                elif event.key == pygame.K_SPACE:
                    toggle_pause()
                elif event.key == pygame.K_r:
                    reset()
                elif event.key == pygame.K_g:
                    write_graph()
                elif event.key in (pygame.K_UP, pygame.K_DOWN):
                    count = len(current_params().scenario.params)
                    delta = -1 if event.key == pygame.K_UP else 1
                    selected_param = (selected_param + delta) % count
                elif event.key == pygame.K_RIGHT:
                    nudge(1)
                elif event.key == pygame.K_LEFT:
                    nudge(-1)
            buttons.handle_event(event)

        scheduler.run_pending()

        screen.fill(RENDER_CFG.background_color)
        frame = latest.get("frame")
        if frame is not None:
            draw_snapshot(
                screen,
                frame,
                font,
                cfg=SIM_CFG,
                render_cfg=RENDER_CFG,
                offset=arena_offset,
            )

        params = current_params()
        spec = params.scenario.params[selected_param]
        lines = [
            f"{SCENARIOS[params.kind].name}   [1-6] switch  [Space] pause  [R] reset  [G] graph",
            f"{spec.label}: {params[spec.name]:g}   (Up/Down select, Left/Right adjust)",
        ]
        if frame is not None:
            lines.append("   ".join(hud_lines(frame, SIM_CFG.collision_px_per_mps)))
        if status_text:
            lines.append(status_text)
        draw_text_lines(screen, font, lines, (12, 8), RENDER_CFG.ink_color)
        buttons.draw(screen, font)

        pygame.display.flip()
        clock.tick(RENDER_CFG.fps)


if __name__ == "__main__":
    raise SystemExit(main())
