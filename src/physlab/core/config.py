"""Configuration dataclasses for the physics sandbox."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SimCfg:
    dt: float = 0.016
    arena_width: int = 900
    arena_height: int = 520
    trace_length: int = 120
    collision_px_per_mps: float = 20.0
    collision_epsilon: float = 1e-9
    field_min_dist_sq: float = 16.0
    field_min_grid_step: int = 28
    field_min_magnitude: float = 1e-6
    field_source_fractions: tuple[float, float] = (0.33, 0.67)
    probe_samples: int = 120
    probe_min_distance: float = 1e-4
    projectile_origin_px: float = 60.0
    projectile_ground_px: float = 30.0
    projectile_path_spacing: float = 0.02
    projectile_path_max_points: int = 600
    pendulum_pivot_px: float = 60.0
    pendulum_px_per_m: float = 80.0
    spring_anchor_px: float = 40.0
    spring_rest_offset_px: float = 180.0
    spring_px_per_m: float = 40.0
    log_every_ticks: int = 1

    @property
    def arena_size(self) -> tuple[int, int]:
        return self.arena_width, self.arena_height

    @property
    def projectile_px_per_m(self) -> int:
        return max(4, min(8, math.floor(self.arena_width / 150)))

    @property
    def field_grid_step(self) -> int:
        return max(
            self.field_min_grid_step,
            math.floor(min(self.arena_width, self.arena_height) / 20),
        )


@dataclass(frozen=True)
class RenderCfg:
    width: int = 900
    height: int = 600
    hud_height: int = 80
    fps: int = 60
    background_color: tuple[int, int, int] = (251, 228, 216)
    ink_color: tuple[int, int, int] = (43, 18, 76)
    primary_color: tuple[int, int, int] = (133, 79, 108)
    secondary_color: tuple[int, int, int] = (223, 182, 178)
    accent_color: tuple[int, int, int] = (82, 43, 91)
    ground_color: tuple[int, int, int] = (255, 255, 255)
    trace_color: tuple[int, int, int, int] = (133, 79, 108, 215)
    field_arrow_color: tuple[int, int, int] = (43, 18, 76)
    field_arrow_scale: float = 200.0
    field_arrow_max_pixels: int = 14
    field_arrow_head_length: int = 4
    field_arrow_head_half_width: int = 3
    velocity_arrow_max_pixels: int = 40
    velocity_arrow_head_length: int = 8
    velocity_arrow_head_angle_deg: int = 26
    projectile_radius: int = 10
    pendulum_bob_radius: int = 16
    spring_block_half_size: int = 18
    circular_particle_radius: int = 10
    charge_radius: int = 10
    button_color: tuple[int, int, int, int] = (82, 43, 91, 220)
    button_hover_color: tuple[int, int, int, int] = (133, 79, 108, 235)
    button_text_color: tuple[int, int, int] = (251, 228, 216)
    button_radius: int = 12
    font_names: tuple[str, ...] = ("DejaVu Sans", "Arial", "Helvetica")
    font_size: int = 14
    chart_dpi: int = 150
    chart_size_inches: tuple[float, float] = (8.0, 4.5)


SIM_CFG = SimCfg()
RENDER_CFG = RenderCfg()


__all__ = ["RENDER_CFG", "SIM_CFG", "RenderCfg", "SimCfg"]
