from __future__ import annotations

import math
from typing import Sequence, TYPE_CHECKING

import pygame

from physlab.core.model import (
    CircularSnapshot,
    CollisionSnapshot,
    FieldSnapshot,
    PendulumSnapshot,
    ProjectileSnapshot,
    Snapshot,
    SpringSnapshot,
)

from .assets import Color, get_text_surface

if TYPE_CHECKING:  # pragma: no cover
    from physlab.core.config import RenderCfg, SimCfg


Point = tuple[float, float]


def _shift(point: Point, offset: tuple[int, int]) -> tuple[int, int]:
    return int(point[0] + offset[0]), int(point[1] + offset[1])


def draw_arrow(
    surface: pygame.Surface,
    start: tuple[int, int],
    end: tuple[int, int],
    color: Color,
    *,
    head_length: int,
    head_angle_deg: int,
    width: int = 2,
) -> None:
    pygame.draw.line(surface, color, start, end, width)
    angle = math.atan2(start[1] - end[1], end[0] - start[0])
    head_angle = math.radians(head_angle_deg)
    left = (
        int(end[0] - head_length * math.cos(angle - head_angle)),
        int(end[1] + head_length * math.sin(angle - head_angle)),
    )
    right = (
        int(end[0] - head_length * math.cos(angle + head_angle)),
        int(end[1] + head_length * math.sin(angle + head_angle)),
    )
    pygame.draw.polygon(surface, color, [end, left, right])


def draw_polyline(
    surface: pygame.Surface,
    color: Color,
    points: Sequence[tuple[int, int]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)


def downsample_points(points: Sequence[Point], max_points: int) -> list[Point]:
    if len(points) <= max_points:
        return list(points)
    step = max(1, math.ceil(len(points) / max_points))
    sampled = list(points[::step])
    if sampled[-1] != points[-1]:
        sampled.append(points[-1])
    return sampled


def draw_projectile(
    surface: pygame.Surface,
    snap: ProjectileSnapshot,
    cfg: SimCfg,
    render_cfg: RenderCfg,
    offset: tuple[int, int],
) -> None:
    ground_y = cfg.arena_height - cfg.projectile_ground_px
    ground = pygame.Rect(
        offset[0], int(offset[1] + ground_y), cfg.arena_width, int(cfg.projectile_ground_px)
    )
    pygame.draw.rect(surface, render_cfg.ground_color, ground)
    scale = cfg.projectile_px_per_m
    path = [
        _shift((cfg.projectile_origin_px + x * scale, ground_y - y * scale), offset)
        for x, y in downsample_points(snap.path, 600)
    ]
    draw_polyline(surface, render_cfg.secondary_color, path, 3)
    pygame.draw.circle(
        surface,
        render_cfg.primary_color,
        _shift(snap.position_px, offset),
        render_cfg.projectile_radius,
    )


def draw_pendulum(
    surface: pygame.Surface,
    snap: PendulumSnapshot,
    cfg: SimCfg,
    render_cfg: RenderCfg,
    offset: tuple[int, int],
) -> None:
    pivot = (cfg.arena_width / 2.0, cfg.pendulum_pivot_px)
    bob = (
        pivot[0] + snap.bob_position[0] * cfg.pendulum_px_per_m,
        pivot[1] + snap.bob_position[1] * cfg.pendulum_px_per_m,
    )
    pygame.draw.line(
        surface, render_cfg.secondary_color, _shift(pivot, offset), _shift(bob, offset), 4
    )
    pygame.draw.circle(
        surface, render_cfg.accent_color, _shift(bob, offset), render_cfg.pendulum_bob_radius
    )


def draw_spring(
    surface: pygame.Surface,
    snap: SpringSnapshot,
    cfg: SimCfg,
    render_cfg: RenderCfg,
    offset: tuple[int, int],
) -> None:
    anchor_x = cfg.spring_anchor_px
    anchor_y = cfg.arena_height / 2.0
    mass_x = anchor_x + cfg.spring_rest_offset_px + snap.x * cfg.spring_px_per_m
    half = render_cfg.spring_block_half_size
    coils: list[Point] = [(anchor_x, anchor_y)]
    coils.extend(
        (anchor_x + 10 + i * 20, anchor_y + (8 if i % 2 else -8)) for i in range(8)
    )
    coils.append((mass_x - half - 2, anchor_y))
    draw_polyline(surface, render_cfg.secondary_color, [_shift(p, offset) for p in coils], 3)
    block = pygame.Rect(0, 0, half * 2, half * 2)
    block.center = _shift((mass_x, anchor_y), offset)
    pygame.draw.rect(surface, render_cfg.primary_color, block)


def draw_circular(
    surface: pygame.Surface,
    snap: CircularSnapshot,
    cfg: SimCfg,
    render_cfg: RenderCfg,
    offset: tuple[int, int],
) -> None:
    cx, cy = cfg.arena_width / 2.0, cfg.arena_height / 2.0
    radius = math.hypot(*snap.position)
    shown = max(20.0, min(min(cfg.arena_width, cfg.arena_height) / 2.0 - 40.0, radius))
    scale = shown / radius if radius > 0.0 else 1.0

    def to_screen(p: Point) -> tuple[int, int]:
        return _shift((cx + p[0] * scale, cy + p[1] * scale), offset)

    pygame.draw.circle(surface, render_cfg.secondary_color, _shift((cx, cy), offset), int(shown), 2)
    draw_polyline(surface, render_cfg.trace_color, [to_screen(p) for p in snap.trace], 2)
    particle = to_screen(snap.position)
    pygame.draw.circle(surface, render_cfg.primary_color, particle, render_cfg.circular_particle_radius)
    speed = math.hypot(*snap.velocity)
    if speed > 0.0:
        length = min(render_cfg.velocity_arrow_max_pixels, speed)
        tip = (
            int(particle[0] + snap.velocity[0] / speed * length),
            int(particle[1] + snap.velocity[1] / speed * length),
        )
        draw_arrow(
            surface,
            particle,
            tip,
            render_cfg.ink_color,
            head_length=render_cfg.velocity_arrow_head_length,
            head_angle_deg=render_cfg.velocity_arrow_head_angle_deg,
        )


def draw_collision(
    surface: pygame.Surface,
    snap: CollisionSnapshot,
    cfg: SimCfg,
    render_cfg: RenderCfg,
    offset: tuple[int, int],
) -> None:
    track_y = cfg.arena_height / 2.0 + snap.body1.radius + 40
    pygame.draw.line(
        surface,
        render_cfg.ground_color,
        _shift((10, track_y), offset),
        _shift((cfg.arena_width - 10, track_y), offset),
        2,
    )
    for body, color in (
        (snap.body1, render_cfg.secondary_color),
        (snap.body2, render_cfg.primary_color),
    ):
        center = _shift(body.position, offset)
        pygame.draw.circle(surface, color, center, int(body.radius))
        pygame.draw.circle(surface, render_cfg.ink_color, center, int(body.radius), 1)


def draw_field(
    surface: pygame.Surface,
    snap: FieldSnapshot,
    font: pygame.font.Font,
    render_cfg: RenderCfg,
    offset: tuple[int, int],
) -> None:
    color = render_cfg.field_arrow_color
    head = render_cfg.field_arrow_head_length
    half = render_cfg.field_arrow_head_half_width
    for vector in snap.vectors:
        ux, uy = vector.direction
        length = min(render_cfg.field_arrow_max_pixels, vector.magnitude * render_cfg.field_arrow_scale)
        gx, gy = vector.position
        x2, y2 = gx + ux * length, gy + uy * length
        pygame.draw.line(surface, color, _shift((gx, gy), offset), _shift((x2, y2), offset), 1)
        pygame.draw.polygon(
            surface,
            color,
            [
                _shift((x2, y2), offset),
                _shift((x2 - ux * head - uy * half, y2 - uy * head + ux * half), offset),
                _shift((x2 - ux * head + uy * half, y2 - uy * head - ux * half), offset),
            ],
        )
    for source in snap.sources:
        fill = render_cfg.primary_color if source.charge >= 0 else render_cfg.secondary_color
        center = _shift(source.position, offset)
        pygame.draw.circle(surface, fill, center, render_cfg.charge_radius)
        label = get_text_surface(font, f"{source.charge:+.1f}", (255, 255, 255))
        surface.blit(label, label.get_rect(center=center))


def draw_snapshot(
    surface: pygame.Surface,
    snapshot: Snapshot,
    font: pygame.font.Font,
    *,
    cfg: SimCfg,
    render_cfg: RenderCfg,
    offset: tuple[int, int] = (0, 0),
) -> None:
    if isinstance(snapshot, ProjectileSnapshot):
        draw_projectile(surface, snapshot, cfg, render_cfg, offset)
    elif isinstance(snapshot, PendulumSnapshot):
        draw_pendulum(surface, snapshot, cfg, render_cfg, offset)
    elif isinstance(snapshot, SpringSnapshot):
        draw_spring(surface, snapshot, cfg, render_cfg, offset)
    elif isinstance(snapshot, CircularSnapshot):
        draw_circular(surface, snapshot, cfg, render_cfg, offset)
    elif isinstance(snapshot, CollisionSnapshot):
        draw_collision(surface, snapshot, cfg, render_cfg, offset)
    elif isinstance(snapshot, FieldSnapshot):
        draw_field(surface, snapshot, font, render_cfg, offset)
    else:
        raise TypeError(f"Unsupported snapshot {type(snapshot).__name__}")


def hud_lines(snapshot: Snapshot, px_per_mps: float) -> list[str]:
    """Readout text shown above the arena for each scenario."""

    if isinstance(snapshot, ProjectileSnapshot):
        return [f"t={snapshot.time:.2f}s", f"vy={snapshot.vertical_velocity:.2f} m/s"]
    if isinstance(snapshot, PendulumSnapshot):
        return [f"theta={snapshot.theta:.2f} rad"]
    if isinstance(snapshot, SpringSnapshot):
        return [f"x={snapshot.x:.2f} m"]
    if isinstance(snapshot, CircularSnapshot):
        return [f"angle={snapshot.angle % (2 * math.pi):.2f} rad"]
    if isinstance(snapshot, CollisionSnapshot):
        return [
            f"v1={snapshot.body1.velocity[0] / px_per_mps:.2f} m/s",
            f"v2={snapshot.body2.velocity[0] / px_per_mps:.2f} m/s",
        ]
    if isinstance(snapshot, FieldSnapshot):
        q1, q2 = (source.charge for source in snapshot.sources)
        return [f"q1={q1:.1f}    q2={q2:.1f}"]
    raise TypeError(f"Unsupported snapshot {type(snapshot).__name__}")
