"""
Sky Chart Screen

Draws the current frame of a SkyController onto a pygame surface:
stars coloured by B-V, the horizon (line in pov mode, circle in allsky
mode), compass labels and a one-line HUD.

Controls
--------
  Drag / Arrows         Look around (pov) or pan (allsky)
  Scroll / + / -        Zoom
  Double click / R      Reset view
  Space                 Pause time
  . / ,                 Faster / slower time
  B                     Run time backwards
  N                     Back to now (real time)
  L                     Toggle star names
"""

import math

import pygame

from core.astro_time import format_datetime, local_sidereal_time
from core.azimuthal_viewport import AzimuthalViewport
from core.celestial_math import bv_to_rgb, star_opacity
from core.perspective_camera import PerspectiveCamera

BG_COLOR = (2, 4, 12)
HORIZON_COLOR = (0, 140, 60)
GROUND_COLOR = (6, 14, 8)
CARDINAL_MAJOR = (0, 220, 80)
CARDINAL_MINOR = (0, 130, 50)
HUD_COLOR = (0, 185, 85)
HINT_COLOR = (0, 80, 45)
NAME_COLOR = (160, 160, 120)
GRID_COLOR = (0, 55, 30)

# Stars brighter than this get a name label when labels are on
LABEL_MAG_LIMIT = 1.5


class SkychartScreen:
    """pygame view + time keys on top of a SkyController."""

    def __init__(self, controller):
        self.controller = controller
        self.show_labels = True
        self._fonts = {}

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont('monospace', size)
        return self._fonts[size]

    # -----------------------------------------------------------------------
    # Input / update
    # -----------------------------------------------------------------------

    def handle_input(self, events: list) -> bool:
        """Returns True when the frame needs to be redrawn."""
        changed = self.controller.handle_events(events)
        clock = self.controller.clock
        for event in events:
            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_SPACE:
                clock.toggle_pause()
            elif event.key == pygame.K_PERIOD:
                clock.speed_up()
            elif event.key == pygame.K_COMMA:
                clock.speed_down()
            elif event.key == pygame.K_b:
                clock.reverse()
            elif event.key == pygame.K_n:
                clock.realtime()
            elif event.key == pygame.K_l:
                self.show_labels = not self.show_labels
            else:
                continue
            changed = True
        return changed

    def update(self, dt: float) -> bool:
        return self.controller.tick(dt)

    # -----------------------------------------------------------------------
    # Render
    # -----------------------------------------------------------------------

    def render(self, surface: pygame.Surface):
        surface.fill(BG_COLOR)
        W, H = surface.get_size()
        viewport = self.controller.viewport

        if isinstance(viewport, PerspectiveCamera):
            self._draw_ground(surface, viewport, W, H)
        elif isinstance(viewport, AzimuthalViewport):
            self._draw_allsky_circle(surface, viewport)

        n_drawn = self._draw_stars(surface)
        self._draw_cardinals(surface)
        self._draw_hud(surface, W, H, n_drawn)

    def _draw_ground(self, surface, camera: PerspectiveCamera, W, H):
        """Fill below the horizon line in pov mode."""
        horizon_y = camera.get_horizon_y()
        if horizon_y is None:
            return
        y = int(horizon_y)
        if y < H:
            pygame.draw.rect(surface, GROUND_COLOR, pygame.Rect(0, max(0, y), W, H - max(0, y)))
        pygame.draw.line(surface, HORIZON_COLOR, (0, y), (W, y), 1)

    def _draw_allsky_circle(self, surface, viewport: AzimuthalViewport):
        cx, cy, r = viewport.horizon_circle()
        centre = (int(cx), int(cy))
        pygame.draw.circle(surface, HORIZON_COLOR, centre, int(r), 2)
        # Altitude rings every 30 degrees
        for alt in (30, 60):
            ring = int(viewport.altitude_circle_radius(alt))
            if ring > 2:
                pygame.draw.circle(surface, GRID_COLOR, centre, ring, 1)
        # N / E / S / W spokes out to the horizon
        for az in (0, 90, 180, 270):
            edge = viewport.project(az, 0.0)
            pygame.draw.line(surface, GRID_COLOR, centre, (int(edge.x), int(edge.y)), 1)

    def _draw_stars(self, surface) -> int:
        font = self._font(10)
        frame = self.controller.frame()
        for star in frame:
            alpha = star_opacity(star.magnitude)
            color = tuple(int(c * alpha) for c in bv_to_rgb(star.color_index))
            px = (int(star.screen_x), int(star.screen_y))
            r = max(1, int(math.ceil(star.size)))
            pygame.draw.circle(surface, color, px, r)

            if self.show_labels and star.name and star.magnitude < LABEL_MAG_LIMIT:
                surface.blit(font.render(star.name, True, NAME_COLOR), (px[0] + r + 3, px[1] - 5))
        return len(frame)

    def _draw_cardinals(self, surface):
        """N / NE / E ... labels on the horizon"""
        font = pygame.font.SysFont('monospace', 13, bold=True)
        for label in self.controller.labels():
            color = CARDINAL_MAJOR if len(label.label) == 1 else CARDINAL_MINOR
            txt = font.render(label.label, True, color)
            surface.blit(txt, (label.screen_x - txt.get_width() // 2,
                               label.screen_y - txt.get_height() // 2))

    def _draw_hud(self, surface, W, H, n_drawn: int):
        font = self._font(11)
        state = self.controller.state
        clock = self.controller.clock

        strip = pygame.Surface((W, 22), pygame.SRCALPHA)
        strip.fill((0, 22, 10, 195))
        surface.blit(strip, (0, 0))

        when = state.timestamp or clock.utc
        lst = local_sidereal_time(when, state.observer.longitude)
        lst_h = int(lst / 15)
        lst_m = int((lst / 15 - lst_h) * 60)

        info = (f"  {format_datetime(when)}  |  LST {lst_h:02d}h{lst_m:02d}m  |  "
                f"{self.controller.viewport.describe()}  |  {clock.speed_label}  |  "
                f"Stars: {n_drawn:,} / {len(state.visible):,}  |  {state.observer.name}")
        surface.blit(font.render(info, True, HUD_COLOR), (0, 4))

        hint = ("  [Drag/Arrows] Look  [Scroll/+/-] Zoom  [R/Double click] Reset  "
                "[Space] Pause  [./,] Speed  [B]ack  [N]ow  [L]abels  [ESC] Quit")
        surface.blit(font.render(hint, True, HINT_COLOR), (0, H - 16))
