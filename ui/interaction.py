"""
Interaction Controller

Turns pygame input events into SkyViewport calls. Works with either
viewport variant; the only state kept here is the gesture in progress.

Controls
--------
  Drag (mouse / one finger)   Rotate (pov) or pan (allsky)
  Scroll up / down            Zoom out / in
  Pinch (two fingers)         Zoom, spreading fingers zooms in
  Double click / double tap   Reset view
  Arrows                      Rotate / pan
  + / -                       Zoom in / out
  R, Home                     Reset view
"""

from __future__ import annotations
import logging
import math
import time
from typing import Callable, Dict, Iterable, Optional, Tuple

import pygame

from core.viewport import SkyViewport

logger = logging.getLogger(__name__)

DOUBLE_TAP_SECONDS = 0.4
DOUBLE_TAP_DISTANCE = 10.0

Point = Tuple[float, float]

_ARROWS = {
    pygame.K_LEFT: (-1, 0),
    pygame.K_RIGHT: (1, 0),
    pygame.K_UP: (0, 1),
    pygame.K_DOWN: (0, -1),
}
_ZOOM_IN_KEYS = (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS)
_ZOOM_OUT_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)
_RESET_KEYS = (pygame.K_r, pygame.K_HOME)


def pinch_distance(p1: Point, p2: Point) -> float:
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


class InteractionController:
    """
    Gesture tracking for one viewport.

    Drag and pinch are always applied from the viewport state captured
    when the gesture started, never accumulated per motion event.
    """

    def __init__(self, viewport: SkyViewport, clock: Callable[[], float] = time.monotonic):
        self.viewport = viewport
        self._clock = clock

        # Drag state
        self.dragging = False
        self.drag_start: Optional[Point] = None
        self.drag_baseline: Optional[Dict[str, float]] = None

        # Pinch state
        self.pinching = False
        self.pinch_start_distance = 0.0
        self.pinch_baseline: Optional[Dict[str, float]] = None

        self._fingers: Dict[int, Point] = {}
        self._pinch_ids: Tuple[int, ...] = ()
        self._last_press: Optional[Tuple[float, float, float]] = None   # (t, x, y)
        self.pointer: Point = (viewport.width / 2.0, viewport.height / 2.0)

    # -----------------------------------------------------------------------
    # Gestures (device independent)
    # -----------------------------------------------------------------------

    def press(self, x: float, y: float) -> bool:
        """Pointer down. Returns True if it completed a double tap (view reset)."""
        now = self._clock()
        self.pointer = (x, y)
        last, self._last_press = self._last_press, (now, x, y)
        if last is not None:
            t0, x0, y0 = last
            if (now - t0 <= DOUBLE_TAP_SECONDS and
                    math.hypot(x - x0, y - y0) <= DOUBLE_TAP_DISTANCE):
                self._last_press = None
                self.dragging = False
                self.reset()
                return True

        self.dragging = True
        self.pinching = False
        self.drag_start = (x, y)
        self.drag_baseline = self.viewport.get_state()
        return False

    def move(self, x: float, y: float) -> bool:
        self.pointer = (x, y)
        if not self.dragging or self.drag_start is None:
            return False
        dx = x - self.drag_start[0]
        dy = y - self.drag_start[1]
        self.viewport.apply_drag(self.drag_baseline, dx, dy)
        return True

    def release(self):
        self.dragging = False
        self.drag_start = None
        self.drag_baseline = None

    def pinch_begin(self, p1: Point, p2: Point):
        self.dragging = False
        # A pinch is never the second half of a double tap
        self._last_press = None
        self.pinching = True
        self.pinch_start_distance = pinch_distance(p1, p2)
        self.pinch_baseline = self.viewport.get_state()

    def pinch_move(self, p1: Point, p2: Point) -> bool:
        if not self.pinching or self.pinch_start_distance <= 0:
            return False
        scale = pinch_distance(p1, p2) / self.pinch_start_distance
        if scale <= 0:
            return False
        self.viewport.apply_pinch(self.pinch_baseline, scale)
        return True

    def pinch_end(self):
        self.pinching = False
        self.pinch_baseline = None
        self._pinch_ids = ()

    def wheel(self, direction: int, x: Optional[float] = None, y: Optional[float] = None) -> bool:
        if direction == 0:
            return False
        px, py = self.pointer if x is None or y is None else (x, y)
        self.viewport.apply_wheel(1 if direction > 0 else -1, px, py)
        return True

    def reset(self):
        self.viewport.reset()
        logger.debug("View reset: %s", self.viewport.get_state())

    # -----------------------------------------------------------------------
    # pygame event dispatch
    # -----------------------------------------------------------------------

    def handle_events(self, events: Iterable[pygame.event.Event]) -> bool:
        changed = False
        for event in events:
            changed = self.handle_event(event) or changed
        return changed

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply one event. Returns True when the view changed."""
        # SDL also emits mouse events for touches; the FINGER* path handles those
        if getattr(event, "touch", False):
            return False

        etype = event.type
        if etype == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self.press(*event.pos)
        if etype == pygame.MOUSEBUTTONUP and event.button == 1:
            self.release()
            return False
        if etype == pygame.MOUSEMOTION:
            return self.move(*event.pos)
        if etype == pygame.MOUSEWHEEL:
            return self.wheel(event.y)
        if etype in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
            return self._handle_finger(event)
        if etype == pygame.KEYDOWN:
            return self._handle_key(event.key)
        if etype == pygame.VIDEORESIZE:
            self.viewport.resize(event.w, event.h)
            return True
        return False

    def _finger_pos(self, event) -> Point:
        # Finger coordinates are normalised to [0, 1]
        return (event.x * self.viewport.width, event.y * self.viewport.height)

    def _begin_finger_pinch(self, ids: Tuple[int, int]):
        self.pinch_begin(self._fingers[ids[0]], self._fingers[ids[1]])
        self._pinch_ids = ids

    def _handle_finger(self, event) -> bool:
        if event.type == pygame.FINGERDOWN:
            self._fingers[event.finger_id] = self._finger_pos(event)
            if len(self._fingers) == 2:
                self._begin_finger_pinch(tuple(self._fingers))
                return False
            if len(self._fingers) == 1:
                return self.press(*self._fingers[event.finger_id])
            return False

        if event.type == pygame.FINGERMOTION:
            if event.finger_id not in self._fingers:
                return False
            self._fingers[event.finger_id] = self._finger_pos(event)
            if self.pinching:
                if event.finger_id not in self._pinch_ids:
                    return False
                a, b = self._pinch_ids
                return self.pinch_move(self._fingers[a], self._fingers[b])
            if len(self._fingers) == 1:
                return self.move(*self._fingers[event.finger_id])
            return False

        # FINGERUP
        self._fingers.pop(event.finger_id, None)
        if event.finger_id in self._pinch_ids:
            if len(self._fingers) >= 2:
                # Continue with the remaining pair from a fresh baseline
                self._begin_finger_pinch(tuple(self._fingers)[:2])
            else:
                self.pinch_end()
        if not self._fingers:
            self.release()
        return False

    def _handle_key(self, key: int) -> bool:
        if key in _ARROWS:
            self.viewport.apply_keys(*_ARROWS[key])
            return True
        cx, cy = self.viewport.width / 2.0, self.viewport.height / 2.0
        if key in _ZOOM_IN_KEYS:
            return self.wheel(-1, cx, cy)
        if key in _ZOOM_OUT_KEYS:
            return self.wheel(1, cx, cy)
        if key in _RESET_KEYS:
            self.reset()
            return True
        return False
