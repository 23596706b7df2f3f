"""
captions.py

Pygame renderer for floating captions ("danmaku").

Turns a lane from the LaneScheduler into a screen row, scrolls each
caption right-to-left at a speed tied to the surface width, and keeps
the scheduler's frequency window ticking while the overlay is on.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional

import pygame

import config
from lane_scheduler import LANE_COUNT, LaneScheduler
from timing import CAPTION_TICK_SEC, CadenceTimer

# ── look & motion ──────────────────────────────────────────────────────────
MS_PER_PIXEL  = getattr(config, "CAPTION_MS_PER_PIXEL", 10)
EXIT_X        = getattr(config, "CAPTION_EXIT_X", -500)
FONT_PX       = getattr(config, "CAPTION_FONT_PX", 18)
TEXT_COLOR    = getattr(config, "CAPTION_COLOR", (255, 255, 255))
SHADOW_COLOR  = getattr(config, "CAPTION_SHADOW", (0, 0, 0))
SHADOW_OFFSET = getattr(config, "CAPTION_SHADOW_OFFSET", (1, 1))

pygame.font.init()


# ── one scrolling caption ──────────────────────────────────────────────────
@dataclass
class Caption:
    text: str
    lane: int
    y: int
    start: float                 # clock time the scroll began
    duration: float              # seconds from start_x to end_x
    start_x: int
    end_x: int = EXIT_X
    _surf: Optional[pygame.Surface] = field(default=None, repr=False)

    def x_at(self, now: float) -> int:
        """Linear interpolation between start_x and end_x."""
        if self.duration <= 0:
            return self.end_x
        p = min(1.0, max(0.0, (now - self.start) / self.duration))
        return int(round(self.start_x + (self.end_x - self.start_x) * p))

    def finished(self, now: float) -> bool:
        return now - self.start >= self.duration


def _render_text(text: str, font: pygame.font.Font) -> pygame.Surface:
    """White text over a dark copy shifted by SHADOW_OFFSET."""
    fg = font.render(text, True, TEXT_COLOR)
    bg = font.render(text, True, SHADOW_COLOR)
    dx, dy = SHADOW_OFFSET
    surf = pygame.Surface(
        (fg.get_width() + abs(dx), fg.get_height() + abs(dy)),
        pygame.SRCALPHA,
    )
    surf.blit(bg, (max(0, dx), max(0, dy)))
    surf.blit(fg, (max(0, -dx), max(0, -dy)))
    return surf


# ── overlay ────────────────────────────────────────────────────────────────
class CaptionOverlay:
    """Owns the live captions, the lane scheduler and its cadence timer."""

    def __init__(self,
                 scheduler: Optional[LaneScheduler] = None,
                 enabled: bool = getattr(config, "SHOW_CAPTIONS", True),
                 tick_sec: float = CAPTION_TICK_SEC,
                 clock=time.monotonic) -> None:
        self.scheduler = scheduler or LaneScheduler()
        self.clock     = clock
        self.timer     = CadenceTimer(tick_sec, self.scheduler.tick, clock)
        self.captions: List[Caption] = []
        self.enabled   = False
        self._font: Optional[pygame.font.Font] = None
        if enabled:
            self.enable()

    # ---------------------------------------------------------------- toggle
    def is_visible(self) -> bool:
        return self.enabled

    def enable(self) -> None:
        if self.enabled:
            return
        self.enabled = True
        self.scheduler.reset()
        self.timer.restart()
        print("[captions] overlay on")

    def disable(self) -> None:
        if not self.enabled:
            return
        self.enabled = False
        self.clear()
        print("[captions] overlay off")

    def toggle(self) -> bool:
        if self.enabled:
            self.disable()
        else:
            self.enable()
        return self.enabled

    def clear(self) -> None:
        self.captions.clear()

    # ---------------------------------------------------------------- launch
    def launch(self, text: str, surface_size: tuple[int, int],
               now: Optional[float] = None) -> Optional[Caption]:
        """Start scrolling `text`; returns None when hidden or blank."""
        if not self.enabled or not text.strip():
            return None

        now  = self.clock() if now is None else now
        w, h = surface_size
        lane = self.scheduler.submit()
        cap  = Caption(
            text=text,
            lane=lane,
            y=lane * (h // LANE_COUNT),
            start=now,
            duration=w * MS_PER_PIXEL / 1000.0,
            start_x=w,
        )
        self.captions.append(cap)
        return cap

    # ---------------------------------------------------------------- per frame
    def update(self, now: Optional[float] = None) -> None:
        now = self.clock() if now is None else now
        if self.enabled:
            self.timer.poll(now)
        self.captions = [c for c in self.captions if not c.finished(now)]

    def draw(self, surface: pygame.Surface, now: Optional[float] = None) -> None:
        if not self.enabled or not self.captions:
            return
        now = self.clock() if now is None else now
        if self._font is None:
            if not pygame.font.get_init():      # host may have called pygame.quit()
                pygame.font.init()
            self._font = pygame.font.Font(None, FONT_PX)
            self._font.set_bold(True)

        for cap in self.captions:
            if cap._surf is None:
                cap._surf = _render_text(cap.text, self._font)
            surface.blit(cap._surf, (cap.x_at(now), cap.y))
