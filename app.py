#!/usr/bin/env python3
"""
app.py – floating-caption stage

Hosts the caption overlay in a Pygame window.  Picture decoding and
presentation belong to the external media engine; the stage paints a
plain background in their place.  Input arrives through events.py.
"""
from __future__ import annotations

import pygame

import config
from captions import CaptionOverlay
from events   import EventManager


# ── main application ───────────────────────────────────────────────────────
class CaptionStage:
    def __init__(self, overlay: CaptionOverlay | None = None):
        # window ----------------------------------------------------------
        pygame.init()
        self.fullscreen = config.FULLSCREEN
        self.screen = self._set_mode()
        self.clock  = pygame.time.Clock()

        # core state ------------------------------------------------------
        self.overlay = overlay or CaptionOverlay()
        self.running = False

    def _set_mode(self) -> pygame.Surface:
        return pygame.display.set_mode(
            (0, 0) if self.fullscreen else config.WINDOWED_SIZE,
            pygame.FULLSCREEN if self.fullscreen else 0,
        )

    # ── actions ----------------------------------------------------------
    def handle_action(self, act: dict) -> None:
        t = act["type"]
        if t == "quit":
            self.running = False
        elif t == "toggle_captions":
            self.overlay.toggle()
        elif t == "launch_caption":
            self.overlay.launch(act.get("text", ""), self.screen.get_size())
        elif t == "toggle_fullscreen":
            self.fullscreen ^= True
            self.screen = self._set_mode()
            # lanes are laid out against the old size
            self.overlay.clear()

    def step(self) -> None:
        """One frame: input, timers, draw."""
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self.running = False

        while (act := EventManager.poll()):
            self.handle_action(act)

        self.overlay.update()
        self.screen.fill(getattr(config, "BACKGROUND", (0, 0, 0)))
        self.overlay.draw(self.screen)
        pygame.display.flip()

    # ── main loop ---------------------------------------------------------
    def run(self):
        self.running = True
        while self.running:
            self.step()
            self.clock.tick(config.FPS)
        pygame.quit()


if __name__ == "__main__":
    CaptionStage().run()
