#!/usr/bin/env python3
"""
events.py  – central hub

• Exposes a thread-safe queue so *any* source (web remote, tests, a
  future input layer) can inject high-level action dicts.
• The main loop is the only consumer, so everything an action touches
  (caption overlay, lane scheduler) is driven from one thread.
"""

from __future__ import annotations
import queue

Action = dict      # alias for readability

ACTIONS = ("quit", "toggle_captions", "launch_caption", "toggle_fullscreen")


class EventManager:
    _fifo: "queue.Queue[Action]" = queue.Queue()      # global, thread-safe

    # ── producer path ──────────────────────────────────────────────────
    @classmethod
    def post(cls, action: Action) -> None:
        """
        Any thread may call this to inject an already-formed action dict, e.g.:
            EventManager.post({"type": "launch_caption", "text": "hello"})
        """
        if action.get("type") not in ACTIONS:
            raise ValueError(f"unknown action {action.get('type')!r}")
        cls._fifo.put(action)

    # ── main-loop consumer ─────────────────────────────────────────────
    @classmethod
    def poll(cls) -> Action | None:
        """Return next queued action or None (non-blocking)."""
        try:
            return cls._fifo.get_nowait()
        except queue.Empty:
            return None

    @classmethod
    def drain(cls) -> None:
        """Drop anything still queued."""
        while cls.poll() is not None:
            pass
