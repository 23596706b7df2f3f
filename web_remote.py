#!/usr/bin/env python3
"""
web_remote.py  –  caption submission + diagnostics + remote control

Endpoints
---------
/                 → HTML page with a caption box and buttons
/caption?text=…   → queue one floating caption
/action?cmd=…     → inject control commands (toggle, fullscreen, quit)
/diag, /data      → JSON object of diagnostic metrics + lane scheduler state

Handlers never touch the overlay directly; they post actions that the
main loop drains, so the lane scheduler only ever runs on one thread.
"""

from __future__ import annotations
import http.server
import socketserver
import threading
import urllib.parse
import json
import time
import os
import traceback
import psutil
import platform
from typing import TYPE_CHECKING, Any

from events import EventManager
import config

if TYPE_CHECKING:                       # avoid circular import at runtime
    from app import CaptionStage

MAX_CHARS = getattr(config, "CAPTION_MAX_CHARS", 120)

# ── diagnostics refresh cadence ───────────────────────────────────────────
_last_diag_time = 0.0
_diag_interval  = getattr(config, "DIAG_REFRESH_INTERVAL", 1.0)

# ── global diagnostic store ───────────────────────────────────────────────
monitor_data: dict[str, Any] = {
    "cpu_percent":       0.0,
    "mem_used":          "0 MB",
    "mem_total":         "0 MB",
    "script_uptime":     "0d 00:00:00",
    "load_avg":          "",
    "last_http_crash":   "",
    "python_version":    platform.python_version(),
}

_script_start = time.monotonic()

_COMMANDS = {
    "toggle":     "toggle_captions",
    "fullscreen": "toggle_fullscreen",
    "quit":       "quit",
}


# ── helpers ────────────────────────────────────────────────────────────────
def _fmt_duration(secs: float) -> str:
    d, rem = divmod(int(secs), 86400)
    h, rem = divmod(rem, 3600)
    m, s   = divmod(rem, 60)
    return f"{d}d {h:02}:{m:02}:{s:02}"


def _maybe_update_diagnostics() -> None:
    global _last_diag_time
    now = time.monotonic()
    if now - _last_diag_time >= _diag_interval:
        _last_diag_time = now
        _update_diagnostics()


def _update_diagnostics() -> None:
    """Refresh CPU, memory, uptime and load in `monitor_data`."""
    monitor_data["cpu_percent"] = round(psutil.cpu_percent(), 1)
    vm = psutil.virtual_memory()
    monitor_data["mem_used"]  = f"{vm.used // 1024**2} MB"
    monitor_data["mem_total"] = f"{vm.total // 1024**2} MB"
    monitor_data["script_uptime"] = _fmt_duration(time.monotonic() - _script_start)
    try:
        la = os.getloadavg()
        monitor_data["load_avg"] = ", ".join(f"{x:.2f}" for x in la)
    except (AttributeError, OSError):
        monitor_data["load_avg"] = "N/A"


def _caption_state(stage: "CaptionStage") -> dict[str, Any]:
    ov = stage.overlay
    state = ov.scheduler.snapshot()
    state["enabled"] = ov.enabled
    state["live_captions"] = len(ov.captions)
    return state


# ── reusable threaded HTTP server ──────────────────────────────────────────
class ReusableTCPServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    daemon_threads      = True
    allow_reuse_address = True


# ── request handler ────────────────────────────────────────────────────────
class RemoteHandler(http.server.BaseHTTPRequestHandler):
    def log_message(self, *args):
        return  # silence default logging

    def do_GET(self):
        parsed = urllib.parse.urlparse(self.path)
        path, qs = parsed.path, parsed.query

        if path == "/":
            return self._serve_html()
        if path == "/caption":
            return self._serve_caption(qs)
        if path == "/action":
            return self._serve_action(qs)
        if path in ("/diag", "/data"):
            _maybe_update_diagnostics()
            data = dict(monitor_data)
            data["captions"] = _caption_state(self.server.stage)   # type: ignore
            return self._serve_json(data)

        self.send_error(404, "Not found")

    # ── helpers for each route ───────────────────────────────────────────
    def _serve_html(self):
        self.send_response(200)
        self.send_header("Content-Type", "text/html")
        self.end_headers()
        self.wfile.write(HTML_PAGE.encode("utf-8"))

    def _serve_json(self, obj: Any):
        b = json.dumps(obj).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(b)))
        self.end_headers()
        self.wfile.write(b)

    def _serve_caption(self, query: str):
        qs   = urllib.parse.parse_qs(query)
        text = qs.get("text", [""])[0].strip()
        if not text:
            return self.send_error(400, "Empty caption")
        if len(text) > MAX_CHARS:
            return self.send_error(400, f"Caption longer than {MAX_CHARS} chars")

        EventManager.post({"type": "launch_caption", "text": text})
        self.send_response(204)
        self.end_headers()

    def _serve_action(self, query: str):
        qs  = urllib.parse.parse_qs(query)
        cmd = qs.get("cmd", [""])[0]
        if cmd not in _COMMANDS:
            return self.send_error(400, "Unknown cmd")

        EventManager.post({"type": _COMMANDS[cmd]})
        self.send_response(204)
        self.end_headers()


# ── simple HTML UI ─────────────────────────────────────────────────────────
HTML_PAGE = """
<!doctype html><html><head><meta charset="utf-8">
<title>Caption Remote</title>
<style>
 body{background:#000;color:#0f0;font-family:monospace;padding:1em;}
 a.button,button{display:inline-block;margin:4px;padding:6px 12px;border:1px solid #0f0;
          background:#000;text-decoration:none;color:#0f0;font-family:monospace;}
 input{background:#000;color:#0f0;border:1px solid #0f0;padding:6px;width:30em;}
 pre{margin:0.5em 0;font-family:monospace;}
</style></head><body>
<h2>Caption Remote</h2>
<form onsubmit="send();return false;">
 <input id="text" maxlength="120" autocomplete="off">
 <button type="submit">Send</button>
</form>

<a class="button" href="/action?cmd=toggle">Toggle captions</a>
<a class="button" href="/action?cmd=fullscreen">Fullscreen</a>
<a class="button" href="/action?cmd=quit">Quit</a>

<div><h3>Diagnostics</h3><pre id="diag"></pre></div>

<script>
 async function send(){
   let box = document.getElementById('text');
   if(!box.value.trim()) return;
   await fetch('/caption?text=' + encodeURIComponent(box.value));
   box.value = '';
 }
 async function refreshUI(){
   try {
     let d  = await fetch('/diag');    let dg = await d.json();
     let txt = '';
     for (let [k,v] of Object.entries(dg)){
       txt += k.padEnd(20,' ') + JSON.stringify(v) + '\\n';
     }
     document.getElementById('diag').textContent = txt;
   } catch(e){
     console.error(e);
   }
 }
 setInterval(refreshUI, 500);
 refreshUI();
</script>
</body></html>
"""


# ── server bootstrap with auto-restart ────────────────────────────────────
def make_server(stage: "CaptionStage", port: int) -> ReusableTCPServer:
    httpd = ReusableTCPServer(("", port), RemoteHandler)
    httpd.stage = stage
    return httpd


def start(stage: "CaptionStage", port: int = getattr(config, "WEB_PORT", 8080)):
    def _serve_loop():
        while True:
            try:
                with make_server(stage, port) as httpd:
                    httpd.serve_forever()
            except Exception:
                monitor_data["last_http_crash"] = traceback.format_exc()
                time.sleep(1)

    threading.Thread(target=_serve_loop, daemon=True).start()
    print(f"[web_remote] caption remote listening on port {port}")
