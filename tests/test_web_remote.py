"""Tests for the HTTP caption remote."""

import json
import threading
import types
import urllib.error
import urllib.parse
import urllib.request

import pytest

import web_remote
from captions import CaptionOverlay
from events import EventManager
from lane_scheduler import LaneScheduler


@pytest.fixture
def server():
    EventManager.drain()
    stage = types.SimpleNamespace(
        overlay=CaptionOverlay(scheduler=LaneScheduler(seed=2), enabled=True)
    )
    httpd = web_remote.make_server(stage, 0)
    threading.Thread(target=httpd.serve_forever, daemon=True).start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()
    EventManager.drain()


def _get(url):
    with urllib.request.urlopen(url, timeout=5) as r:
        return r.status, r.read()


class TestCaptionEndpoint:
    def test_caption_is_queued(self, server):
        status, _ = _get(server + "/caption?" + urllib.parse.urlencode({"text": " hi there "}))
        assert status == 204
        assert EventManager.poll() == {"type": "launch_caption", "text": "hi there"}

    @pytest.mark.parametrize("query", ["", "text=", "text=%20%20",
                                       "text=" + "x" * (web_remote.MAX_CHARS + 1)])
    def test_bad_caption_rejected(self, server, query):
        with pytest.raises(urllib.error.HTTPError) as exc:
            _get(server + "/caption?" + query)
        assert exc.value.code == 400
        assert EventManager.poll() is None


class TestActionEndpoint:
    @pytest.mark.parametrize("cmd,action", [
        ("toggle", "toggle_captions"),
        ("fullscreen", "toggle_fullscreen"),
        ("quit", "quit"),
    ])
    def test_known_commands(self, server, cmd, action):
        status, _ = _get(server + "/action?cmd=" + cmd)
        assert status == 204
        assert EventManager.poll() == {"type": action}

    def test_unknown_command(self, server):
        with pytest.raises(urllib.error.HTTPError) as exc:
            _get(server + "/action?cmd=next")
        assert exc.value.code == 400


class TestPages:
    def test_diag_reports_scheduler(self, server):
        status, body = _get(server + "/diag")
        data = json.loads(body)
        assert status == 200
        assert data["captions"]["mode"] == "normal"
        assert data["captions"]["enabled"] is True
        assert data["captions"]["live_captions"] == 0
        assert "cpu_percent" in data

    def test_index_page(self, server):
        status, body = _get(server + "/")
        assert status == 200
        assert b"Caption Remote" in body

    def test_unknown_path(self, server):
        with pytest.raises(urllib.error.HTTPError) as exc:
            _get(server + "/nope")
        assert exc.value.code == 404


def test_fmt_duration():
    assert web_remote._fmt_duration(90061) == "1d 01:01:01"
