import asyncio
import contextlib
import json

import pytest
from typer.testing import CliRunner

from wsinvoker import __version__
from wsinvoker.cli import commands
from wsinvoker.cli.commands import app, call_remote


class _PeerConnection:
    """Fake websocket whose remote side implements only ``add``."""

    def __init__(self, reply: bool = True):
        self.reply = reply
        self.sent = []
        self._inbox: asyncio.Queue = asyncio.Queue()

    async def send(self, text):
        self.sent.append(text)
        frame = json.loads(text)
        if not self.reply:
            return
        name = frame["channelName"]
        if name == "add":
            payload = frame["payload"]
            out = {"channelName": "add-->DONE", "payload": payload["a"] + payload["b"]}
        elif not frame.get("suppressErrorReply"):
            out = {"channelName": f"{name}-->ERROR", "payload": {"message": "Method not implemented"}, "suppressErrorReply": True}
        else:
            return
        await self._inbox.put(json.dumps(out))

    def __aiter__(self):
        return self

    async def __anext__(self):
        return await self._inbox.get()


def _connect_to(conn):
    @contextlib.asynccontextmanager
    async def _connect(_url):
        yield conn

    return _connect


@pytest.mark.asyncio
async def test_call_remote_returns_done():
    conn = _PeerConnection()
    kind, value = await call_remote("ws://x", "add", {"a": 1, "b": -2}, connect=_connect_to(conn))
    assert (kind, value) == ("done", -1)


@pytest.mark.asyncio
async def test_call_remote_returns_error_for_unknown_method():
    conn = _PeerConnection()
    kind, value = await call_remote("ws://x", "mul", {"a": 1}, connect=_connect_to(conn))
    assert kind == "error"
    assert value["message"] == "Method not implemented"


@pytest.mark.asyncio
async def test_call_remote_times_out_when_suppressed():
    conn = _PeerConnection()
    kind, value = await call_remote(
        "ws://x", "mul", None, timeout_s=0.1, suppress_error_reply=True, connect=_connect_to(conn)
    )
    assert (kind, value) == ("timeout", None)
    assert json.loads(conn.sent[0])["suppressErrorReply"] is True


def test_version_command():
    result = CliRunner().invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_call_command_rejects_bad_payload():
    result = CliRunner().invoke(app, ["call", "ws://127.0.0.1:1", "add", "--payload", "{oops"])
    assert result.exit_code == 1


def test_call_command_prints_result(monkeypatch, tmp_path):
    async def _fake_call_remote(url, method, payload, **kwargs):
        assert (url, method, payload) == ("ws://h", "add", {"a": 1, "b": 2})
        return "done", 3

    monkeypatch.setattr(commands, "call_remote", _fake_call_remote)
    result = CliRunner().invoke(
        app, ["call", "ws://h", "add", "-p", '{"a": 1, "b": 2}', "--config", str(tmp_path / "none.json")]
    )
    assert result.exit_code == 0
    assert "3" in result.stdout


def test_call_command_exit_codes(monkeypatch, tmp_path):
    outcomes = iter([("error", {"message": "x"}), ("timeout", None)])

    async def _fake_call_remote(url, method, payload, **kwargs):
        return next(outcomes)

    monkeypatch.setattr(commands, "call_remote", _fake_call_remote)
    cfg = str(tmp_path / "none.json")
    assert CliRunner().invoke(app, ["call", "ws://h", "m", "--config", cfg]).exit_code == commands.EXIT_ERROR_REPLY
    assert CliRunner().invoke(app, ["call", "ws://h", "m", "--config", cfg]).exit_code == commands.EXIT_TIMEOUT
