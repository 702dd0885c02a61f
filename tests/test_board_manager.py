"""Tests for the board service relay and viewer fan-out."""

from __future__ import annotations

import asyncio
import json

from managers.board_manager import BoardManager
from managers.websocket_manager import WebSocketManager
from splitflap import CanvasSize, DisplayContent
from tests.conftest import run


class SlowViewers:
    """Collects broadcasts, taking `delay` seconds for each one."""

    def __init__(self, delay):
        self.delay = delay
        self.messages = []

    async def broadcast(self, event_type, data):
        await asyncio.sleep(self.delay)
        self.messages.append((event_type, data))


class FakeSocket:
    def __init__(self, delay=0):
        self.delay = delay
        self.sent = []

    async def accept(self):
        pass

    async def send_text(self, message):
        await asyncio.sleep(self.delay)
        self.sent.append(json.loads(message))


def replay(messages):
    """Board as a viewer would reconstruct it from the messages it received."""
    board = []
    for event_type, data in messages:
        if event_type == "board_state":
            board = list(data["cells"])
        elif event_type == "geometry_changed":
            board = (board + [" "] * data["capacity"])[:data["capacity"]]
        elif event_type == "cell_updated":
            board[data["index"]] = data["symbol"]
    return board


def cell_messages(messages):
    return [data for event_type, data in messages if event_type == "cell_updated"]


class TestEventRelay:
    def test_slow_viewer_gets_coalesced_updates(self, board_config):
        async def scenario():
            viewers = SlowViewers(0.05)
            manager = BoardManager(board_config, viewers)
            await manager.start(CanvasSize(125, 25))
            await manager.set_content(DisplayContent("ZZZZZ"))
            await manager.controller.wait_idle()
            backlog = manager.pending_event_count()
            await manager.flush()
            await manager.stop()
            return viewers.messages, backlog

        messages, backlog = run(scenario())
        # 5 flaps x 26 flips each were produced while the first send was in flight
        assert backlog <= 6
        assert len(cell_messages(messages)) < 20
        assert messages[0][0] == "geometry_changed"
        assert replay(messages) == list("ZZZZZ")

    def test_backlog_limit_falls_back_to_full_state(self, board_config):
        async def scenario():
            viewers = SlowViewers(0.05)
            manager = BoardManager(board_config, viewers, max_pending_events=3)
            await manager.start(CanvasSize(125, 25))
            await manager.set_content(DisplayContent("ZZZZZ"))
            await manager.controller.wait_idle()
            backlog = manager.pending_event_count()
            await manager.flush()
            await manager.stop()
            return viewers.messages, backlog

        messages, backlog = run(scenario())
        assert backlog <= 3
        assert "board_state" in [event_type for event_type, _ in messages]
        assert replay(messages) == list("ZZZZZ")

    def test_geometry_change_keeps_event_order(self, board_config):
        async def scenario():
            viewers = SlowViewers(0.01)
            manager = BoardManager(board_config, viewers)
            await manager.start(CanvasSize(125, 25))
            await manager.set_content(DisplayContent("HELLO"))
            await manager.controller.wait_idle()
            await manager.set_canvas_size(CanvasSize(50, 25))
            await manager.controller.wait_idle()
            await manager.flush()
            await manager.stop()
            return viewers.messages

        messages = run(scenario())
        assert [m for m in messages if m[0] == "geometry_changed"][-1][1]["capacity"] == 2
        assert replay(messages) == ["H", "E"]

    def test_runs_without_viewers(self, board_config):
        async def scenario():
            manager = BoardManager(board_config)
            await manager.start(CanvasSize(125, 25))
            await manager.set_content(DisplayContent("HI"))
            await manager.controller.wait_idle()
            await manager.flush()
            state = manager.get_state()
            await manager.stop()
            return state, manager.pending_event_count()

        state, pending = run(scenario())
        assert state["cells"] == ["H", "I", " ", " ", " "]
        assert pending == 0


class TestWebSocketManager:
    def test_connect_sends_board_state(self):
        async def scenario():
            manager = WebSocketManager()
            socket = FakeSocket()
            await manager.connect(socket, {"cells": ["A"]})
            return manager, socket

        manager, socket = run(scenario())
        assert socket.sent == [{"event": "board_state", "data": {"cells": ["A"]}}]
        assert manager.get_connection_count() == 1

    def test_stalled_viewer_is_dropped(self):
        async def scenario():
            manager = WebSocketManager(send_timeout=0.05)
            fast, stalled = FakeSocket(), FakeSocket(delay=1)
            await manager.connect(fast)
            await manager.connect(stalled)
            await manager.broadcast("cell_updated", {"index": 0, "symbol": "A"})
            return manager, fast, stalled

        manager, fast, stalled = run(scenario())
        assert fast.sent == [{"event": "cell_updated", "data": {"index": 0, "symbol": "A"}}]
        assert stalled.sent == []
        assert manager.get_connection_count() == 1

    def test_disconnect(self):
        async def scenario():
            manager = WebSocketManager()
            socket = FakeSocket()
            await manager.connect(socket)
            await manager.disconnect(socket)
            return manager

        assert run(scenario()).get_connection_count() == 0
