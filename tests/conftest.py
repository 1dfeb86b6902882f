"""Pytest hooks and fixtures."""

import asyncio
import os

import pytest

from wsinvoker.rpc.invoker import Invoker
from wsinvoker.transport.memory import create_memory_pair


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "network: opens a local websocket server (skipped in CI)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip network tests when running in CI."""
    if os.environ.get("CI") != "true":
        return
    skip = pytest.mark.skip(reason="Opens local sockets (skipped in CI)")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip)


class RecordingLogger:
    """Event sink that keeps (event, details) pairs."""

    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def log(self, event, details):
        self.events.append((event, details))

    def names(self) -> list[str]:
        return [event for event, _ in self.events]


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def settle():
    """Let in-memory frames travel and every invoker finish its dispatches."""

    async def _settle(*invokers, rounds: int = 20):
        for _ in range(rounds):
            await asyncio.sleep(0)
            for invoker in invokers:
                await invoker.drain()

    return _settle


@pytest.fixture
def peers(recorder):
    """Two invokers connected through an in-memory transport pair."""
    left_t, right_t = create_memory_pair("caller", "callee")
    caller = Invoker(left_t, logger=recorder)
    callee = Invoker(right_t, logger=recorder)
    return caller, callee, left_t, right_t
