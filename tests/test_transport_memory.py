import asyncio

import pytest

from wsinvoker.transport.base import Transport
from wsinvoker.transport.memory import MemoryTransport, create_memory_pair


def test_memory_transport_satisfies_protocol():
    assert isinstance(MemoryTransport(), Transport)


@pytest.mark.asyncio
async def test_pair_delivers_in_order():
    left, right = create_memory_pair()
    got = []
    right.on_message(got.append)
    await left.send("one")
    await left.send("two")
    assert got == []
    await asyncio.sleep(0)
    assert got == ["one", "two"]
    assert left.sent == ["one", "two"]


@pytest.mark.asyncio
async def test_frames_without_handler_are_dropped():
    left, right = create_memory_pair()
    await left.send("lost")
    await asyncio.sleep(0)
    got = []
    right.on_message(got.append)
    await asyncio.sleep(0)
    assert got == []


@pytest.mark.asyncio
async def test_closed_transport_refuses_send():
    left, right = create_memory_pair()
    left.close()
    with pytest.raises(ConnectionError):
        await left.send("x")
    got = []
    left.on_message(got.append)
    await right.send("y")
    await asyncio.sleep(0)
    assert got == []
