from __future__ import annotations

import pytest

from app.services import LiveChannelHub

pytestmark = pytest.mark.anyio


class RecordingSocket:
    def __init__(self) -> None:
        self.frames: list = []

    async def send_text(self, data: str) -> None:
        self.frames.append(data)

    async def send_bytes(self, data: bytes) -> None:
        self.frames.append(data)


class ClosedSocket:
    async def send_text(self, data: str) -> None:
        raise RuntimeError('Cannot call "send" once a close message has been sent.')

    async def send_bytes(self, data: bytes) -> None:
        raise RuntimeError('Cannot call "send" once a close message has been sent.')


async def test_relay_skips_sender_and_other_rooms() -> None:
    hub = LiveChannelHub()
    alice, bob, carol = RecordingSocket(), RecordingSocket(), RecordingSocket()
    hub.attach("room-1", "alice", alice)
    hub.attach("room-1", "bob", bob)
    hub.attach("room-2", "carol", carol)

    delivered = await hub.relay("room-1", "alice", "hello")
    await hub.relay("room-1", "bob", b"\x00\x01")

    assert delivered == 1
    assert alice.frames == [b"\x00\x01"]
    assert bob.frames == ["hello"]
    assert carol.frames == []


async def test_unreachable_peer_is_detached() -> None:
    hub = LiveChannelHub()
    hub.attach("room-1", "alice", RecordingSocket())
    hub.attach("room-1", "ghost", ClosedSocket())
    assert hub.peers("room-1") == 2

    delivered = await hub.relay("room-1", "alice", "hello")

    assert delivered == 0
    assert hub.peers("room-1") == 1


def test_detach_last_socket_forgets_room() -> None:
    hub = LiveChannelHub()
    hub.attach("room-1", "alice", RecordingSocket())

    hub.detach("room-1", "alice")
    hub.detach("room-1", "alice")

    assert hub.peers("room-1") == 0
