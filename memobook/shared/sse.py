import asyncio, json, logging
from typing import AsyncIterator, Dict, Set, Tuple

logger = logging.getLogger(__name__)

# channel -> set of (subscriber loop, subscriber queue)
_SUBS: Dict[str, Set[Tuple[asyncio.AbstractEventLoop, asyncio.Queue]]] = {}

MEMOS_CHANNEL = "memos"

def _get_room(channel: str) -> Set[Tuple[asyncio.AbstractEventLoop, asyncio.Queue]]:
    return _SUBS.setdefault(channel, set())

def _offer(q: asyncio.Queue, msg: tuple):
    try:
        q.put_nowait(msg)
    except asyncio.QueueFull:
        pass

def publish(channel: str, event: str, data: dict):
    """
    Fan an event out to every subscriber of `channel`.
    Safe to call from worker threads: delivery happens on each subscriber's loop.
    """
    msg = (event, data)
    for loop, q in list(_get_room(channel)):
        try:
            loop.call_soon_threadsafe(_offer, q, msg)
        except RuntimeError:
            # subscriber loop already closed
            _get_room(channel).discard((loop, q))

def notifier(channel: str = MEMOS_CHANNEL):
    """Return a `notify(event, data)` callable bound to one channel."""
    def _notify(event: str, data: dict):
        logger.debug("publish %s/%s %s", channel, event, data)
        publish(channel, event, data)
    return _notify

async def subscribe(channel: str) -> asyncio.Queue:
    q: asyncio.Queue = asyncio.Queue(maxsize=100)
    _get_room(channel).add((asyncio.get_running_loop(), q))
    return q

def unsubscribe(channel: str, q: asyncio.Queue):
    room = _get_room(channel)
    for entry in [e for e in room if e[1] is q]:
        room.discard(entry)

def subscriber_count(channel: str) -> int:
    return len(_get_room(channel))

def format_event(event: str, data: dict) -> bytes:
    payload = f"event: {event}\n" + f"data: {json.dumps(data, ensure_ascii=False)}\n\n"
    return payload.encode("utf-8")

async def sse_stream(channel: str) -> AsyncIterator[bytes]:
    """
    Yields Server-Sent Events for the given channel.
    """
    q = await subscribe(channel)
    try:
        yield b": connected\n\n"
        while True:
            event, data = await q.get()
            yield format_event(event, data)
    except asyncio.CancelledError:
        # client disconnected
        pass
    finally:
        unsubscribe(channel, q)
