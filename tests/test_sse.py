import asyncio
import threading

import pytest

from memobook.shared import sse
from memobook.memos.repository import MemoRepository
from memobook.memos.schemas import MemoFormData


@pytest.mark.asyncio
async def test_publish_reaches_subscriber():
    q = await sse.subscribe("t-basic")
    try:
        sse.publish("t-basic", "invalidate", {"op": "create"})
        assert await asyncio.wait_for(q.get(), 1) == ("invalidate", {"op": "create"})
    finally:
        sse.unsubscribe("t-basic", q)
    assert sse.subscriber_count("t-basic") == 0


@pytest.mark.asyncio
async def test_publish_from_worker_thread():
    q = await sse.subscribe("t-thread")
    try:
        t = threading.Thread(target=sse.publish, args=("t-thread", "invalidate", {"op": "delete"}))
        t.start()
        t.join()
        event, data = await asyncio.wait_for(q.get(), 1)
        assert (event, data["op"]) == ("invalidate", "delete")
    finally:
        sse.unsubscribe("t-thread", q)


@pytest.mark.asyncio
async def test_repository_notifier_feeds_bus(session_factory):
    q = await sse.subscribe("t-repo")
    try:
        repo = MemoRepository(session_factory, notify=sse.notifier("t-repo"))
        memo = await asyncio.to_thread(repo.create, MemoFormData(title="x", category="idea"))
        event, data = await asyncio.wait_for(q.get(), 1)
        assert event == "invalidate"
        assert data == {"op": "create", "id": memo.id}
    finally:
        sse.unsubscribe("t-repo", q)


@pytest.mark.asyncio
async def test_sse_stream_yields_events():
    gen = sse.sse_stream("t-stream")
    assert await gen.__anext__() == b": connected\n\n"
    sse.publish("t-stream", "invalidate", {"op": "update", "id": "m1"})
    chunk = await asyncio.wait_for(gen.__anext__(), 1)
    assert chunk.startswith(b"event: invalidate\n")
    assert b'"id": "m1"' in chunk
    await gen.aclose()
    assert sse.subscriber_count("t-stream") == 0


def test_publish_without_subscribers_is_noop():
    sse.publish("t-nobody", "invalidate", {})


def test_format_event():
    assert sse.format_event("invalidate", {"op": "clear", "id": None}) == (
        b'event: invalidate\ndata: {"op": "clear", "id": null}\n\n'
    )


@pytest.mark.asyncio
async def test_full_queue_drops_events():
    q = await sse.subscribe("t-full")
    try:
        for i in range(101):
            sse.publish("t-full", "invalidate", {"n": i})
        # deliveries are scheduled on the loop; let them run
        await asyncio.sleep(0)
        assert q.qsize() == 100
        assert (await q.get())[1] == {"n": 0}
    finally:
        sse.unsubscribe("t-full", q)
