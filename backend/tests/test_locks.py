import asyncio

from careertrack.services.locks import KeyedLock


def test_same_key_is_serialized():
    locks = KeyedLock()
    events = []

    async def worker(name):
        async with locks.hold("user-1"):
            events.append(f"{name}-start")
            await asyncio.sleep(0.01)
            events.append(f"{name}-end")

    async def main():
        await asyncio.gather(worker("a"), worker("b"))

    asyncio.run(main())
    assert events in (
        ["a-start", "a-end", "b-start", "b-end"],
        ["b-start", "b-end", "a-start", "a-end"],
    )
    assert len(locks) == 0


def test_different_keys_do_not_block_each_other():
    locks = KeyedLock()
    events = []

    async def worker(key):
        async with locks.hold(key):
            events.append(f"{key}-start")
            await asyncio.sleep(0.01)
            events.append(f"{key}-end")

    async def main():
        await asyncio.gather(worker("u1"), worker("u2"))

    asyncio.run(main())
    assert events[:2] == ["u1-start", "u2-start"]
