"""Ambient scopes across asyncio suspension points and spawned tasks.

Async tests drive ``asyncio.run`` directly so no event-loop plugin is needed.
"""
from __future__ import annotations

import asyncio
import random

from ambient_cancellation.base.cancellation import CancellationToken
from ambient_cancellation.locator import AmbientCancellationTokenLocator
from ambient_cancellation.scope import ScopeStackManager


def test_scope_survives_await_points(manager: ScopeStackManager):
    token = CancellationToken()

    async def deep() -> CancellationToken:
        await asyncio.sleep(0)
        return manager.retrieve()

    async def main() -> list[CancellationToken]:
        seen = []
        async with manager.enter(token):
            seen.append(manager.retrieve())
            await asyncio.sleep(0.001)
            seen.append(await deep())
        seen.append(manager.retrieve())
        return seen

    assert asyncio.run(main()) == [token, token, CancellationToken.NONE]  # nosec B101


def test_concurrent_tasks_never_observe_each_other(manager: ScopeStackManager):
    tokens = [CancellationToken() for _ in range(20)]

    async def worker(token: CancellationToken) -> bool:
        with manager.enter(token):
            for _ in range(5):
                await asyncio.sleep(random.uniform(0, 0.002))
                if manager.retrieve() is not token:
                    return False
                with manager.enter(CancellationToken()):
                    await asyncio.sleep(0)
                if manager.retrieve() is not token:
                    return False
        return manager.retrieve() is CancellationToken.NONE

    async def main() -> list[bool]:
        return await asyncio.gather(*(worker(t) for t in tokens))

    assert all(asyncio.run(main()))  # nosec B101


def test_spawned_task_inherits_scope_without_entering(manager: ScopeStackManager):
    token = CancellationToken()

    async def child() -> CancellationToken:
        await asyncio.sleep(0)
        return manager.retrieve()

    async def main() -> CancellationToken:
        with manager.enter(token):
            task = asyncio.create_task(child())
            return await task

    assert asyncio.run(main()) is token  # nosec B101


def test_child_release_does_not_touch_parent_binding(manager: ScopeStackManager):
    outer = CancellationToken()

    async def child() -> None:
        with manager.enter(CancellationToken()):
            await asyncio.sleep(0)

    async def main() -> CancellationToken:
        with manager.enter(outer):
            await asyncio.gather(child(), child())
            return manager.retrieve()

    assert asyncio.run(main()) is outer  # nosec B101


def test_task_outliving_parent_scope_sees_nearest_live_ancestor(manager: ScopeStackManager):
    root, inner = CancellationToken(), CancellationToken()

    async def main() -> tuple[CancellationToken, CancellationToken]:
        proceed = asyncio.Event()

        async def child() -> tuple[CancellationToken, CancellationToken]:
            before = manager.retrieve()
            await proceed.wait()
            return before, manager.retrieve()

        with manager.enter(root):
            with manager.enter(inner):
                task = asyncio.create_task(child())
                await asyncio.sleep(0)
            proceed.set()
            return await task

    before, after = asyncio.run(main())
    assert before is inner  # nosec B101
    assert after is root  # nosec B101


def test_alpha_beta_scenario(manager: ScopeStackManager):
    locator = AmbientCancellationTokenLocator(manager)
    alpha, beta = CancellationToken(), CancellationToken()
    log: list[tuple[str, CancellationToken]] = []

    async def main() -> None:
        b_first_read = asyncio.Event()
        a_entered_beta = asyncio.Event()

        async def flow_b() -> None:
            log.append(("B1", locator.get()))
            b_first_read.set()
            await a_entered_beta.wait()
            log.append(("B2", locator.get()))

        alpha_scope = locator.set(alpha)
        b = asyncio.create_task(flow_b())
        await b_first_read.wait()

        beta_scope = locator.set(beta)
        log.append(("A-beta", locator.get()))
        a_entered_beta.set()
        await b

        beta_scope.release()
        log.append(("A-alpha", locator.get()))
        alpha_scope.release()
        log.append(("A-none", locator.get()))

    asyncio.run(main())
    assert log == [  # nosec B101
        ("B1", alpha),
        ("A-beta", beta),
        ("B2", alpha),
        ("A-alpha", alpha),
        ("A-none", CancellationToken.NONE),
    ]


def test_to_thread_inherits_scope(manager: ScopeStackManager):
    token = CancellationToken()

    async def main() -> CancellationToken:
        with manager.enter(token):
            return await asyncio.to_thread(manager.retrieve)

    assert asyncio.run(main()) is token  # nosec B101
