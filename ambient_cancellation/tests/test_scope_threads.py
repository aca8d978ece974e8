"""Ambient scopes across OS threads and thread pools."""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from ambient_cancellation.base.cancellation import CancellationToken
from ambient_cancellation.scope import FlowThreadPoolExecutor, ScopeStackManager, bind, start_thread


def test_parallel_threads_keep_their_own_scope(manager: ScopeStackManager):
    workers = 8
    barrier = threading.Barrier(workers)
    results: dict[int, bool] = {}

    def run(idx: int) -> None:
        token = CancellationToken()
        with manager.enter(token):
            barrier.wait()
            ok = all(manager.retrieve() is token for _ in range(500))
            barrier.wait()
        results[idx] = ok and manager.retrieve() is CancellationToken.NONE

    threads = [threading.Thread(target=run, args=(i,)) for i in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == {i: True for i in range(workers)}  # nosec B101


def test_start_thread_inherits_scope(manager: ScopeStackManager):
    token = CancellationToken()
    seen: list[CancellationToken] = []
    with manager.enter(token):
        thread = start_thread(lambda: seen.append(manager.retrieve()), name="inherit")
        thread.join()
    assert seen == [token]  # nosec B101


def test_thread_scope_changes_stay_in_thread(manager: ScopeStackManager):
    outer = CancellationToken()
    entered = threading.Event()
    done = threading.Event()

    def child() -> None:
        manager.enter(CancellationToken())  # never released
        entered.set()
        done.wait(5)

    with manager.enter(outer):
        thread = start_thread(child)
        entered.wait(5)
        assert manager.retrieve() is outer  # nosec B101
        done.set()
        thread.join()
        assert manager.retrieve() is outer  # nosec B101


def test_bind_captures_context_at_bind_time(manager: ScopeStackManager):
    token = CancellationToken()
    with manager.enter(token):
        bound = bind(manager.retrieve)
    assert manager.retrieve() is CancellationToken.NONE  # nosec B101
    assert bound() is token  # nosec B101
    with ThreadPoolExecutor(max_workers=2) as pool:
        assert list(pool.map(lambda _: bound(), range(4))) == [token] * 4  # nosec B101


def test_flow_pool_jobs_see_submitter_scope(manager: ScopeStackManager):
    token = CancellationToken()
    with FlowThreadPoolExecutor(max_workers=1) as pool:
        with manager.enter(token):
            inside = pool.submit(manager.retrieve).result()
            mapped = list(pool.map(lambda _: manager.retrieve(), range(3)))
        outside = pool.submit(manager.retrieve).result()
    assert inside is token  # nosec B101
    assert mapped == [token] * 3  # nosec B101
    assert outside is CancellationToken.NONE  # nosec B101


def test_flow_pool_worker_reuse_does_not_leak_scope(manager: ScopeStackManager):
    def enter_and_forget() -> CancellationToken:
        token = CancellationToken()
        manager.enter(token)
        return manager.retrieve()

    with FlowThreadPoolExecutor(max_workers=1) as pool:
        first = pool.submit(enter_and_forget).result()
        second = pool.submit(manager.retrieve).result()
    assert first.can_be_cancelled is True  # nosec B101
    assert second is CancellationToken.NONE  # nosec B101


def test_concurrent_double_release_happens_once(manager: ScopeStackManager):
    outer_token = CancellationToken()
    outer = manager.enter(outer_token)
    inner = manager.enter(CancellationToken())
    barrier = threading.Barrier(4)

    def release() -> None:
        barrier.wait()
        inner.release()

    threads = [threading.Thread(target=release) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert inner.released is True  # nosec B101
    assert manager.retrieve() is outer_token  # nosec B101
    assert manager.active_scope_count() == 1  # nosec B101
    outer.release()
