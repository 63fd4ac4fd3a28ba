from __future__ import annotations

import queue
import threading
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")
R = TypeVar("R")

_STOP = object()


class WorkerPool(Generic[T, R]):
    """
    Fixed number of worker threads pulling items from a bounded task queue.

    run() feeds every item, drains exactly one result per item from a single
    results queue and joins all workers before returning. Results come back
    in input order whatever order the workers finish in.
    """

    def __init__(self, func: Callable[[T], R], workers: int, name: str = "worker"):
        if workers < 1:
            raise ValueError(f"workers must be >= 1 (got {workers})")
        self.func = func
        self.workers = workers
        self.name = name

    def _work(self, tasks: queue.Queue, results: queue.Queue) -> None:
        while True:
            job = tasks.get()
            if job is _STOP:
                return
            index, item = job
            try:
                results.put((index, self.func(item), None))
            except BaseException as exc:
                # one result per item even for SystemExit, or run() never returns
                results.put((index, None, exc))

    def run(self, items: Sequence[T]) -> List[R]:
        tasks: queue.Queue = queue.Queue(maxsize=self.workers)
        results: "queue.Queue[Tuple[int, Optional[R], Optional[BaseException]]]" = queue.Queue()

        threads = [
            threading.Thread(
                target=self._work,
                args=(tasks, results),
                name=f"{self.name}-{i}",
                daemon=True,
            )
            for i in range(self.workers)
        ]
        for t in threads:
            t.start()

        # Workers never block on results, so feeding a full task queue always drains.
        for job in enumerate(items):
            tasks.put(job)
        for _ in threads:
            tasks.put(_STOP)

        ordered: List[Optional[R]] = [None] * len(items)
        errors: List[Tuple[int, BaseException]] = []
        for _ in range(len(items)):
            index, value, exc = results.get()
            if exc is not None:
                errors.append((index, exc))
            else:
                ordered[index] = value

        for t in threads:
            t.join()

        if errors:
            raise min(errors, key=lambda e: e[0])[1]
        return ordered  # type: ignore[return-value]
