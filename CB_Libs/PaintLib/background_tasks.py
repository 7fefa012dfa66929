"""
Run blocking work (network fetches, drawing generation) off the GUI thread.

Work runs on a ThreadPoolExecutor. Outcomes come back through Qt signals,
which Qt queues onto the thread that owns the receiving object, so handlers
connected from the window always run on the GUI thread.

Classes:
    BackgroundTasks: Submits callables and reports their results as signals
"""

import concurrent.futures
import logging
from typing import Any, Callable, Optional

from PyQt5.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class BackgroundTasks(QObject):
    """Thread pool whose results are delivered as (tag, value) signals."""

    succeeded = pyqtSignal(object, object)
    failed = pyqtSignal(object, object)

    def __init__(self, parent: Optional[QObject] = None, max_workers: int = 2) -> None:
        super().__init__(parent)
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="coloring-book"
        )

    def submit(self, tag: Any, func: Callable[..., Any], *args: Any) -> concurrent.futures.Future:
        """
        Run func(*args) in the pool.

        Args:
            tag: Opaque value passed back with the outcome
            func: Blocking callable
            *args: Arguments for func

        Returns:
            The Future tracking the call
        """
        future = self._executor.submit(func, *args)
        future.add_done_callback(lambda done: self._report(tag, done))
        return future

    def _report(self, tag: Any, future: concurrent.futures.Future) -> None:
        if future.cancelled():
            return

        error = future.exception()
        if error is not None:
            logger.debug(f"Background task {tag!r} failed: {error}")
            self.failed.emit(tag, error)
        else:
            self.succeeded.emit(tag, future.result())

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
