# Savesync Action Dispatcher
# Runs action handlers on a background event loop

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Optional

from savesync.sync.handlers import ActionHandlers, ActionResult
from savesync.sync.status import ItemAction

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """
    Submits actions to handlers running on a dedicated event loop thread.

    The calling thread never waits on network I/O unless it chooses to
    block on the returned future. Usable as a context manager.
    """

    def __init__(self, handlers: ActionHandlers, *, name: str = "savesync-dispatcher"):
        self.handlers = handlers
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._pending: set[Future] = set()
        self._guard = threading.Lock()
        self._closed = False

    @property
    def running(self) -> bool:
        """Check if the loop thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "ActionDispatcher":
        """Start the loop thread. Calling start twice is a no-op."""
        with self._guard:
            if self._closed:
                raise RuntimeError("Dispatcher is closed")
            if self.running:
                return self

            self._loop = asyncio.new_event_loop()
            ready = threading.Event()

            def _run_loop() -> None:
                asyncio.set_event_loop(self._loop)
                self._loop.call_soon(ready.set)
                self._loop.run_forever()

            self._thread = threading.Thread(target=_run_loop, name=self.name, daemon=True)
            self._thread.start()
            ready.wait()
            logger.debug("Dispatcher %s started", self.name)
            return self

    def submit(self, action: ItemAction, item_id: str) -> "Future[ActionResult]":
        """
        Schedule an action.

        Args:
            action: The user intent.
            item_id: Record id.

        Returns:
            Future resolving to the ActionResult.

        Raises:
            RuntimeError: If the dispatcher has been closed.
        """
        if self._closed:
            raise RuntimeError("Dispatcher is closed")
        if not self.running:
            self.start()

        future = asyncio.run_coroutine_threadsafe(self.handlers.run(action, item_id), self._loop)
        with self._guard:
            self._pending.add(future)
        future.add_done_callback(self._finished)
        return future

    def archive(self, item_id: str) -> "Future[ActionResult]":
        return self.submit(ItemAction.ARCHIVE, item_id)

    def unarchive(self, item_id: str) -> "Future[ActionResult]":
        return self.submit(ItemAction.UNARCHIVE, item_id)

    def delete(self, item_id: str) -> "Future[ActionResult]":
        return self.submit(ItemAction.DELETE, item_id)

    def _finished(self, future: Future) -> None:
        with self._guard:
            self._pending.discard(future)
        if not future.cancelled() and future.exception() is not None:
            logger.error("Action failed: %s", future.exception())

    def close(self, *, timeout: Optional[float] = None) -> None:
        """
        Wait for in-flight actions, then stop the loop thread.

        Args:
            timeout: Maximum seconds to wait for each in-flight action.
        """
        with self._guard:
            if self._closed:
                return
            self._closed = True
            pending = list(self._pending)

        for future in pending:
            try:
                future.result(timeout=timeout)
            except Exception as e:
                logger.warning("In-flight action did not complete cleanly: %s", e)

        if self._loop is not None and self._thread is not None:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join()
            self._loop.close()
        logger.debug("Dispatcher %s closed", self.name)

    def __enter__(self) -> "ActionDispatcher":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()
