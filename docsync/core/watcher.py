"""Debounced watching of a single file.

Some editors save by writing a new file and renaming it over the old one,
which can end an OS watch on the original. The loop therefore drops its
subscription before every sync and opens a fresh one afterwards.
"""

import logging
import os
import queue
from pathlib import Path
from typing import Any, Callable

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

# How often a blocked wait wakes up so Ctrl+C is noticed on every platform
POLL_SECONDS = 1.0

CHANGE_EVENTS = {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}


class FileEventHandler(FileSystemEventHandler):
    """Forwards change events that touch one file onto a queue."""

    def __init__(self, path: Path, events: queue.Queue) -> None:
        super().__init__()
        self.path = path
        self.events = events
        self._real_path = os.path.realpath(path)

    def matches(self, event: FileSystemEvent) -> bool:
        if event.is_directory or event.event_type not in CHANGE_EVENTS:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        # FSEvents reports resolved paths, e.g. /private/tmp for /tmp
        return any(p and os.path.realpath(os.fsdecode(p)) == self._real_path for p in paths)

    def on_any_event(self, event: FileSystemEvent) -> None:
        if self.matches(event):
            logger.debug("%s: %s", event.event_type, event.src_path)
            self.events.put(event)


class FileSubscription:
    """A watchdog observer bound to one file."""

    def __init__(self, path: Path, events: queue.Queue) -> None:
        self.path = path
        self._observer = Observer()
        # watchdog watches directories; the handler filters down to the file
        self._observer.schedule(FileEventHandler(path, events), str(path.parent), recursive=False)

    def start(self) -> None:
        self._observer.start()

    def close(self) -> None:
        self._observer.stop()
        self._observer.join()


class WatchLoop:
    """Runs ``on_change`` once per settled burst of changes to ``path``."""

    def __init__(
        self,
        path: Path,
        on_change: Callable[[], Any],
        debounce_seconds: float = 0.5,
        subscribe: Callable[[Path, queue.Queue], Any] = FileSubscription,
    ) -> None:
        """Initialize the loop.

        Args:
            path: File to watch
            on_change: Called after each settled change
            debounce_seconds: Quiet period that ends a burst of events
            subscribe: Creates a subscription feeding events into a queue
        """
        self.path = Path(os.path.abspath(path))
        self.on_change = on_change
        self.debounce_seconds = debounce_seconds
        self._subscribe = subscribe
        self.subscription: Any = None
        self._events: queue.Queue = queue.Queue()

    def arm(self) -> None:
        """Open a new subscription on the watched file."""
        self._events = queue.Queue()
        self.subscription = self._subscribe(self.path, self._events)
        self.subscription.start()
        logger.debug("Watching %s", self.path)

    def close(self) -> None:
        """Tear down the active subscription, if any."""
        if self.subscription is not None:
            self.subscription.close()
            self.subscription = None

    def wait_for_change(self) -> int:
        """Block until a burst of events settles.

        Returns:
            Number of raw events collapsed into this change
        """
        while True:
            try:
                self._events.get(timeout=POLL_SECONDS)
                break
            except queue.Empty:
                continue
        count = 1
        while True:
            try:
                self._events.get(timeout=self.debounce_seconds)
            except queue.Empty:
                return count
            count += 1

    def step(self) -> None:
        """Wait for one settled change, run the callback, and re-arm."""
        if self.subscription is None:
            self.arm()

        count = self.wait_for_change()
        logger.debug("%d event(s) on %s settled", count, self.path)

        self.close()
        try:
            self.on_change()
        finally:
            self.arm()

    def run(self) -> None:
        """Watch until the process is interrupted."""
        self.arm()
        while True:
            self.step()
