"""
File system watcher feeding pseudo files into the analysis engine.

This module provides:
- Watchdog-based file monitoring
- Coalescing of duplicate notifications (editors emit several per save)
- Translation of file events into engine open/change/close calls

The observer thread only queues paths; every engine call happens on the
thread that runs `flush_pending()`.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

from watchdog.events import (
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .engine import AnalysisEngine
from .models import TextEdit

logger = logging.getLogger(__name__)


def path_uri(path: Path) -> str:
    return path.resolve().as_uri()


def sync_file(engine: AnalysisEngine, path: Path) -> None:
    """Bring the engine's copy of `path` in line with the file on disk."""
    uri = path_uri(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError):
        engine.document_closed(uri)
        return

    current = engine.store.get(uri)
    if current is None:
        engine.document_opened(uri, text, 1)
    elif current.text != text:
        engine.document_changed(uri, [TextEdit(range=None, text=text)], current.version + 1)


class DocumentEventHandler(FileSystemEventHandler):
    """Queues relevant file paths until the next flush.

    Explicitly watched files are always relevant whatever their suffix.
    When `directories` is given, other paths must lie under one of them.
    """

    def __init__(
        self,
        engine: AnalysisEngine,
        extensions: list[str],
        files: list[Path] | None = None,
        directories: list[Path] | None = None,
    ):
        super().__init__()
        self.engine = engine
        self.extensions = {e.lower() for e in extensions}
        self.files = {p.resolve() for p in files or []}
        self.directories = None if directories is None else [d.resolve() for d in directories]
        self._pending: set[Path] = set()
        self._lock = threading.Lock()

    def _is_relevant(self, path: str) -> bool:
        p = Path(path)
        resolved = p.resolve()
        if resolved in self.files:
            return True
        if p.name.startswith("."):
            return False
        if p.suffix.lower() not in self.extensions:
            return False
        if self.directories is None:
            return True
        return any(resolved.is_relative_to(d) for d in self.directories)

    def _queue(self, path: str | bytes) -> None:
        path_str = path.decode() if isinstance(path, bytes) else path
        if not self._is_relevant(path_str):
            return
        with self._lock:
            self._pending.add(Path(path_str))

    def flush_pending(self) -> int:
        """Sync every queued path into the engine; returns how many."""
        with self._lock:
            pending, self._pending = self._pending, set()
        for path in sorted(pending):
            logger.debug(f"Syncing {path}")
            sync_file(self.engine, path)
        return len(pending)

    def on_created(self, event: FileCreatedEvent) -> None:
        if not event.is_directory:
            self._queue(event.src_path)

    def on_modified(self, event: FileModifiedEvent) -> None:
        if not event.is_directory:
            self._queue(event.src_path)

    def on_deleted(self, event: FileDeletedEvent) -> None:
        if not event.is_directory:
            self._queue(event.src_path)

    def on_moved(self, event: FileMovedEvent) -> None:
        if not event.is_directory:
            self._queue(event.src_path)
            self._queue(event.dest_path)


def watch_paths(engine: AnalysisEngine, roots: list[Path], extensions: list[str]) -> tuple[Observer, DocumentEventHandler]:
    """
    Start watching `roots` for changes to pseudo files.

    Directory roots are watched recursively. A file root is watched on its
    own; its siblings are ignored.

    Returns:
        Tuple of (observer, handler) - caller should call observer.stop() to stop watching
    """
    directories = [root for root in roots if root.is_dir()]
    files = [root for root in roots if not root.is_dir()]
    handler = DocumentEventHandler(engine, extensions, files=files, directories=directories)

    observer = Observer()
    scheduled: set[Path] = set()
    for directory in directories:
        observer.schedule(handler, str(directory), recursive=True)
        scheduled.add(directory.resolve())
    for parent in {f.resolve().parent for f in files}:
        if parent not in scheduled and parent.is_dir():
            observer.schedule(handler, str(parent), recursive=False)
    observer.start()
    return observer, handler


def run_watch_loop(engine: AnalysisEngine, roots: list[Path], extensions: list[str], interval: float = 0.5) -> None:
    """Run until interrupted, flushing queued file events every `interval`."""
    observer, handler = watch_paths(engine, roots, extensions)
    try:
        while True:
            time.sleep(interval)
            handler.flush_pending()
    except KeyboardInterrupt:
        observer.stop()

    observer.join()
