"""Sample hook implementations used across the test suite."""

import io
from typing import IO

from loghooks.hooks import FileLifecycleHooks


class TaggedStream(io.BufferedIOBase):
    """Writable stream that prefixes every write with ``[tag]``."""

    def __init__(self, inner: IO[bytes], tag: str) -> None:
        super().__init__()
        self.inner = inner
        self.tag = tag

    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:  # type: ignore[override]
        self.inner.write(f"[{self.tag}]".encode() + bytes(data))
        return len(data)


class TagHooks(FileLifecycleHooks):
    """Wraps the opened stream in a TaggedStream."""

    def __init__(self, tag: str = "tag") -> None:
        self.tag = tag

    def on_file_opened(self, stream: IO[bytes], encoding: str | None) -> IO[bytes]:
        return TaggedStream(stream, self.tag)


class RecordingHooks(FileLifecycleHooks):
    """Records every event it sees into a shared list."""

    def __init__(self, name: str = "recorder", events: list[tuple[str, str, object]] | None = None) -> None:
        self.name = name
        self.events = events if events is not None else []

    def on_file_opened(self, stream: IO[bytes], encoding: str | None) -> IO[bytes]:
        self.events.append((self.name, "opened", encoding))
        return stream

    def on_file_deleting(self, path: str) -> None:
        self.events.append((self.name, "deleting", path))


class FailingHooks(FileLifecycleHooks):
    """Raises the given error from both events."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def on_file_opened(self, stream: IO[bytes], encoding: str | None) -> IO[bytes]:
        raise self.error

    def on_file_deleting(self, path: str) -> None:
        raise self.error


class NotAHook:
    """Has nothing to do with file lifecycle hooks."""


def make_recorder(name: str = "factory") -> RecordingHooks:
    """Factory function used as a hook import target."""
    return RecordingHooks(name=name)
