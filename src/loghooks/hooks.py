"""File lifecycle hook capability.

Defines the FileLifecycleHooks base class that a log file writer calls when
it opens a file for writing and when it deletes a retired file.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from loghooks.chain import HookChain


class FileLifecycleHooks:
    """Observer of log file lifecycle events.

    Subclasses override only the events they care about; the defaults leave
    the stream untouched and ignore deletions.
    """

    def on_file_opened(self, stream: IO[bytes], encoding: str | None) -> IO[bytes]:
        """Called when a log file is opened for writing.

        Args:
            stream: Stream the writer would otherwise write to
            encoding: Text encoding the writer uses for log events

        Returns:
            The stream to write through, either ``stream`` itself or a new
            stream wrapping it
        """
        return stream

    def on_file_deleting(self, path: str) -> None:
        """Called when a retired log file is deleted during cleanup.

        Args:
            path: Path of the file being deleted
        """

    def chain_to(self, other: FileLifecycleHooks) -> HookChain:
        """Compose this hook with ``other``, this one running first.

        Example:
            hooks = GzipHooks().chain_to(HeaderWriter("File Header"))
        """
        from loghooks.chain import chain

        return chain(self, other)
