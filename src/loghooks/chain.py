"""Chaining of file lifecycle hooks.

A HookChain owns two hooks and forwards each lifecycle event to the first,
then the second. Stream wrapping is threaded through both, so the second
hook's wrapper ends up outermost:

    chain(a, b).on_file_opened(s, enc) == b.on_file_opened(a.on_file_opened(s, enc), enc)

Chains are hooks themselves and nest into pipelines of any length.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from typing import IO

from loghooks.hooks import FileLifecycleHooks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HookChain(FileLifecycleHooks):
    """Hook that calls ``first`` then ``second`` for every event.

    Attributes:
        first: Hook invoked first; its wrapper is the inner layer
        second: Hook invoked second; its wrapper is the outer layer
    """

    first: FileLifecycleHooks
    second: FileLifecycleHooks

    def __post_init__(self) -> None:
        if self.first is None:
            raise ValueError("first hook must not be None")
        if self.second is None:
            raise ValueError("second hook must not be None")

    def on_file_opened(self, stream: IO[bytes], encoding: str | None) -> IO[bytes]:
        first_stream = self.first.on_file_opened(stream, encoding)
        return self.second.on_file_opened(first_stream, encoding)

    def on_file_deleting(self, path: str) -> None:
        self.first.on_file_deleting(path)
        self.second.on_file_deleting(path)

    @property
    def stages(self) -> list[FileLifecycleHooks]:
        """Leaf hooks of this chain in invocation order."""
        return flatten_hooks(self)


def chain(first: FileLifecycleHooks, second: FileLifecycleHooks) -> HookChain:
    """Compose two hooks into one.

    Args:
        first: Hook whose methods are called first
        second: Hook whose methods are called second

    Returns:
        HookChain forwarding to both hooks

    Raises:
        ValueError: If either hook is None
    """
    composed = HookChain(first, second)
    logger.debug("Chained hooks: %s -> %s", _hook_name(first), _hook_name(second))
    return composed


def chain_all(*hooks: FileLifecycleHooks) -> FileLifecycleHooks:
    """Compose any number of hooks, called in the order given.

    Builds a left-leaning tree, ``chain_all(a, b, c)`` being
    ``chain(chain(a, b), c)``. A single hook is returned unchanged.

    Raises:
        ValueError: If no hooks are given or any of them is None
    """
    if not hooks:
        raise ValueError("chain_all() requires at least one hook")
    for position, hook in enumerate(hooks):
        if hook is None:
            raise ValueError(f"hook at position {position} must not be None")
    return reduce(chain, hooks)


def flatten_hooks(hook: FileLifecycleHooks) -> list[FileLifecycleHooks]:
    """List the non-chain hooks inside ``hook`` in invocation order.

    Args:
        hook: Any hook, chained or not

    Returns:
        Leaf hooks, ``[hook]`` when it is not a HookChain
    """
    stages: list[FileLifecycleHooks] = []
    pending: list[FileLifecycleHooks] = [hook]
    while pending:
        current = pending.pop()
        if isinstance(current, HookChain):
            # second is pushed first so first is visited first
            pending.append(current.second)
            pending.append(current.first)
        else:
            stages.append(current)
    return stages


def describe_pipeline(hook: FileLifecycleHooks) -> str:
    """Generate an ASCII representation of a hook pipeline.

    Args:
        hook: Hook to describe

    Returns:
        ASCII art string with one box per stage, first stage on top. Boxes
        are at least 40 columns wide and grow to fit the longest label.
    """
    labels = [f"{i}. {_hook_name(stage)}" for i, stage in enumerate(flatten_hooks(hook), start=1)]
    inner = max(38, *(len(label) for label in labels))

    lines: list[str] = []
    for i, label in enumerate(labels):
        if i > 0:
            lines.append("       │")
            lines.append("       ▼")
        lines.append(f"┌{'─' * (inner + 2)}┐")
        lines.append(f"│ {label:<{inner}} │")
        lines.append(f"└{'─' * (inner + 2)}┘")
    return "\n".join(lines)


def _hook_name(hook: object) -> str:
    """Qualified class name of a hook, for logs and diagrams."""
    cls = type(hook)
    return f"{cls.__module__}.{cls.__qualname__}"
