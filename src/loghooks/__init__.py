"""Composable file lifecycle hooks for log file writers.

A log file writer calls a hook when it opens a file for writing and when it
deletes a retired file. Hooks compose with ``chain``:

    Hook hᵢ = (wᵢ, dᵢ) where:
        wᵢ: Stream → Stream  (on_file_opened)
        dᵢ: Path → None      (on_file_deleting)

    chain(h₁, h₂) = (w₂ ∘ w₁, d₁ then d₂)
"""

from loghooks.chain import HookChain, chain, chain_all, describe_pipeline, flatten_hooks
from loghooks.hooks import FileLifecycleHooks

__all__ = [
    "FileLifecycleHooks",
    "HookChain",
    "chain",
    "chain_all",
    "flatten_hooks",
    "describe_pipeline",
]
