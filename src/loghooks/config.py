"""Configuration management for loghooks.

Configuration Discovery Precedence (Highest to Lowest Priority):
===============================================================

1. **LOGHOOKS_CONFIG_DIR Environment Variable** (Highest Priority)
   - Set by CLI or manually: `export LOGHOOKS_CONFIG_DIR=/path/to/config`
   - Looks for: `${LOGHOOKS_CONFIG_DIR}/loghooks.yaml`

2. **~/.loghooks Directory** (Fallback)
   - Looks for: `~/.loghooks/loghooks.yaml`

If no `loghooks.yaml` is found, default configuration (no hooks) is applied.

Example loghooks.yaml:
---------------------
loghooks:
  debug: false
  hooks:
    - mypackage.hooks.HeaderWriter
    - hook: mypackage.hooks.GzipHooks
      params:
        level: 6

Hooks are chained in the order listed: the first entry wraps the raw file
stream, the last entry's wrapper is outermost.
"""

import importlib
import logging
import os
import threading
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from loghooks.chain import chain_all
from loghooks.hooks import FileLifecycleHooks

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "loghooks.yaml"


class HookConfig:
    """Configuration for a single hook with optional parameters."""

    def __init__(self, hook_path: str, params: dict[str, Any] | None = None) -> None:
        """Initialize a hook configuration.

        Args:
            hook_path: Python import path to a hook class or factory
            params: Optional keyword parameters for the constructor
        """
        self.hook_path = hook_path
        self.params = params or {}

    @classmethod
    def from_entry(cls, entry: str | dict[str, Any]) -> "HookConfig":
        """Parse a hook entry from the ``hooks`` list.

        Args:
            entry: Either an import path or a dict with ``hook`` and ``params``

        Returns:
            HookConfig instance

        Raises:
            ValueError: If the entry is malformed
        """
        if isinstance(entry, str):
            return cls(entry)
        if isinstance(entry, dict):
            hook_path = entry.get("hook", "")
            if not isinstance(hook_path, str) or not hook_path:
                raise ValueError(f"Hook entry needs a non-empty 'hook' import path: {entry}")
            params = entry.get("params") or {}
            if not isinstance(params, dict):
                raise ValueError(f"Hook params for '{hook_path}' must be a mapping, got {type(params).__name__}")
            return cls(hook_path, params)
        raise ValueError(f"Invalid hook entry type: {type(entry).__name__}")

    def create_instance(self) -> FileLifecycleHooks:
        """Import the hook target and instantiate it.

        Returns:
            The hook instance

        Raises:
            ImportError: If the module or attribute cannot be imported
            TypeError: If the target does not produce a FileLifecycleHooks
        """
        module_path, _, attr_name = self.hook_path.rpartition(".")
        if not module_path:
            raise ImportError(f"Hook path '{self.hook_path}' is not a dotted import path")

        module = importlib.import_module(module_path)
        try:
            target = getattr(module, attr_name)
        except AttributeError as e:
            raise ImportError(f"Module '{module_path}' has no attribute '{attr_name}'") from e

        instance = target(**self.params)
        if not isinstance(instance, FileLifecycleHooks):
            raise TypeError(f"Hook '{self.hook_path}' produced {type(instance).__name__}, not FileLifecycleHooks")
        return instance


class LogHooksConfig(BaseSettings):
    """Main configuration for loghooks that reads from loghooks.yaml."""

    model_config = SettingsConfigDict(
        env_prefix="LOGHOOKS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Enable debug logging
    debug: bool = False

    # Hook entries (import paths or dict with params), in chain order
    hooks: list[str | dict[str, Any]] = Field(default_factory=list)

    # Path to loghooks config
    config_path: Path = Field(default_factory=lambda: Path("./loghooks.yaml"))

    def load_hooks(self) -> list[FileLifecycleHooks]:
        """Instantiate the configured hooks in order.

        Returns:
            List of hook instances

        Raises:
            ValueError: If a hook entry is malformed
            ImportError: If a hook cannot be imported
            TypeError: If a hook target is not a FileLifecycleHooks factory
        """
        loaded: list[FileLifecycleHooks] = []
        for entry in self.hooks:
            hook_config = HookConfig.from_entry(entry)
            try:
                instance = hook_config.create_instance()
            except ImportError as e:
                logger.error("Failed to load hook %s: %s", hook_config.hook_path, e)
                raise
            loaded.append(instance)
            logger.debug(
                "Loaded hook: %s%s",
                hook_config.hook_path,
                f" with params: {hook_config.params}" if hook_config.params else "",
            )
        return loaded

    def build_pipeline(self) -> FileLifecycleHooks | None:
        """Chain the configured hooks into a single hook.

        Returns:
            The composed hook, or None when no hooks are configured
        """
        hooks = self.load_hooks()
        if not hooks:
            return None
        return chain_all(*hooks)

    @classmethod
    def from_yaml(cls, yaml_path: Path, **kwargs: Any) -> "LogHooksConfig":
        """Load configuration from a loghooks.yaml file.

        Args:
            yaml_path: Path to the loghooks.yaml file
            **kwargs: Additional keyword arguments

        Returns:
            LogHooksConfig instance

        Raises:
            ValueError: If the file or its ``loghooks`` section is malformed
        """
        if not yaml_path.exists():
            return cls(config_path=yaml_path, **kwargs)

        with yaml_path.open() as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Top level of {yaml_path} must be a mapping, got {type(data).__name__}")

        section = data.get("loghooks") or {}
        if not isinstance(section, dict):
            raise ValueError(f"'loghooks' section in {yaml_path} must be a mapping")

        settings: dict[str, Any] = {}
        if "debug" in section:
            settings["debug"] = section["debug"]

        hooks_data = section.get("hooks") or []
        if not isinstance(hooks_data, list):
            raise ValueError(f"'hooks' in {yaml_path} must be a list")
        if hooks_data:
            settings["hooks"] = hooks_data

        return cls(config_path=yaml_path, **{**settings, **kwargs})


# Global configuration instance
_config_instance: LogHooksConfig | None = None
_config_lock = threading.Lock()


def discover_config_dir() -> Path:
    """Resolve the configuration directory.

    Returns:
        LOGHOOKS_CONFIG_DIR if set, otherwise ~/.loghooks
    """
    env_config_dir = os.environ.get("LOGHOOKS_CONFIG_DIR")
    if env_config_dir:
        logger.info("Using config directory from environment: %s", env_config_dir)
        return Path(env_config_dir)
    return Path.home() / ".loghooks"


def get_config() -> LogHooksConfig:
    """Get the configuration instance."""
    global _config_instance

    if _config_instance is None:
        with _config_lock:
            # Double-check locking pattern
            if _config_instance is None:
                config_path = discover_config_dir() / CONFIG_FILENAME
                if config_path.exists():
                    logger.info("Loading loghooks config from: %s", config_path)
                    _config_instance = LogHooksConfig.from_yaml(config_path)
                else:
                    logger.info("%s not found at %s, using default config", CONFIG_FILENAME, config_path)
                    _config_instance = LogHooksConfig(config_path=config_path)

    return _config_instance


def set_config_instance(config: LogHooksConfig) -> None:
    """Set the global configuration instance (for testing)."""
    global _config_instance
    _config_instance = config


def clear_config_instance() -> None:
    """Clear the global configuration instance (for testing)."""
    global _config_instance
    _config_instance = None
