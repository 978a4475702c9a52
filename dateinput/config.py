# dateinput/config.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DATEINPUT_CONFIG"


class Config:
    """
    YAML config loader for the date input.

    Usage:
        cfg = Config()                       # $DATEINPUT_CONFIG, else ./config.yaml
        cfg = Config("site/config.yaml")
        enabled = cfg.get_nested("theming.enabled", False)
        cfg.reload()

    Recognised keys::

        theming:
          enabled: true
          version: "4"
          preamble: [path/to/bootstrap.scss]   # or inline SCSS sources
        datepicker:
          version: "1.9.0"
          href: shared/datepicker
        output_dir: /tmp/dateinput-datepicker

    Nothing reads the config implicitly during a render: turn it into a
    ``ThemeConfig`` with ``ThemeConfig.from_config(cfg)`` and pass that along.

    Parameters:
      config_file: path to YAML config. Falls back to $DATEINPUT_CONFIG, then config.yaml in cwd.
    """

    def __init__(self, config_file: Optional[str | os.PathLike] = None):
        self.config_file_arg = config_file
        self._config: Dict[str, Any] = {}
        self._source: Optional[str] = None  # 'file' or None

        self._resolved_config_path: Optional[Path] = self._resolve_config_path(config_file)
        self.reload()

    # ----- public API -----
    def reload(self) -> None:
        """Re-read the YAML file. A missing or unreadable file leaves an empty config."""
        if not self._try_load_file():
            self._source = None
            self._config = {}

    def as_dict(self) -> Dict[str, Any]:
        """Return the loaded configuration as a dict (may be empty)."""
        return dict(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """Shallow lookup in the top-level config dict."""
        return self._config.get(key, default)

    def get_nested(self, path: str, default: Any = None, sep: str = ".") -> Any:
        """
        Lookup nested keys using dot-path (e.g. "theming.version").
        Returns default if any step is missing.
        """
        cur = self._config
        if not path:
            return default
        for part in path.split(sep):
            if not isinstance(cur, dict):
                return default
            if part in cur:
                cur = cur[part]
            else:
                return default
        return cur

    @property
    def source(self) -> Optional[str]:
        """Return 'file' or None depending on where config came from."""
        return self._source

    @property
    def resolved_config_path(self) -> Optional[Path]:
        """If a filesystem config was resolved, return its Path, otherwise None."""
        return self._resolved_config_path

    # ----- internal helpers -----
    def _resolve_config_path(self, config_file: Optional[str | os.PathLike]) -> Optional[Path]:
        """
        Resolve the YAML config path:
          1. the explicit argument, absolute or relative to cwd (no fallback if missing)
          2. $DATEINPUT_CONFIG
          3. config.yaml in cwd
        """
        if config_file:
            candidates = [Path(config_file)]
        else:
            candidates = []
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                candidates.append(Path(env_path))
            candidates.append(Path.cwd() / "config.yaml")

        for candidate in candidates:
            if not candidate.is_absolute():
                candidate = Path.cwd() / candidate
            if candidate.exists():
                return candidate.resolve()
        if config_file:
            logger.warning("Config file %s not found, using defaults.", config_file)
        return None

    def _try_load_file(self) -> bool:
        """Load the resolved YAML file. Returns True on success."""
        if not self._resolved_config_path:
            return False
        try:
            with self._resolved_config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read config %s: %s", self._resolved_config_path, e)
            return False
        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.warning("Config %s is not a mapping, ignoring it.", self._resolved_config_path)
            return False
        self._config = data
        self._source = "file"
        return True

    def __repr__(self):
        return f"Config(source={self._source!r}, path={self._resolved_config_path!r})"


_shared_config: Optional[Config] = None


def get_config(config_file: Optional[str | os.PathLike] = None) -> Config:
    """
    Convenience factory that returns a shared Config instance.
    Passing ``config_file`` replaces the shared instance.
    """
    global _shared_config
    if _shared_config is None or config_file is not None:
        _shared_config = Config(config_file)
    return _shared_config
