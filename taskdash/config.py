# Task dashboard: configuration
# Override settings via taskdash.yaml, TASKDASH_* env vars, or CLI args.

import logging
import os
import yaml
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "taskdash.yaml"

TRUTHY = ("1", "true", "yes", "on")


@dataclass
class Config:
    """Runtime configuration for the dashboard server."""

    # Network
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    # Data
    owner_id: int = 1          # every request addresses this user
    seed_data: bool = True     # load the demo user and sample tasks at startup

    # Logging
    log_level: str = "INFO"

    def apply_env(self):
        """Apply TASKDASH_* environment overrides."""
        if os.environ.get("TASKDASH_HOST"):
            self.host = os.environ["TASKDASH_HOST"]
        if os.environ.get("TASKDASH_PORT"):
            try:
                self.port = int(os.environ["TASKDASH_PORT"])
            except ValueError:
                logger.warning(f"Ignoring invalid TASKDASH_PORT={os.environ['TASKDASH_PORT']!r}")
        if os.environ.get("TASKDASH_DEBUG"):
            self.debug = os.environ["TASKDASH_DEBUG"].strip().lower() in TRUTHY
        if os.environ.get("TASKDASH_LOG_LEVEL"):
            self.log_level = os.environ["TASKDASH_LOG_LEVEL"].strip().upper()

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML file, falling back to defaults, then apply env."""
        path = path or os.environ.get("TASKDASH_CONFIG")
        cfg_path = Path(path) if path else CONFIG_PATH
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                if not isinstance(data, dict):
                    raise TypeError(f"expected a mapping at top level, got {type(data).__name__}")
                cfg = cls(**{k: v for k, v in data.items() if hasattr(cls, k)})
            except (OSError, yaml.YAMLError, TypeError) as e:
                logger.warning(f"Cannot read config {cfg_path}: {e}; using defaults")
                cfg = cls()
        else:
            cfg = cls()
        cfg.apply_env()
        return cfg
