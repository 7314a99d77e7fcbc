"""Runtime configuration for openscan-links."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import CHAIN_ID, DEFAULT_EXPLORER_URL, WEBAPP_HOST, WEBAPP_PORT
from .exceptions import ConfigurationError
from .paths import get_default_dist_dir

_TRUTHY = {"1", "true", "yes"}


@dataclass
class ExplorerConfig:
    """Settings for one explorer session."""

    url: str = DEFAULT_EXPLORER_URL  # Base URL used in printed links
    chain_id: int = CHAIN_ID
    host: str = WEBAPP_HOST
    port: int = WEBAPP_PORT
    project_root: Path = field(default_factory=Path.cwd)
    dist_path: Path = field(default_factory=get_default_dist_dir)
    open_browser: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> "ExplorerConfig":
        """
        Build configuration from environment variables.

        Reads $OPENSCAN_URL, $OPENSCAN_CHAIN_ID, $OPENSCAN_PORT,
        $OPENSCAN_DIST_PATH and $OPENSCAN_NO_BROWSER. Keyword overrides
        that are not None take precedence over the environment.

        Raises:
            ConfigurationError: If a numeric variable is not an integer
        """
        values: Dict[str, Any] = {}

        url = os.environ.get("OPENSCAN_URL")
        if url:
            values["url"] = url.rstrip("/")

        chain_id = _int_from_env("OPENSCAN_CHAIN_ID")
        if chain_id is not None:
            values["chain_id"] = chain_id

        port = _int_from_env("OPENSCAN_PORT")
        if port is not None:
            values["port"] = port

        dist_path = os.environ.get("OPENSCAN_DIST_PATH")
        if dist_path:
            values["dist_path"] = Path(dist_path)

        no_browser = os.environ.get("OPENSCAN_NO_BROWSER", "")
        if no_browser.strip().lower() in _TRUTHY:
            values["open_browser"] = False

        values.update({k: v for k, v in overrides.items() if v is not None})

        for path_field in ("project_root", "dist_path"):
            if path_field in values:
                values[path_field] = Path(values[path_field]).absolute()

        return cls(**values)


def _int_from_env(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"${name} must be an integer, got '{raw}'") from e
