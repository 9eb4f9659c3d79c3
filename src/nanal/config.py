"""Configuration management for nanal."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.engine import BarMetrics

logger = logging.getLogger(__name__)

NANAL_HOME = Path(os.environ.get("NANAL_HOME", Path.home() / "nanal"))
CONFIG_FILE = NANAL_HOME / "config" / "nanal.conf"
DATA_DIR = NANAL_HOME / "data"


@dataclass
class Config:
    """nanal configuration."""

    data_file: str = field(default_factory=lambda: str(DATA_DIR / "nanal.json"))
    # Remote document store
    remote_url: str = ""
    remote_user: str = ""
    remote_token: str = ""
    remote_timeout: float = 10
    # Month grid geometry, in the rendering surface's units
    row_height: float = 100
    bar_height: float = 20
    bar_gap: float = 4
    bar_bottom_padding: float = 4
    max_cell_items: int = 3
    min_grid_rows: int = 6

    def bar_metrics(self) -> BarMetrics:
        return BarMetrics(
            row_height=self.row_height,
            bar_height=self.bar_height,
            bar_gap=self.bar_gap,
            bottom_padding=self.bar_bottom_padding,
        )


_FLOAT_KEYS = {
    "remote_timeout",
    "row_height",
    "bar_height",
    "bar_gap",
    "bar_bottom_padding",
}
_INT_KEYS = {"max_cell_items", "min_grid_rows"}
_STR_KEYS = {"data_file", "remote_url", "remote_user", "remote_token"}


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from nanal.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        if key in _STR_KEYS:
            if key == "data_file" and value:
                value = str(Path(value).expanduser())
            setattr(config, key, value)
        elif key in _FLOAT_KEYS:
            try:
                setattr(config, key, float(value))
            except ValueError:
                logger.warning(f"Invalid number for {key.upper()}: {value!r}, keeping default")
        elif key in _INT_KEYS:
            try:
                setattr(config, key, int(value))
            except ValueError:
                logger.warning(f"Invalid integer for {key.upper()}: {value!r}, keeping default")
        else:
            logger.debug(f"Ignoring unknown config key: {key.upper()}")

    return config
