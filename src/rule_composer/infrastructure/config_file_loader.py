"""Load [tool.rule-composer] from pyproject.toml. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path

logger = logging.getLogger(__name__)

TOOL_SECTION = "rule-composer"


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml. No top-level functions.
    """

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Walk up from start (default: cwd) and return the [tool.rule-composer] table, {} if none."""
        current_path = (start or Path.cwd()).resolve()
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError) as exc:
                    logger.warning("Could not read %s: %s", config_file, exc)
                else:
                    section = data.get("tool", {}).get(TOOL_SECTION)
                    if isinstance(section, dict):
                        return section
            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent
