"""Configuration loading and record store selection."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .category import CategoryConfig
from .file_store import FileRecordStore
from .sql_store import SqlRecordStore

logger = logging.getLogger(__name__)

BACKENDS = ("file", "sql")


def _parse_category(name: str, dct: Any) -> Optional[CategoryConfig]:
    """Parse one configuration entry, or None if it has no usable interval."""
    if not isinstance(dct, dict):
        return None
    interval = dct.get("intervalDays")
    # bool is an int subclass; reject it explicitly
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        return None
    return CategoryConfig(name, dct.get("description") or "", interval)


def load_category_config(filename: Union[str, Path]) -> Dict[str, CategoryConfig]:
    """
    Load recommended intervals from a YAML (or JSON) file.

    Format: {CategoryName: {description: str, intervalDays: int}}.
    A missing file yields an empty mapping; entries without a positive
    integer intervalDays are dropped.
    """
    path = Path(filename)
    if not path.exists():
        logger.warning("Category config not found: %s", path)
        return {}

    with open(path, "rb") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Category config must be a mapping: {path}")

    config = {}
    for name, dct in data.items():
        category = _parse_category(str(name), dct)
        if category is None:
            logger.warning("Skipping category %r: missing or invalid intervalDays", name)
            continue
        config[category.name] = category
    return config


def save_category_config(
    filename: Union[str, Path], config: Dict[str, CategoryConfig]
) -> None:
    """Write recommended intervals back to a YAML file."""
    data = {
        c.name: {"description": c.description, "intervalDays": c.interval_days}
        for c in config.values()
    }
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def default_database_url(home: Union[str, Path]) -> str:
    return f"sqlite:///{Path(home) / 'database.sqlite'}"


def open_store(
    backend: str, home: Union[str, Path], database_url: Optional[str] = None
) -> Union[FileRecordStore, SqlRecordStore]:
    """Create the record store for a backend name ('file' or 'sql')."""
    if backend == "file":
        return FileRecordStore(home)
    if backend == "sql":
        Path(home).mkdir(parents=True, exist_ok=True)
        return SqlRecordStore(database_url or default_database_url(home))
    raise ValueError(f"Unknown backend '{backend}' (expected one of {', '.join(BACKENDS)})")
