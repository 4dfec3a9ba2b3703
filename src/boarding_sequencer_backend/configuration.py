from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

from omegaconf import DictConfig, OmegaConf, open_dict

from .models import ConfigMetadata
from .seats import AISLE_COLUMNS, WINDOW_COLUMNS, normalize_label
from .sequencer import PriorityTable

CONFIG_PATH = Path(__file__).resolve().parent / "config/config.yaml"
OVERRIDE_ENV_VAR = "BOARDING_CONFIG_PATH"

NOTES = {
    "priority_tables": "Applied only when every seat in the upload belongs to the table; otherwise back-to-front, window-first ordering is used.",
    "upload.encoding": "utf-8-sig drops a leading byte-order mark; undecodable bytes are replaced.",
    "server.port": "Overridden by the PORT environment variable.",
    "priority_tables.<name>": "Set a table to null in an override file to disable it.",
}


@lru_cache(maxsize=1)
def _load_default_config() -> DictConfig:
    if not CONFIG_PATH.exists():
        raise FileNotFoundError(f"Default config not found at {CONFIG_PATH}")
    return OmegaConf.load(CONFIG_PATH)


def _load_override_config() -> DictConfig:
    override_path = os.environ.get(OVERRIDE_ENV_VAR)
    if not override_path:
        return OmegaConf.create({})
    path = Path(override_path)
    if not path.exists():
        raise FileNotFoundError(f"Config override not found at {path} ({OVERRIDE_ENV_VAR})")
    return OmegaConf.load(path)


def make_runtime_config(overrides: Dict[str, Any] | None = None) -> DictConfig:
    base = OmegaConf.create(OmegaConf.to_container(_load_default_config(), resolve=False))
    OmegaConf.set_struct(base, True)

    file_config = _load_override_config()
    cli_config = OmegaConf.create(overrides or {})
    # priority_tables is an open mapping; new table names are allowed.
    with open_dict(base.priority_tables):
        merged = OmegaConf.merge(base, file_config, cli_config)
    return DictConfig(merged)


def get_config_container(config: DictConfig | None = None, resolve: bool = True) -> Dict[str, Any]:
    config = config if config is not None else make_runtime_config()
    return OmegaConf.to_container(config, resolve=resolve, enum_to_str=True)  # type: ignore[return-value]


def build_priority_tables(config: DictConfig | None = None) -> Tuple[PriorityTable, ...]:
    """
    Build priority tables from the ``priority_tables`` section.

    Labels are normalized so ``" a2 "`` and ``"A2"`` name the same seat.

    Raises:
        ValueError: If a rank is not an integer
    """
    container = get_config_container(config)
    tables: List[PriorityTable] = []
    for name, entries in (container.get("priority_tables") or {}).items():
        ranks: Dict[str, int] = {}
        for label, rank in (entries or {}).items():
            if isinstance(rank, bool) or not isinstance(rank, int):
                raise ValueError(f"Priority table {name!r}: rank for {label!r} must be an integer, got {rank!r}")
            ranks[normalize_label(str(label))] = rank
        if ranks:
            tables.append(PriorityTable(name=str(name), ranks=ranks))
    return tuple(tables)


def build_config_metadata(config: DictConfig | None = None) -> ConfigMetadata:
    container = get_config_container(config)
    tables = build_priority_tables(config)
    return ConfigMetadata(
        priority_tables={table.name: dict(table.ranks) for table in tables},
        window_columns=sorted(WINDOW_COLUMNS),
        aisle_columns=sorted(AISLE_COLUMNS),
        upload_encoding=container["upload"]["encoding"],
        notes=NOTES,
    )
