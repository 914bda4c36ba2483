from pathlib import Path

from itstock.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)


def key_file(key: str, data_dir: Path = DATA_DIR) -> Path:
    """File backing one store key: <data_dir>/<key>.json"""
    return Path(data_dir) / f"{key}.json"


__all__ = ['DATA_DIR', 'key_file']
