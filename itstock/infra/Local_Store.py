"""Local key-value store: each key is one UTF-8 text file holding a serialized blob."""
import os
import shutil
import tempfile
import logging
from pathlib import Path
from typing import Optional

from itstock.infra.paths import DATA_DIR, key_file

logger = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)

    def get(self, key: str) -> Optional[str]:
        """Return the raw text stored under key, or None when the key was never written."""
        path = key_file(key, self.data_dir)
        if not path.exists():
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        """Write value under key through a temp file so readers never see half a blob."""
        os.makedirs(self.data_dir, exist_ok=True)
        target = key_file(key, self.data_dir)
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                tmp.write(value)
            shutil.move(tmp_path, target)
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning("Could not remove temp file %s", tmp_path)
