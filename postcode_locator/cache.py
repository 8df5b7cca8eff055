"""
File-backed string key/value store used as the local location cache.
Mirrors browser local storage: string keys, string values, best effort.
"""
import json
from pathlib import Path
from typing import Dict, Optional, Union

from loguru import logger


class LocalStorage:
    """
    Persist string items to a single JSON file.

    A missing or corrupt file reads as empty; it is rewritten on the next set_item.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.debug(f"⚠️ Ignoring unreadable cache file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._save(items)
