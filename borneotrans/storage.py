"""本地持久化存储。

以字符串为值的键值存储，每个值都是一个 JSON 文档。``FileStorage`` 把全部键值
写入一个 JSON 文件，``MemoryStorage`` 只保存在进程内。

``read_json`` / ``write_json`` 从不抛出存储错误：失败时记录日志并返回
``PersistenceWarning``，调用方拿到默认值继续工作。
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .constants import DEFAULT_STORAGE_PATH
from .models import PersistenceWarning, Recovered

logger = logging.getLogger(__name__)


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    """进程内存储。"""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """落地到单个 JSON 文件的存储。"""

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is None:
            path = Path(os.getenv("BORNEO_STORAGE_PATH", DEFAULT_STORAGE_PATH))
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"存储文件格式错误: {self.path}")
        return data

    def _dump(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._dump(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._dump(items)


def read_json(storage: Storage, key: str, default: Any) -> Recovered[Any]:
    try:
        raw = storage.get_item(key)
        if raw is None:
            return Recovered(default)
        return Recovered(json.loads(raw))
    except (OSError, ValueError, TypeError) as exc:
        warning = PersistenceWarning(key, "read", str(exc))
        logger.error("读取本地存储失败: %s", warning)
        return Recovered(default, warning)


def write_json(storage: Storage, key: str, value: Any) -> Optional[PersistenceWarning]:
    try:
        storage.set_item(key, json.dumps(value, ensure_ascii=False))
    except (OSError, ValueError, TypeError) as exc:
        warning = PersistenceWarning(key, "write", str(exc))
        logger.error("写入本地存储失败: %s", warning)
        return warning
    return None
