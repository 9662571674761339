"""API 配置存储。"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Any, Callable, List, Optional

from dotenv import load_dotenv

from .constants import API_CONFIG_KEY
from .models import ApiConfig, PersistenceWarning, Provider, Recovered
from .storage import Storage, read_json, write_json

logger = logging.getLogger(__name__)

load_dotenv(override=True)


def env_api_key() -> Optional[str]:
    return os.getenv("BORNEO_API_KEY") or None


class ConfigStore:
    """持久化 ``ApiConfig``，写入后通知订阅者。"""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self._subscribers: List[Callable[[ApiConfig], Any]] = []

    def load(self) -> Recovered[ApiConfig]:
        result = read_json(self.storage, API_CONFIG_KEY, None)
        if result.value is None:
            return Recovered(ApiConfig(), result.warning)
        if not isinstance(result.value, dict):
            warning = PersistenceWarning(API_CONFIG_KEY, "read", "配置不是 JSON 对象")
            logger.error("读取本地存储失败: %s", warning)
            return Recovered(ApiConfig(), warning)
        return Recovered(ApiConfig.from_dict(result.value))

    def read(self) -> ApiConfig:
        return self.load().value

    def write(self, **changes: Any) -> Optional[PersistenceWarning]:
        """合并部分字段后整体保存。"""
        if "selected_provider" in changes:
            changes["selected_provider"] = Provider.parse(changes["selected_provider"])
        config = replace(self.read(), **changes)
        warning = write_json(self.storage, API_CONFIG_KEY, config.to_dict())
        for callback in list(self._subscribers):
            callback(config)
        return warning

    def subscribe(self, callback: Callable[[ApiConfig], Any]) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[ApiConfig], Any]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def provider(self) -> Provider:
        return self.read().selected_provider
