"""远程词典的限时缓存。"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .constants import DICTIONARY_CACHE_TTL
from .models import Dictionary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheItem:
    snapshot: Dictionary
    captured_at: float


class DictionaryCache:
    """只有 EMPTY 和 CACHED 两种状态，整体替换，不做局部修改。"""

    def __init__(self, ttl: float = DICTIONARY_CACHE_TTL, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._item: Optional[CacheItem] = None

    def now(self) -> float:
        return self._clock()

    def get(self) -> Optional[Dictionary]:
        item = self._item
        if item is None:
            return None
        if self.now() - item.captured_at < self.ttl:
            return item.snapshot
        self._item = None
        logger.debug("词典缓存已过期")
        return None

    def set(self, snapshot: Dictionary, captured_at: Optional[float] = None) -> None:
        self._item = CacheItem(snapshot, self.now() if captured_at is None else captured_at)

    def invalidate(self) -> None:
        self._item = None
        logger.info("自定义词典缓存已失效")

    @property
    def is_empty(self) -> bool:
        return self._item is None
