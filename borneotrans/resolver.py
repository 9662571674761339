"""自定义词典查找。"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from .backends import LocalBackend, RemoteBackend
from .cache import DictionaryCache
from .config import ConfigStore
from .exceptions import BorneoError
from .models import Dictionary, Provider, normalize_phrase, pair_key

logger = logging.getLogger(__name__)

FETCH_ERRORS = (BorneoError, aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class DictionaryResolver:
    """在调用 AI 之前查找自定义词典。

    远程提供方的词典会缓存 ``cache.ttl`` 秒；拉取失败时本次按空词典处理，
    且不缓存失败结果，下次调用会重新请求。
    """

    def __init__(
        self,
        config_store: ConfigStore,
        local: LocalBackend,
        remote: RemoteBackend,
        cache: Optional[DictionaryCache] = None,
    ) -> None:
        self.config_store = config_store
        self.local = local
        self.remote = remote
        self.cache = cache or DictionaryCache()

    async def dictionary(self) -> Dictionary:
        if self.config_store.provider is not Provider.REMOTE:
            return await self.local.read()

        cached = self.cache.get()
        if cached is not None:
            logger.debug("使用缓存的远程词典")
            return cached

        captured_at = self.cache.now()
        try:
            logger.info("从远程拉取词典...")
            dictionary = await self.remote.read()
        except FETCH_ERRORS as exc:
            logger.error("拉取远程词典失败: %s", exc)
            return {}
        self.cache.set(dictionary, captured_at)
        return dictionary

    async def resolve(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        dictionary = await self.dictionary()
        phrases = dictionary.get(pair_key(from_lang, to_lang)) if isinstance(dictionary, dict) else None
        if not isinstance(phrases, dict):
            return None
        found = phrases.get(normalize_phrase(text))
        return found if isinstance(found, str) else None

    def invalidate(self) -> None:
        self.cache.invalidate()
