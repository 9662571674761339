"""词典后端：本地存储和远程文档。

两种后端的合并策略不同：远程后端只写入有变化的条目并整体提交一次，
本地后端逐行无条件写入，每一行都计数。
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Protocol, Tuple

from .constants import CUSTOM_DICTIONARY_KEY, ORIGIN_LOCAL, ORIGIN_REMOTE
from .models import (
    Dictionary,
    MergeResult,
    PersistenceWarning,
    coerce_dictionary,
    normalize_phrase,
    pair_key,
)
from .remote import RemoteDictionaryClient
from .storage import Storage, read_json, write_json

logger = logging.getLogger(__name__)

Entry = Tuple[str, str]


class DictionaryBackend(Protocol):
    origin: str

    async def read(self) -> Dictionary:
        ...

    async def write(self, dictionary: Dictionary, version_token: Optional[str] = None) -> None:
        ...

    async def merge(self, key: str, entries: Iterable[Entry]) -> MergeResult:
        ...


class LocalBackend:
    """保存在本地存储 ``customDictionary`` 键下的词典。"""

    origin = ORIGIN_LOCAL

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def load(self) -> Dictionary:
        return coerce_dictionary(read_json(self.storage, CUSTOM_DICTIONARY_KEY, {}).value)

    async def read(self) -> Dictionary:
        return self.load()

    async def write(self, dictionary: Dictionary, version_token: Optional[str] = None) -> None:
        write_json(self.storage, CUSTOM_DICTIONARY_KEY, dictionary)

    def set_entry(self, key: str, text: str, translation: str) -> Optional[PersistenceWarning]:
        dictionary = self.load()
        dictionary.setdefault(key, {})[normalize_phrase(text)] = translation
        return write_json(self.storage, CUSTOM_DICTIONARY_KEY, dictionary)

    def update_custom_dictionary(
        self, from_lang: str, to_lang: str, text: str, translation: str
    ) -> Optional[PersistenceWarning]:
        return self.set_entry(pair_key(from_lang, to_lang), text, translation)

    async def merge(self, key: str, entries: Iterable[Entry]) -> MergeResult:
        result = MergeResult()
        for source, target in entries:
            warning = self.set_entry(key, source, target)
            if warning is not None:
                result.warnings.append(warning)
            result.updated_count += 1
        return result


class RemoteBackend:
    """远程文档词典。每次成功写入后调用 ``on_write``（用于让缓存失效）。"""

    origin = ORIGIN_REMOTE

    def __init__(self, client: RemoteDictionaryClient, on_write: Optional[Callable[[], None]] = None) -> None:
        self.client = client
        self.on_write = on_write

    async def read(self) -> Dictionary:
        return coerce_dictionary(await self.client.read())

    async def write(self, dictionary: Dictionary, version_token: Optional[str] = None) -> None:
        await self.client.write(dictionary, version_token)
        if self.on_write is not None:
            self.on_write()

    async def merge(self, key: str, entries: Iterable[Entry]) -> MergeResult:
        document = await self.client.fetch_with_version()
        dictionary = coerce_dictionary(document.dictionary)
        phrases = dictionary.setdefault(key, {})
        updated = 0
        for source, target in entries:
            phrase = normalize_phrase(source)
            if phrases.get(phrase) != target:
                phrases[phrase] = target
                updated += 1

        if updated:
            await self.write(dictionary, document.version_token)
        else:
            logger.info("上传内容与远程词典一致，跳过写入")
        return MergeResult(updated_count=updated)
