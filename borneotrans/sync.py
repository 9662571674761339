"""同步封装。"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from .admin import AdminPanel
from .core import BorneoTranslator
from .models import UploadOutcome


class BorneoTranslatorSync:
    """BorneoTranslator 的同步适配器。"""

    def __init__(self, *args, **kwargs) -> None:
        self.translator = BorneoTranslator(*args, **kwargs)
        self.admin = AdminPanel(self.translator)
        self._loop = asyncio.new_event_loop()
        self._closed = False

    def _run(self, coro):
        return self._loop.run_until_complete(coro)

    @property
    def config_store(self):
        return self.translator.config_store

    def translate(self, text: str, from_lang: str, to_lang: str) -> str:
        return self._run(self.translator.translate(text, from_lang, to_lang))

    def moderate(self, text: str) -> bool:
        return self._run(self.translator.moderate(text))

    def synthesize_speech(self, text: str) -> str:
        return self._run(self.translator.synthesize_speech(text))

    def cultural_facts(self) -> List[str]:
        return self._run(self.translator.cultural_facts())

    def resolve(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        return self._run(self.translator.resolve(from_lang, to_lang, text))

    def upload(self, file_name: str, raw_text: str, from_lang: str, to_lang: str) -> UploadOutcome:
        return self._run(self.admin.upload(file_name, raw_text, from_lang, to_lang))

    def get_config(self) -> dict:
        return self.translator.get_config()

    def __enter__(self) -> "BorneoTranslatorSync":
        self._run(self.translator.initialize())
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        try:
            self._run(self.translator.cleanup())
        finally:
            self._loop.close()
            self._closed = True

    def __del__(self):  # pragma: no cover - 清理保障
        if not getattr(self, "_closed", True):
            self.close()


def create(*args, **kwargs) -> BorneoTranslatorSync:
    return BorneoTranslatorSync(*args, **kwargs)
