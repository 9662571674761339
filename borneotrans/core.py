"""核心翻译模块。

``BorneoTranslator`` 持有 AI 客户端、词典后端和缓存，是显式创建的服务对象，
不依赖模块级全局状态。凭据变化（``ConfigStore.write``）时自动重建客户端。
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional

import openai

from .backends import DictionaryBackend, LocalBackend, RemoteBackend
from .cache import DictionaryCache
from .config import ConfigStore, env_api_key
from .constants import (
    CULTURAL_FACTS_PROMPT,
    DEFAULT_AUDIO_FORMAT,
    DEFAULT_BASE_URL,
    DEFAULT_GATEWAY_CONFIG,
    DEFAULT_MODEL,
    DEFAULT_TTS_MODEL,
    DEFAULT_VOICE,
    FACT_COUNT,
    FACT_SEPARATOR,
    LANGUAGE_NAMES,
    MODERATION_PROMPT,
    SAFE_LABEL,
    SPEECH_INSTRUCTION,
    TRANSLATE_PROMPT,
)
from .exceptions import (
    CulturalFactsFailed,
    ProviderNotConfigured,
    SpeechSynthesisFailed,
    TranslationFailed,
)
from .models import ApiConfig, Provider
from .remote import RemoteDictionaryClient
from .resolver import DictionaryResolver
from .resources import ClientManager, SessionManager
from .storage import FileStorage, Storage

logger = logging.getLogger(__name__)


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)


class BorneoTranslator:
    """印尼语与达雅克方言之间的翻译助手。"""

    def __init__(
        self,
        storage: Optional[Storage] = None,
        model_name: Optional[str] = None,
        tts_model: Optional[str] = None,
        base_url: Optional[str] = None,
        voice: str = DEFAULT_VOICE,
        client_factory: Callable[..., Any] = openai.AsyncOpenAI,
        remote_client: Optional[RemoteDictionaryClient] = None,
        clock: Callable[[], float] = time.time,
        **kwargs: Any,
    ) -> None:
        self.storage = storage if storage is not None else FileStorage()
        self.config_store = ConfigStore(self.storage)
        self.base_url = base_url or os.getenv("BORNEO_BASE_URL", DEFAULT_BASE_URL)
        self.model = model_name or os.getenv("BORNEO_MODEL", DEFAULT_MODEL)
        self.tts_model = tts_model or os.getenv("BORNEO_TTS_MODEL", DEFAULT_TTS_MODEL)
        self.voice = voice

        self.perf_config: Dict[str, Any] = DEFAULT_GATEWAY_CONFIG.copy()
        self.perf_config.update(kwargs)

        self.session_manager = SessionManager(timeout=self.perf_config["timeout"])
        self.remote_client = remote_client or RemoteDictionaryClient(
            self.config_store,
            self.session_manager,
            fetch_retries=self.perf_config["fetch_retries"],
        )
        self.cache = DictionaryCache(ttl=self.perf_config["cache_ttl"], clock=clock)
        self.local_backend = LocalBackend(self.storage)
        self.remote_backend = RemoteBackend(self.remote_client, on_write=self.invalidate_dictionary_cache)
        self.resolver = DictionaryResolver(self.config_store, self.local_backend, self.remote_backend, self.cache)

        self.client_manager = ClientManager(
            self.base_url,
            timeout=self.perf_config["timeout"],
            client_factory=client_factory,
        )
        self._initialized = False
        self.config_store.subscribe(self._on_config_change)
        self.reinitialize()

    # 生命周期

    def get_api_key(self) -> Optional[str]:
        config = self.config_store.read()
        if config.selected_provider is Provider.AI:
            return config.ai_api_key or env_api_key()
        # 非 AI 提供方时只接受环境变量中的密钥
        return env_api_key()

    def reinitialize(self) -> bool:
        if self.client_manager.build(self.get_api_key()):
            logger.info("AI 客户端初始化成功")
            return True
        if self.config_store.provider is not Provider.AI:
            logger.warning("当前提供方不是 AI，翻译功能已禁用")
        else:
            logger.warning("未找到 API 密钥，请在设置中配置")
        return False

    def _on_config_change(self, config: ApiConfig) -> None:
        self.reinitialize()

    async def initialize(self) -> None:
        """预热 HTTP 会话并按当前凭据准备 AI 客户端"""
        if self._initialized:
            return
        await self.session_manager.initialize()
        self.reinitialize()
        await self.client_manager.close_retired()
        self._initialized = True

    @property
    def client(self):
        return self.client_manager.client

    def _require_client(self):
        client = self.client_manager.client
        if client is not None:
            return client
        if self.config_store.provider is not Provider.AI:
            raise ProviderNotConfigured(
                "AI is not the selected API provider. Please change it in the settings."
            )
        raise ProviderNotConfigured("API Key not configured. Please set it in the settings.")

    async def cleanup(self) -> None:
        self.config_store.unsubscribe(self._on_config_change)
        await self.session_manager.cleanup()
        await self.client_manager.cleanup()
        self._initialized = False

    async def __aenter__(self) -> "BorneoTranslator":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    # 词典

    def backend_for(self, provider: Provider) -> DictionaryBackend:
        if provider is Provider.REMOTE:
            return self.remote_backend
        return self.local_backend

    def active_backend(self) -> DictionaryBackend:
        return self.backend_for(self.config_store.provider)

    async def resolve(self, from_lang: str, to_lang: str, text: str) -> Optional[str]:
        return await self.resolver.resolve(from_lang, to_lang, text)

    def invalidate_dictionary_cache(self) -> None:
        self.resolver.invalidate()

    def update_custom_dictionary(self, from_lang: str, to_lang: str, text: str, translation: str) -> None:
        self.local_backend.update_custom_dictionary(from_lang, to_lang, text, translation)

    # AI 调用

    async def translate(self, text: str, from_lang: str, to_lang: str) -> str:
        await self.client_manager.close_retired()
        client = self._require_client()

        found = await self.resolver.resolve(from_lang, to_lang, text)
        if found:
            logger.info("在自定义词典中找到译文")
            return found

        prompt = TRANSLATE_PROMPT.format(
            src=language_name(from_lang),
            dest=language_name(to_lang),
            text=text,
        )
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.perf_config["temperature"],
                max_tokens=self.perf_config["max_tokens"],
            )
            return response.choices[0].message.content.strip()
        except Exception as exc:
            logger.error("翻译失败: %s", exc)
            raise TranslationFailed(
                "Failed to get translation. Please check your API key and network connection."
            ) from exc

    async def moderate(self, text: str) -> bool:
        """返回文本是否安全。审核不可用时放行。"""
        await self.client_manager.close_retired()
        client = self.client_manager.client
        if client is None:
            logger.warning("未配置 API 密钥，跳过内容审核")
            return True

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": MODERATION_PROMPT.format(text=text)}],
                temperature=0,
                max_tokens=5,
            )
            result = response.choices[0].message.content.strip().upper()
            return result == SAFE_LABEL
        except Exception as exc:
            logger.error("内容审核失败: %s", exc)
            return True

    async def synthesize_speech(self, text: str) -> str:
        """返回 base64 编码的音频数据，由调用方解码播放。"""
        await self.client_manager.close_retired()
        client = self._require_client()
        try:
            response = await client.chat.completions.create(
                model=self.tts_model,
                modalities=["text", "audio"],
                audio={"voice": self.voice, "format": DEFAULT_AUDIO_FORMAT},
                messages=[
                    {"role": "system", "content": SPEECH_INSTRUCTION},
                    {"role": "user", "content": text},
                ],
            )
            audio = response.choices[0].message.audio
            if audio is None or not audio.data:
                raise SpeechSynthesisFailed("No audio data received from API.")
            return audio.data
        except SpeechSynthesisFailed:
            raise
        except Exception as exc:
            logger.error("语音合成失败: %s", exc)
            raise SpeechSynthesisFailed("Failed to generate speech.") from exc

    async def cultural_facts(self) -> List[str]:
        await self.client_manager.close_retired()
        if self.client_manager.client is None:
            raise ProviderNotConfigured(
                "API Key not configured. Please add your API key to check this feature."
            )
        prompt = CULTURAL_FACTS_PROMPT.format(count=FACT_COUNT, separator=FACT_SEPARATOR)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.perf_config["temperature"],
            )
            content = response.choices[0].message.content.strip()
        except Exception as exc:
            logger.error("获取文化知识失败: %s", exc)
            raise CulturalFactsFailed("Could not fetch cultural facts. Check your API key.") from exc
        return [fact.strip() for fact in content.split(FACT_SEPARATOR) if fact.strip()]

    def get_config(self) -> Dict[str, object]:
        api_key = self.get_api_key()
        return {
            "provider": self.config_store.provider.value,
            "api_key": f"{api_key[:4]}..." if api_key else None,
            "base_url": self.base_url,
            "model": self.model,
            "tts_model": self.tts_model,
            "performance_config": self.perf_config,
        }
