"""远程词典客户端。

词典作为单个 JSON 文件保存在 GitHub 仓库中，通过 contents 接口读写。
读取时返回内容和 sha，写入已存在的文件时必须带上 sha。
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import aiohttp
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import ConfigStore
from .constants import (
    COMMIT_MESSAGE,
    DEFAULT_DICT_OWNER,
    DEFAULT_DICT_PATH,
    DEFAULT_DICT_REPO,
    GITHUB_ACCEPT,
    GITHUB_API_URL,
)
from .exceptions import CredentialMissing, RemoteApiError
from .models import Dictionary, RemoteDocument, coerce_dictionary
from .resources import SessionManager

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (aiohttp.ClientConnectionError, asyncio.TimeoutError)


def encode_document(dictionary: Dictionary) -> str:
    content = json.dumps(dictionary, indent=2, ensure_ascii=False)
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


def decode_document(content: str) -> Dictionary:
    # GitHub 返回的 base64 内容带换行
    text = base64.b64decode(content).decode("utf-8")
    return json.loads(text)


def _error_message(payload: Any, reason: Optional[str]) -> str:
    message = payload.get("message") if isinstance(payload, dict) else None
    return f"GitHub API error: {message or reason or 'unknown error'}"


class RemoteDictionaryClient:
    """读写远程词典文档"""

    def __init__(
        self,
        config_store: ConfigStore,
        session_manager: Optional[SessionManager] = None,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        path: Optional[str] = None,
        fetch_retries: int = 3,
        retry_wait: Any = None,
    ) -> None:
        self.config_store = config_store
        self.sessions = session_manager or SessionManager()
        self.owner = owner or os.getenv("BORNEO_DICT_OWNER", DEFAULT_DICT_OWNER)
        self.repo = repo or os.getenv("BORNEO_DICT_REPO", DEFAULT_DICT_REPO)
        self.path = path or os.getenv("BORNEO_DICT_PATH", DEFAULT_DICT_PATH)
        self.fetch_retries = max(1, fetch_retries)
        self.retry_wait = retry_wait or wait_exponential(multiplier=0.5, min=0.5, max=4)

    @property
    def url(self) -> str:
        return f"{GITHUB_API_URL}/repos/{self.owner}/{self.repo}/contents/{self.path}"

    def _token(self) -> str:
        token = self.config_store.read().remote_token
        if not token:
            raise CredentialMissing("GitHub token not configured.")
        return token

    @staticmethod
    def _headers(token: str) -> Dict[str, str]:
        return {
            "Authorization": f"token {token}",
            "Accept": GITHUB_ACCEPT,
        }

    @staticmethod
    async def _payload(response) -> Any:
        try:
            return await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            return None

    async def fetch_with_version(self) -> RemoteDocument:
        token = self._token()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.fetch_retries),
            wait=self.retry_wait,
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await self._fetch(token)

    async def _fetch(self, token: str) -> RemoteDocument:
        session = await self.sessions.get_session()
        async with session.get(self.url, headers=self._headers(token)) as response:
            if response.status == 404:
                logger.info("远程词典文件不存在，将在首次写入时创建")
                return RemoteDocument({}, None)
            payload = await self._payload(response)
            if not 200 <= response.status < 300:
                raise RemoteApiError(_error_message(payload, response.reason), response.status)

        if not isinstance(payload, dict) or "content" not in payload:
            raise RemoteApiError("GitHub API error: response has no content", response.status)
        dictionary = coerce_dictionary(decode_document(payload["content"]))
        return RemoteDocument(dictionary, payload.get("sha"))

    async def read(self) -> Dictionary:
        return (await self.fetch_with_version()).dictionary

    async def write(self, dictionary: Dictionary, version_token: Optional[str] = None) -> None:
        token = self._token()
        body: Dict[str, Any] = {
            "message": COMMIT_MESSAGE.format(timestamp=datetime.now(timezone.utc).isoformat()),
            "content": encode_document(dictionary),
        }
        if version_token:
            body["sha"] = version_token

        session = await self.sessions.get_session()
        async with session.put(self.url, headers=self._headers(token), json=body) as response:
            if not 200 <= response.status < 300:
                payload = await self._payload(response)
                raise RemoteApiError(_error_message(payload, response.reason), response.status)

        logger.info("远程词典已更新")

    async def cleanup(self) -> None:
        await self.sessions.cleanup()
