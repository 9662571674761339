"""资源管理模块"""

import logging
from typing import Any, Callable, Optional

import aiohttp
import openai

logger = logging.getLogger(__name__)


class SessionManager:
    """管理异步HTTP会话"""

    def __init__(self, timeout: float = 30):
        self._session: Optional[aiohttp.ClientSession] = None
        self._timeout = timeout

    async def initialize(self):
        """初始化会话"""
        if not self._session or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )

    async def get_session(self) -> aiohttp.ClientSession:
        """获取会话实例"""
        if not self._session or self._session.closed:
            await self.initialize()
        return self._session

    async def cleanup(self):
        """清理会话资源"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None


class ClientManager:
    """管理 AI 客户端。凭据变化时重建，没有凭据时客户端为空。"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        client_factory: Callable[..., Any] = openai.AsyncOpenAI,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._client_factory = client_factory
        self._client = None
        self._api_key: Optional[str] = None
        self._retired: list = []

    def build(self, api_key: Optional[str]) -> bool:
        """按当前凭据（重新）创建客户端，返回是否可用。密钥未变时沿用原客户端"""
        if api_key == self._api_key and (self._client is not None or not api_key):
            return self._client is not None
        if self._client is not None:
            self._retired.append(self._client)
        self._api_key = api_key
        if api_key:
            self._client = self._client_factory(
                api_key=api_key,
                base_url=self.base_url,
                timeout=self.timeout,
            )
        else:
            self._client = None
        return self._client is not None

    @property
    def client(self):
        return self._client

    @property
    def available(self) -> bool:
        return self._client is not None

    @property
    def retired_count(self) -> int:
        return len(self._retired)

    async def close_retired(self):
        """关闭凭据变化后被替换下来的客户端"""
        clients, self._retired = self._retired, []
        await self._close_all(clients)

    async def cleanup(self):
        """清理客户端资源"""
        clients = self._retired + ([self._client] if self._client is not None else [])
        self._retired = []
        self._client = None
        self._api_key = None
        await self._close_all(clients)

    async def _close_all(self, clients):
        for client in clients:
            close = getattr(client, "close", None)
            if close is None:
                continue
            try:
                await close()
            except Exception as e:
                logger.error(f"Error during client cleanup: {e}")
