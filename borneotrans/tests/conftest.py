"""测试共用夹具"""

import copy
from unittest.mock import AsyncMock, MagicMock

import pytest

from borneotrans.core import BorneoTranslator
from borneotrans.exceptions import CredentialMissing, RemoteApiError
from borneotrans.models import RemoteDocument
from borneotrans.storage import MemoryStorage


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRemoteClient:
    """内存中的远程文档，写入时校验 sha"""

    def __init__(self, dictionary=None, sha="v1"):
        self.dictionary = copy.deepcopy(dictionary) if dictionary is not None else None
        self.sha = sha if dictionary is not None else None
        self.fetch_count = 0
        self.writes = []
        self.fail_fetch = None
        self.fail_write = None
        self.token = "ghp-test"

    async def fetch_with_version(self):
        self.fetch_count += 1
        if not self.token:
            raise CredentialMissing("GitHub token not configured.")
        if self.fail_fetch is not None:
            raise self.fail_fetch
        if self.dictionary is None:
            return RemoteDocument({}, None)
        return RemoteDocument(copy.deepcopy(self.dictionary), self.sha)

    async def read(self):
        return (await self.fetch_with_version()).dictionary

    async def write(self, dictionary, version_token=None):
        if self.fail_write is not None:
            raise self.fail_write
        if self.sha is not None and version_token != self.sha:
            raise RemoteApiError("GitHub API error: sha does not match", 409)
        self.writes.append((copy.deepcopy(dictionary), version_token))
        self.dictionary = copy.deepcopy(dictionary)
        self.sha = f"v{len(self.writes) + 1}"


def completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


def make_ai_client(*contents, side_effect=None):
    client = MagicMock()
    client.close = AsyncMock()
    if side_effect is not None:
        client.chat.completions.create = AsyncMock(side_effect=side_effect)
    else:
        client.chat.completions.create = AsyncMock(
            side_effect=[completion(content) for content in contents]
        )
    return client


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("BORNEO_API_KEY", "BORNEO_MODEL", "BORNEO_BASE_URL", "BORNEO_TTS_MODEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def remote():
    return FakeRemoteClient({"ind-bkp": {"terima kasih": "Tarima Kasih"}})


@pytest.fixture
def ai_client():
    return make_ai_client("Translated")


@pytest.fixture
def client_factory(ai_client):
    return MagicMock(return_value=ai_client)


@pytest.fixture
def translator(storage, remote, client_factory, clock):
    translator = BorneoTranslator(
        storage=storage,
        client_factory=client_factory,
        remote_client=remote,
        clock=clock,
    )
    translator.config_store.write(selected_provider="ai", ai_api_key="sk-test")
    return translator


@pytest.fixture
def remote_translator(translator):
    translator.config_store.write(selected_provider="remote", remote_token="ghp-test")
    return translator


@pytest.fixture
def remote_factory():
    return FakeRemoteClient
