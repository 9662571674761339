"""同步接口测试模块"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from borneotrans.exceptions import ProviderNotConfigured
from borneotrans.storage import MemoryStorage
from borneotrans.sync import BorneoTranslatorSync, create
from borneotrans.tests.conftest import make_ai_client


@pytest.fixture
def translator():
    """创建同步翻译器实例"""
    client = make_ai_client("Walo", "SAFE")
    with create(storage=MemoryStorage(), client_factory=MagicMock(return_value=client)) as translator:
        translator.config_store.write(ai_api_key="sk-test")
        yield translator


def test_basic_translation(translator):
    """测试基础翻译功能"""
    assert translator.translate("Halo", "ind", "bkp") == "Walo"
    assert translator.moderate("Walo") is True


def test_upload_then_resolve(translator):
    """测试上传后可以直接查到"""
    outcome = translator.upload("kamus.csv", "Halo,Walo\nbad line", "ind", "nij")
    assert outcome.updated_count == 1
    assert translator.resolve("ind", "nij", "HALO") == "Walo"


def test_get_config(translator):
    assert translator.get_config()["api_key"] == "sk-t..."


def test_context_manager_without_key():
    """测试上下文管理器"""
    with BorneoTranslatorSync(storage=MemoryStorage(), client_factory=MagicMock()) as translator:
        with pytest.raises(ProviderNotConfigured):
            translator.translate("Halo", "ind", "bkp")
        assert translator.moderate("anything") is True


def test_context_manager_initializes(monkeypatch):
    monkeypatch.setenv("BORNEO_API_KEY", "sk-env")
    factory = MagicMock(return_value=make_ai_client("Walo"))
    translator = BorneoTranslatorSync(storage=MemoryStorage(), client_factory=factory)
    translator.translator.session_manager.initialize = AsyncMock()
    with translator:
        translator.translator.session_manager.initialize.assert_awaited_once()
        assert translator.translate("Halo", "ind", "bkp") == "Walo"
