"""管理面板测试"""

import json
from unittest.mock import MagicMock

import pytest

from borneotrans.admin import AdminPanel
from borneotrans.constants import COMMENTS_KEY, CUSTOM_DICTIONARY_KEY, DONATIONS_KEY, UPLOAD_HISTORY_KEY
from borneotrans.exceptions import RemoteApiError

UPLOAD = "Terima Kasih,Tarima Kasih Banyak\nHalo,Walo"


@pytest.mark.asyncio
async def test_local_upload_records_history(translator, storage):
    """测试本地上传成功后记录历史"""
    admin = AdminPanel(translator)
    outcome = await admin.upload("kamus.csv", UPLOAD, "ind", "bkp")

    assert outcome.ok
    assert outcome.updated_count == 2
    assert outcome.message == "2 phrase(s) added to dictionary."

    history = admin.upload_history()
    assert len(history) == 1
    assert history[0].file_name == "kamus.csv"
    assert history[0].origin == "local"
    assert (history[0].source_language, history[0].target_language) == ("ind", "bkp")
    assert await translator.resolve("ind", "bkp", "halo") == "Walo"


@pytest.mark.asyncio
async def test_history_is_newest_first(remote_translator):
    admin = AdminPanel(remote_translator)
    await admin.upload("first.csv", "Halo,Walo", "ind", "bkp")
    await admin.upload("second.csv", "Apa kabar,Kueh kabar", "ind", "bkp")

    names = [item.file_name for item in admin.upload_history()]
    assert names == ["second.csv", "first.csv"]
    assert admin.upload_history()[0].origin == "remote"


@pytest.mark.asyncio
async def test_remote_upload_without_changes(remote_translator, remote):
    """测试远程上传没有变化时不记录历史"""
    admin = AdminPanel(remote_translator)
    outcome = await admin.upload("same.csv", "terima kasih,Tarima Kasih", "ind", "bkp")

    assert outcome.ok
    assert outcome.updated_count == 0
    assert outcome.message == "No new phrases were added."
    assert admin.upload_history() == []
    assert remote.writes == []


@pytest.mark.asyncio
async def test_upload_failure_returns_message(remote_translator, remote, storage):
    """测试远程失败时返回错误描述"""
    remote.fail_fetch = RemoteApiError("GitHub API error: Bad credentials", 401)
    admin = AdminPanel(remote_translator)
    outcome = await admin.upload("kamus.csv", UPLOAD, "ind", "bkp")

    assert not outcome.ok
    assert outcome.message == "Upload failed: GitHub API error: Bad credentials"
    assert storage.get_item(UPLOAD_HISTORY_KEY) is None


@pytest.mark.asyncio
async def test_empty_upload_is_noop(translator):
    outcome = await AdminPanel(translator).upload("empty.csv", "", "ind", "bkp")
    assert outcome.updated_count == 0
    assert outcome.ok


def test_donation_and_rating_summary(translator, storage):
    """测试捐赠总额和评分统计"""
    storage.set_item(DONATIONS_KEY, json.dumps([
        {"name": "Ani", "amount": 50000},
        {"name": "Budi", "amount": 25000.5},
    ]))
    storage.set_item(COMMENTS_KEY, json.dumps([
        {"name": "Ani", "rating": 5, "text": "Bagus"},
        {"name": "Budi", "rating": 4},
        {"name": "Citra", "rating": 5},
    ]))
    admin = AdminPanel(translator)

    assert admin.total_donations() == 75000.5
    assert len(admin.donations()) == 2
    assert admin.rating_summary() == {"5 star": 2, "4 star": 1}


def test_unreadable_panels_degrade_to_empty(translator, storage):
    storage.set_item(DONATIONS_KEY, "{oops")
    storage.set_item(COMMENTS_KEY, json.dumps({"not": "a list"}))
    admin = AdminPanel(translator)
    assert admin.total_donations() == 0
    assert admin.rating_summary() == {}
    assert admin.upload_history() == []


def test_invalid_records_are_skipped(translator, storage):
    """测试无法解析的捐赠和评论记录被跳过，其余照常统计"""
    storage.set_item(DONATIONS_KEY, json.dumps([
        {"name": "a", "amount": "lima ribu"},
        {"name": "b", "amount": -10},
        "not a record",
        {"amount": 5},
    ]))
    storage.set_item(COMMENTS_KEY, json.dumps([
        {"name": "Ani", "rating": "bagus"},
        {"name": "Budi", "rating": 3},
    ]))
    admin = AdminPanel(translator)

    assert admin.total_donations() == 5
    assert [donation.name for donation in admin.donations()] == [""]
    assert admin.rating_summary() == {"3 star": 1}


def test_fractional_ratings_are_kept(translator, storage):
    storage.set_item(COMMENTS_KEY, json.dumps([
        {"name": "Ani", "rating": 4.5},
        {"name": "Budi", "rating": 4.0},
        {"name": "Citra", "rating": "4"},
    ]))
    assert AdminPanel(translator).rating_summary() == {"4.5 star": 1, "4 star": 2}


@pytest.mark.asyncio
async def test_same_language_upload_is_rejected(translator, storage):
    """测试源语言和目标语言相同时拒绝上传"""
    outcome = await AdminPanel(translator).upload("x.csv", "Halo,Walo", "ind", "ind")

    assert not outcome.ok
    assert outcome.updated_count == 0
    assert "must be different" in outcome.message
    assert storage.get_item(UPLOAD_HISTORY_KEY) is None
    assert storage.get_item(CUSTOM_DICTIONARY_KEY) is None


@pytest.mark.asyncio
async def test_local_upload_reports_write_warnings(translator, storage, monkeypatch):
    monkeypatch.setattr(storage, "set_item", MagicMock(side_effect=OSError("disk full")))
    outcome = await AdminPanel(translator).upload("kamus.csv", UPLOAD, "ind", "bkp")

    assert outcome.ok
    assert outcome.updated_count == 2
    assert len(outcome.warnings) == 2
    assert all(warning.operation == "write" for warning in outcome.warnings)
