"""管理面板服务：词典上传、上传记录、捐赠与评分统计。"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, TypeVar

from .constants import COMMENTS_KEY, DONATIONS_KEY, UPLOAD_HISTORY_KEY
from .core import BorneoTranslator
from .merge import merge_upload
from .models import Comment, Donation, UploadHistoryItem, UploadOutcome
from .storage import read_json, write_json

logger = logging.getLogger(__name__)

R = TypeVar("R")


class AdminPanel:
    def __init__(self, translator: BorneoTranslator) -> None:
        self.translator = translator
        self.storage = translator.storage

    async def upload(self, file_name: str, raw_text: str, from_lang: str, to_lang: str) -> UploadOutcome:
        """合并上传文件，成功且有更新时追加一条上传记录。"""
        if from_lang == to_lang:
            message = "Upload failed: source and target languages must be different."
            return UploadOutcome(message, error=message)
        if not raw_text:
            return UploadOutcome("No new phrases were added.")

        backend = self.translator.active_backend()
        try:
            result = await merge_upload(raw_text, from_lang, to_lang, backend)
        except Exception as exc:
            logger.error("上传失败: %s", exc)
            message = f"Upload failed: {str(exc) or 'An unknown error occurred.'}"
            return UploadOutcome(message, error=message)

        if not result.updated_count:
            return UploadOutcome("No new phrases were added.", warnings=result.warnings)

        item = UploadHistoryItem(
            file_name=file_name,
            source_language=from_lang,
            target_language=to_lang,
            timestamp=datetime.now(timezone.utc).isoformat(),
            origin=backend.origin,
        )
        self.record_upload(item)
        return UploadOutcome(
            f"{result.updated_count} phrase(s) added to dictionary.",
            updated_count=result.updated_count,
            history_item=item,
            warnings=result.warnings,
        )

    def upload_history(self) -> List[UploadHistoryItem]:
        return self._records(UPLOAD_HISTORY_KEY, UploadHistoryItem.from_dict)

    def record_upload(self, item: UploadHistoryItem) -> None:
        # 最新的在前，不做淘汰
        history = [entry.to_dict() for entry in self.upload_history()]
        write_json(self.storage, UPLOAD_HISTORY_KEY, [item.to_dict()] + history)

    def _records(self, key: str, parse: Callable[[Dict[str, Any]], R]) -> List[R]:
        items = read_json(self.storage, key, []).value
        if not isinstance(items, list):
            return []
        records: List[R] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                records.append(parse(item))
            except (TypeError, ValueError) as exc:
                logger.warning("跳过无效记录 %s: %s", key, exc)
        return records

    def donations(self) -> List[Donation]:
        return self._records(DONATIONS_KEY, Donation.from_dict)

    def comments(self) -> List[Comment]:
        return self._records(COMMENTS_KEY, Comment.from_dict)

    def total_donations(self) -> float:
        return sum(donation.amount for donation in self.donations())

    def rating_summary(self) -> Dict[str, int]:
        counts = Counter(f"{comment.rating} star" for comment in self.comments())
        return dict(counts)
