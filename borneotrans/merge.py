"""批量合并上传的词典文本。

每行格式为 ``source,target``，只有第一个逗号是分隔符，其余逗号属于译文。
没有逗号、原文或译文为空的行会被跳过。
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .backends import DictionaryBackend, Entry
from .models import MergeResult, pair_key

logger = logging.getLogger(__name__)


def parse_upload(raw_text: str) -> Tuple[List[Entry], int]:
    """返回 (有效条目, 跳过的非空行数)。"""
    entries: List[Entry] = []
    skipped = 0
    for line in raw_text.split("\n"):
        if "," not in line:
            if line.strip():
                skipped += 1
            continue
        source, target = line.split(",", 1)
        source, target = source.strip(), target.strip()
        if not source or not target:
            skipped += 1
            continue
        entries.append((source, target))
    return entries, skipped


async def merge_upload(
    raw_text: str,
    from_lang: str,
    to_lang: str,
    backend: DictionaryBackend,
) -> MergeResult:
    entries, skipped = parse_upload(raw_text)
    if skipped:
        logger.debug("跳过 %d 行格式错误的内容", skipped)
    key = pair_key(from_lang, to_lang)
    result = await backend.merge(key, entries)
    result.skipped_lines = skipped
    if result.warnings:
        logger.warning("%d 条写入本地存储失败", len(result.warnings))
    logger.info("合并完成: %s 更新 %d 条 (%s)", key, result.updated_count, backend.origin)
    return result
