"""数据模型定义。"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from .constants import ORIGIN_LOCAL, PROVIDER_AI, PROVIDER_REMOTE

# {"ind-bkp": {"terima kasih": "Tarima Kasih"}}
Dictionary = Dict[str, Dict[str, str]]

T = TypeVar("T")


def pair_key(from_lang: str, to_lang: str) -> str:
    return f"{from_lang}-{to_lang}"


def normalize_phrase(text: str) -> str:
    return text.lower().strip()


def coerce_dictionary(data: Any) -> Dictionary:
    """只保留结构正确的语言对和字符串译文，其余丢弃。"""
    if not isinstance(data, dict):
        return {}
    return {
        key: {phrase: value for phrase, value in phrases.items() if isinstance(value, str)}
        for key, phrases in data.items()
        if isinstance(phrases, dict)
    }


class Provider(str, Enum):
    AI = PROVIDER_AI
    REMOTE = PROVIDER_REMOTE

    @classmethod
    def parse(cls, value: Any) -> "Provider":
        try:
            return cls(value)
        except ValueError:
            return cls.AI


@dataclass
class ApiConfig:
    """当前提供方及各自凭据。"""

    selected_provider: Provider = Provider.AI
    ai_api_key: Optional[str] = None
    remote_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiConfig":
        return cls(
            selected_provider=Provider.parse(data.get("selected_provider")),
            ai_api_key=data.get("ai_api_key") or None,
            remote_token=data.get("remote_token") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected_provider": self.selected_provider.value,
            "ai_api_key": self.ai_api_key,
            "remote_token": self.remote_token,
        }


@dataclass
class RemoteDocument:
    dictionary: Dictionary
    version_token: Optional[str] = None


@dataclass
class PersistenceWarning:
    """本地存储读写失败的记录，只记录日志，不抛出。"""

    key: str
    operation: str
    reason: str

    def __str__(self) -> str:
        return f"{self.operation} {self.key!r} failed: {self.reason}"


@dataclass
class Recovered(Generic[T]):
    """可降级的读取结果：失败时 value 为默认值，warning 说明原因。"""

    value: T
    warning: Optional[PersistenceWarning] = None

    @property
    def degraded(self) -> bool:
        return self.warning is not None


@dataclass
class UploadHistoryItem:
    file_name: str
    source_language: str
    target_language: str
    timestamp: str
    origin: str = ORIGIN_LOCAL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadHistoryItem":
        return cls(
            file_name=data.get("file_name", ""),
            source_language=data.get("source_language", ""),
            target_language=data.get("target_language", ""),
            timestamp=data.get("timestamp", ""),
            origin=data.get("origin", ORIGIN_LOCAL),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _amount(value: Any) -> float:
    amount = float(value or 0)
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"invalid amount: {value!r}")
    return amount


def _rating(value: Any) -> Union[int, float]:
    # 4.5 保留为 "4.5 star"，5.0 显示为 "5 star"
    rating = float(value or 0)
    return int(rating) if rating.is_integer() else rating


@dataclass
class Donation:
    name: str
    amount: float
    message: str = ""
    date: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Donation":
        return cls(
            name=data.get("name", ""),
            amount=_amount(data.get("amount", 0)),
            message=data.get("message", ""),
            date=data.get("date", ""),
        )


@dataclass
class Comment:
    name: str
    rating: Union[int, float]
    text: str = ""
    date: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comment":
        return cls(
            name=data.get("name", ""),
            rating=_rating(data.get("rating", 0)),
            text=data.get("text", ""),
            date=data.get("date", ""),
        )


@dataclass
class MergeResult:
    updated_count: int = 0
    skipped_lines: int = 0
    warnings: List[PersistenceWarning] = field(default_factory=list)


@dataclass
class UploadOutcome:
    """管理面板上传的结果，message 用于提示框。"""

    message: str
    updated_count: int = 0
    error: Optional[str] = None
    history_item: Optional[UploadHistoryItem] = None
    warnings: List[PersistenceWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = [
    "Dictionary",
    "pair_key",
    "normalize_phrase",
    "coerce_dictionary",
    "Provider",
    "ApiConfig",
    "RemoteDocument",
    "PersistenceWarning",
    "Recovered",
    "UploadHistoryItem",
    "Donation",
    "Comment",
    "MergeResult",
    "UploadOutcome",
]
