"""异常处理模块"""

from typing import Optional


class BorneoError(Exception):
    """翻译助手基础异常类"""
    pass


class CredentialMissing(BorneoError):
    """当前提供方所需的凭据缺失"""
    pass


class RemoteApiError(BorneoError):
    """远程文档接口返回非成功状态"""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class ProviderNotConfigured(BorneoError):
    """没有可用的 AI 客户端"""
    pass


class TranslationFailed(BorneoError):
    """翻译错误"""
    pass


class SpeechSynthesisFailed(BorneoError):
    """语音合成错误"""
    pass


class CulturalFactsFailed(BorneoError):
    """文化知识生成错误"""
    pass
