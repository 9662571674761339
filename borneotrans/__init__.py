"""
BorneoTrans - 印尼语与达雅克方言（Bakumpai、Ngaju）翻译助手

提供异步和同步接口：自定义词典优先的翻译、内容审核、语音合成，
以及管理员批量上传词典的功能。
"""

__version__ = "0.3.0"

from .admin import AdminPanel
from .backends import DictionaryBackend, LocalBackend, RemoteBackend
from .cache import DictionaryCache
from .config import ConfigStore
from .core import BorneoTranslator
from .merge import merge_upload, parse_upload
from .models import ApiConfig, Provider, UploadHistoryItem, UploadOutcome
from .remote import RemoteDictionaryClient
from .resolver import DictionaryResolver
from .storage import FileStorage, MemoryStorage
from .sync import BorneoTranslatorSync, create
from .exceptions import (
    BorneoError, CredentialMissing, RemoteApiError, ProviderNotConfigured,
    TranslationFailed, SpeechSynthesisFailed, CulturalFactsFailed
)

__all__ = [
    'BorneoTranslator',
    'BorneoTranslatorSync',
    'create',
    'AdminPanel',
    'ConfigStore',
    'ApiConfig',
    'Provider',
    'DictionaryBackend',
    'LocalBackend',
    'RemoteBackend',
    'RemoteDictionaryClient',
    'DictionaryCache',
    'DictionaryResolver',
    'FileStorage',
    'MemoryStorage',
    'merge_upload',
    'parse_upload',
    'UploadHistoryItem',
    'UploadOutcome',
    'BorneoError',
    'CredentialMissing',
    'RemoteApiError',
    'ProviderNotConfigured',
    'TranslationFailed',
    'SpeechSynthesisFailed',
    'CulturalFactsFailed',
]
