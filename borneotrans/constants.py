"""常量和配置定义"""

# 语言标识
INDONESIAN = "ind"
BAKUMPAI = "bkp"
NGAJU = "nij"

LANGUAGE_NAMES = {
    INDONESIAN: "Indonesian",
    BAKUMPAI: "Bakumpai Dayak",
    NGAJU: "Ngaju Dayak",
}

# 本地存储键
API_CONFIG_KEY = "api_config"
CUSTOM_DICTIONARY_KEY = "customDictionary"
UPLOAD_HISTORY_KEY = "uploadHistory"
DONATIONS_KEY = "donations"
COMMENTS_KEY = "comments"

DEFAULT_STORAGE_PATH = "~/.config/borneotrans/storage.json"

# 提供方
PROVIDER_AI = "ai"
PROVIDER_REMOTE = "remote"

ORIGIN_LOCAL = "local"
ORIGIN_REMOTE = "remote"

# 远程词典文档
GITHUB_API_URL = "https://api.github.com"
DEFAULT_DICT_OWNER = "bangindra123"
DEFAULT_DICT_REPO = "borneo-ai-dictionary"
DEFAULT_DICT_PATH = "dictionary.json"
GITHUB_ACCEPT = "application/vnd.github.v3+json"
COMMIT_MESSAGE = "[Admin Panel] Update custom dictionary {timestamp}"

# 词典缓存有效期（秒）
DICTIONARY_CACHE_TTL = 5 * 60

# AI 接口
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TTS_MODEL = "gpt-4o-audio-preview"
DEFAULT_VOICE = "alloy"
DEFAULT_AUDIO_FORMAT = "wav"

DEFAULT_GATEWAY_CONFIG = {
    'timeout': 30,
    'temperature': 0.3,
    'max_tokens': 1024,
    'cache_ttl': DICTIONARY_CACHE_TTL,
    'fetch_retries': 3,
}

FACT_COUNT = 3
FACT_SEPARATOR = "|||"

SAFE_LABEL = "SAFE"
UNSAFE_LABEL = "UNSAFE"

# 提示词模板
TRANSLATE_PROMPT = (
    'Translate the following text from {src} to {dest}. '
    'Provide only the translation, without any extra explanation or context. '
    'Text: "{text}"'
)

MODERATION_PROMPT = """
Analyze the following text for sensitive content. Categories to check for include hate speech, harassment, violence, self-harm, sexually explicit content, and dangerous goods.
Respond with only a single word: "SAFE" if the text is not sensitive in any of these categories, or "UNSAFE" if it is. Do not provide any explanation.

Text: "{text}"
"""

SPEECH_INSTRUCTION = "Read the user's text aloud exactly as written. Do not add anything."

CULTURAL_FACTS_PROMPT = """
Generate {count} brief, interesting, and distinct cultural facts about the Dayak people of Borneo, particularly related to their languages (Ngaju, Bakumpai) or traditions.
Present each fact as a short, self-contained paragraph.
Separate each fact with "{separator}".
Do not include titles or numbering.
"""
