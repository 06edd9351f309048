import os

try:
    from . import config as _cfg
except Exception:
    _cfg = None


DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/openai/"


def cfg_get(name: str, default=None, env_names=None):
    # Local config file first; empty values fall back to the environment
    if _cfg and hasattr(_cfg, name):
        val = getattr(_cfg, name)
        if isinstance(val, str):
            if val.strip():
                return val.strip()
        elif val is not None:
            return val
    for env_name in env_names or [name]:
        val = os.environ.get(env_name)
        if val:
            return val
    return default


def gemini_api_key():
    return cfg_get("GEMINI_API_KEY", env_names=["GEMINI_API_KEY", "API_KEY"])


def gemini_model() -> str:
    return cfg_get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)


def gemini_api_base() -> str:
    return cfg_get("GEMINI_API_BASE", DEFAULT_GEMINI_API_BASE)


def default_currency() -> str:
    return cfg_get("DEFAULT_CURRENCY", "IDR")


def currency_locale() -> str:
    return cfg_get("CURRENCY_LOCALE", "id_ID")
