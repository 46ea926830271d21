# Internationalization Module
from .translations import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, get_text, normalize_language

__all__ = ["DEFAULT_LANGUAGE", "SUPPORTED_LANGUAGES", "get_text", "normalize_language"]
