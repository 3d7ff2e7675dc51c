"""
Translation Service - best-effort translation through the completion service.

RULES:
- Blank text is returned unchanged (success) without calling the service
- One attempt per call, bounded by a timeout
- On any failure the ORIGINAL text comes back with success=False, so the
  UI can always show something
- Calls share no mutable state apart from the optional MongoDB cache
"""

import asyncio
import logging
import re
from typing import Optional

from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from internmatch.schemas.schemas import TranslationResult, TranslationSettings
from internmatch.services.completion_client import CompletionClient, CompletionError
from internmatch.services.mongo_service import TranslationCacheService

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to translate text. Using original message."
AUTO_DETECTED = "auto-detected"

# Common language codes and names
LANGUAGE_MAP = {
    "en": "English",
    "ja": "Japanese",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "zh": "Chinese",
    "ko": "Korean",
    "pt": "Portuguese",
    "it": "Italian",
    "ru": "Russian",
    "ar": "Arabic",
    "th": "Thai",
    "hi": "Hindi",
    "el": "Greek",
    "he": "Hebrew",
    "vi": "Vietnamese",
    "nl": "Dutch",
}

# Checked in order: kana before the shared CJK range so Japanese wins
_SCRIPT_PATTERNS = [
    ("Japanese", re.compile(r"[\u3040-\u30ff]")),
    ("Korean", re.compile(r"[\uac00-\ud7af\u1100-\u11ff]")),
    ("Chinese", re.compile(r"[\u4e00-\u9fff\u3400-\u4dbf]")),
    ("Russian", re.compile(r"[\u0400-\u04ff]")),
    ("Arabic", re.compile(r"[\u0600-\u06ff]")),
    ("Thai", re.compile(r"[\u0e00-\u0e7f]")),
    ("Hindi", re.compile(r"[\u0900-\u097f]")),
    ("Greek", re.compile(r"[\u0370-\u03ff]")),
    ("Hebrew", re.compile(r"[\u0590-\u05ff]")),
]

_QUOTE_PAIRS = [('"', '"'), ("“", "”"), ("「", "」")]


def get_language_name(code_or_name: Optional[str]) -> str:
    """'ja' -> 'Japanese', 'japanese' -> 'Japanese'; unknown values pass through."""
    if not code_or_name:
        return ""
    value = code_or_name.strip()
    if value.lower() in LANGUAGE_MAP:
        return LANGUAGE_MAP[value.lower()]
    for name in LANGUAGE_MAP.values():
        if name.lower() == value.lower():
            return name
    return value


def get_language_code(name: str) -> str:
    """'Japanese' -> 'ja'; unknown names come back lower-cased."""
    for code, language in LANGUAGE_MAP.items():
        if language.lower() == name.strip().lower():
            return code
    return name.strip().lower()


def guess_language(text: str) -> Optional[str]:
    """
    Best guess from the writing system alone. Latin-script text is not
    guessed (None).
    """
    if not text:
        return None
    for language, pattern in _SCRIPT_PATTERNS:
        if pattern.search(text):
            return language
    return None


def build_translation_prompt(text: str, target_language: str, source_language: Optional[str] = None) -> str:
    source_part = f" from {source_language}" if source_language else ""
    return f"""Translate the following text{source_part} to {target_language}.
Maintain the original meaning, tone, and formatting as closely as possible.
Only return the translated text without any explanations or additional text.

Text to translate:
"{text}"
"""


def clean_translation(reply: str, original: str) -> str:
    """Strip whitespace and one pair of wrapping quotes the model echoed back."""
    cleaned = (reply or "").strip()
    source = original.strip()
    for opening, closing in _QUOTE_PAIRS:
        wrapped = len(cleaned) >= 2 and cleaned.startswith(opening) and cleaned.endswith(closing)
        if wrapped and not (source.startswith(opening) and source.endswith(closing)):
            return cleaned[len(opening):-len(closing)].strip()
    return cleaned


class TranslationOrchestrator:
    """
    Translates text with the completion service, falling back to the
    original text.

    Args:
        client: completion client
        cache: optional TranslationCacheService (MongoDB)
        timeout: seconds allowed for the completion call
    """

    def __init__(
        self,
        client: CompletionClient,
        cache: Optional[TranslationCacheService] = None,
        timeout: Optional[float] = None,
    ):
        self.client = client
        self.cache = cache
        self.timeout = timeout

    async def _complete(self, prompt: str) -> str:
        call = self.client.complete(prompt, timeout=self.timeout)
        if self.timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout)

    async def _cache_get(self, key: str) -> Optional[str]:
        if self.cache is None:
            return None
        try:
            doc = await run_in_threadpool(self.cache.get, key)
        except PyMongoError as e:
            logger.warning("Translation cache read failed: %s", e)
            return None
        return doc.get("translated_text") if doc else None

    async def _cache_store(self, key: str, translated: str, target: str, source: Optional[str]) -> None:
        if self.cache is None:
            return
        try:
            await run_in_threadpool(self.cache.store, key, translated, target, source)
        except PyMongoError as e:
            logger.warning("Translation cache write failed: %s", e)

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: Optional[str] = None,
    ) -> TranslationResult:
        if text is None or not text.strip():
            return TranslationResult(translated_text=text or "", success=True)

        target = get_language_name(target_language)
        source = get_language_name(source_language) or None
        if not target:
            return TranslationResult(
                translated_text=text, success=False, error="Target language is required."
            )

        detected = source or guess_language(text) or AUTO_DETECTED
        if source and source.lower() == target.lower():
            return TranslationResult(translated_text=text, success=True, detected_language=detected)

        key = None
        if self.cache is not None:
            key = TranslationCacheService.make_key(text, target, source)
            cached = await self._cache_get(key)
            if cached:
                return TranslationResult(translated_text=cached, success=True, detected_language=detected)

        try:
            reply = await self._complete(build_translation_prompt(text, target, source))
        except (CompletionError, asyncio.TimeoutError) as e:
            logger.warning("Translation to %s failed: %s", target, e)
            return TranslationResult(translated_text=text, success=False, error=FAILURE_MESSAGE)
        except Exception:
            logger.exception("Translation to %s raised, returning original text", target)
            return TranslationResult(translated_text=text, success=False, error=FAILURE_MESSAGE)

        translated = clean_translation(reply, text)
        if not translated:
            logger.warning("Translation to %s returned empty text", target)
            return TranslationResult(translated_text=text, success=False, error=FAILURE_MESSAGE)

        if key is not None:
            await self._cache_store(key, translated, target, source)
        return TranslationResult(translated_text=translated, success=True, detected_language=detected)

    async def translate_with_settings(self, text: str, settings: TranslationSettings) -> TranslationResult:
        """
        Translate using per-call preferences.

        Disabled -> passthrough. auto_detect -> the source language is not
        sent and is guessed instead.
        """
        if not settings.enabled:
            return TranslationResult(translated_text=text or "", success=True)
        source = None if settings.auto_detect else settings.source_language
        return await self.translate(text, settings.target_language, source)

    async def detect_language(self, text: str) -> str:
        """Script-based guess; 'unknown' for blank text."""
        if not text or not text.strip():
            return "unknown"
        return guess_language(text) or AUTO_DETECTED
