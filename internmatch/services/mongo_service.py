"""
MongoDB Service - translation cache.

Translations are expensive completion calls, so identical requests
(same text, source and target language) are served from MongoDB.
The text hash in the key detects any change to the source text.
"""

import hashlib
import json
from datetime import datetime, timezone
from typing import Optional

from pymongo.collection import Collection

from internmatch.db.mongodb import get_collection, COLLECTIONS


class TranslationCacheService:
    """
    Stores and looks up translated text by cache key.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = (
            collection if collection is not None
            else get_collection(COLLECTIONS["translation_cache"])
        )

    @staticmethod
    def make_key(text: str, target_language: str, source_language: Optional[str] = None) -> str:
        """SHA-256 over (text, source, target); target/source are case-folded."""
        payload = json.dumps(
            [text, (source_language or "").lower(), target_language.lower()],
            ensure_ascii=False,
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

    def get(self, cache_key: str) -> Optional[dict]:
        """Fetch a cached translation document, or None."""
        return self.collection.find_one({"cache_key": cache_key}, {"_id": 0})

    def store(
        self,
        cache_key: str,
        translated_text: str,
        target_language: str,
        source_language: Optional[str] = None,
    ) -> None:
        """Insert or refresh a cached translation."""
        self.collection.update_one(
            {"cache_key": cache_key},
            {
                "$set": {
                    "cache_key": cache_key,
                    "translated_text": translated_text,
                    "target_language": target_language,
                    "source_language": source_language,
                    "created_at": datetime.now(timezone.utc),
                }
            },
            upsert=True,
        )


def get_translation_cache() -> TranslationCacheService:
    """Get translation cache service instance."""
    return TranslationCacheService()
