from .reading_progress import CompletedReading
from .bible_verse import VerseEntry
from .achievement import Achievement

__all__ = [
    "CompletedReading",
    "VerseEntry",
    "Achievement",
]
