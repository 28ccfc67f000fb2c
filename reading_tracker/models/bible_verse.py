from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from reading_tracker.db.base import Base


class VerseEntry(Base):
    """A curated scripture entry eligible for the daily reading card."""

    __tablename__ = "bible_verses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    book: Mapped[str] = mapped_column(String(64), nullable=False)
    chapter: Mapped[int] = mapped_column(Integer, nullable=False)
    verse_start: Mapped[int] = mapped_column(Integer, nullable=False)
    verse_end: Mapped[int | None] = mapped_column(Integer, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    content_localized: Mapped[str | None] = mapped_column(Text, nullable=True)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    explanation_localized: Mapped[str | None] = mapped_column(Text, nullable=True)
    reading_day: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def reference(self) -> str:
        ref = f"{self.book} {self.chapter}:{self.verse_start}"
        if self.verse_end and self.verse_end != self.verse_start:
            ref += f"-{self.verse_end}"
        return ref

    @property
    def display_content(self) -> str:
        # Localized text wins when present; otherwise fall back to the primary text.
        if self.content_localized and self.content_localized.strip():
            return self.content_localized
        return self.content

    @property
    def display_explanation(self) -> str | None:
        if self.explanation_localized and self.explanation_localized.strip():
            return self.explanation_localized
        return self.explanation
