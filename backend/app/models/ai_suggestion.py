import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import SuggestionStatus
from app.core.database import Base


class AISuggestion(Base):
    """회의록에서 추출된 태스크 제안

    상태 전이: pending → approved | pending → rejected (둘 다 종료 상태)
    reviewed_by/reviewed_at은 검토 시 함께 설정되고,
    rejection_reason은 rejected 상태에서만 존재합니다.
    """

    __tablename__ = "ai_suggestions"
    __table_args__ = (
        CheckConstraint(
            "confidence_score >= 0 AND confidence_score <= 1",
            name="ck_ai_suggestions_confidence_range",
        ),
        Index("ix_ai_suggestions_meeting_created", "meeting_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    meeting_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=False,
    )
    original_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    suggested_task: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    suggested_description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    confidence_score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=SuggestionStatus.PENDING,
        nullable=False,
    )
    reviewed_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    rejection_reason: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # 관계
    meeting: Mapped["Meeting"] = relationship("Meeting", back_populates="suggestions")

    @property
    def is_pending(self) -> bool:
        return self.status == SuggestionStatus.PENDING

    def __repr__(self) -> str:
        return f"<AISuggestion {self.suggested_task} ({self.status})>"


# 순환 import 방지
from app.models.meeting import Meeting  # noqa: E402
