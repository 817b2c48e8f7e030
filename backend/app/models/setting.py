from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DEFAULT_SETTINGS_ID
from app.core.database import Base


class AppSetting(Base):
    """배포 단위 설정 레코드

    AI 설정(키/URL/모델)이 있으면 환경변수보다 우선합니다.
    제안 파이프라인은 이 레코드를 읽기만 합니다.
    """

    __tablename__ = "settings"

    id: Mapped[str] = mapped_column(
        String(50),
        primary_key=True,
        default=DEFAULT_SETTINGS_ID,
    )
    ai_api_key: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    ai_api_url: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )
    ai_model: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AppSetting {self.id}>"
