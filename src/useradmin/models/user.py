import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, String, DateTime, func
from datetime import datetime
from typing import Optional
from useradmin.db.session import Base
from useradmin.schemas.user import ROLE_NAMES

class User(Base):
    __tablename__ = "users"
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    image_uri: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    # One column per entry of ROLE_NAMES.
    admin: Mapped[bool] = mapped_column(Boolean, default=False)
    editor: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    @property
    def role_names(self) -> list[str]:
        return [name for name in ROLE_NAMES if getattr(self, name)]
