from sqlalchemy import JSON, Float, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class KVEntry(Base):
    __tablename__ = "kv_entry"
    __table_args__ = (
        # Index for purging expired rows
        Index("idx_kv_expires_at", "expires_at"),
    )

    # Composite key joined with ":" (e.g. "session:<uuid>")
    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
    # Unix seconds; NULL never expires
    expires_at: Mapped[float | None] = mapped_column(Float, nullable=True)
