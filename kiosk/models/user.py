"""User model - the login identity every other row hangs off."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk.db.base import Base
from kiosk.models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin


class User(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Rows are removed by ON DELETE CASCADE in the database
    profile = relationship("Profile", back_populates="user", uselist=False, passive_deletes=True)
    subscription = relationship("Subscription", back_populates="user", uselist=False, passive_deletes=True)

    def __repr__(self) -> str:
        return f"<User {self.email}>"
