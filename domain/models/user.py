"""
User account model.

Accounts are owned by the authentication service; the canteen only needs
enough of the record to denormalize the index number onto orders and to
re-check the role on every admin-gated request.
"""

from sqlalchemy import Column, Text, TIMESTAMP, Uuid, Enum as SQLEnum
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.enums import UserRole


class AppUser(Base):
    """User account model"""

    __tablename__ = "app_user"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False)
    index_no = Column(Text, nullable=False)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.STUDENT,
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
