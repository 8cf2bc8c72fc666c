"""
User Repository - Data access layer for account lookups
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import AppUser
from domain.enums import UserRole
from app.exceptions import ConflictError


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_id(self, user_id: UUID) -> Optional[AppUser]:
        return self.db.query(AppUser).filter(AppUser.user_id == user_id).first()

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by email"""
        return self.db.query(AppUser).filter(AppUser.email == email).first()

    def create_user(
        self,
        email: str,
        name: str,
        index_no: str,
        role: UserRole = UserRole.STUDENT,
    ) -> AppUser:
        """Create a new account record"""
        user = AppUser(email=email, name=name, index_no=index_no, role=role)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"User with email {email} already exists")

    def set_role(self, user: AppUser, role: UserRole) -> AppUser:
        user.role = role
        return self.update(user)
