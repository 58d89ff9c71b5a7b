"""
Authentication Service.
"""

import logging
from typing import Optional
from datetime import timedelta

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from kanaku.core import security
from kanaku.config import settings
from kanaku.models.user import User
from kanaku.services.employee_service import employee_service

logger = logging.getLogger(__name__)


class AuthService:
    def authenticate_user(
        self, db: Session, email: str, password: str
    ) -> Optional[User]:
        """Authenticate a user by email and password."""
        user = self.get_user_by_email(db, email)
        if not user:
            return None
        if not security.verify_password(password, user.hashed_password):
            return None
        return user

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive)."""
        return db.query(User).filter(User.email == email.strip().lower()).first()

    def get_user_by_id(self, db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def create_user(
        self, db: Session, email: str, password: str, full_name: Optional[str] = None
    ) -> User:
        """Create a new user and activate any shop invitations sent to their email."""
        email = email.strip().lower()
        existing_user = self.get_user_by_email(db, email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email already exists",
            )

        hashed_password = security.get_password_hash(password)
        db_user = User(email=email, full_name=full_name, hashed_password=hashed_password)
        db.add(db_user)
        db.flush()

        claimed = employee_service.claim_invitations(db, db_user)
        db.commit()
        db.refresh(db_user)
        logger.info(f"Registered user {db_user.id} ({claimed} pending invitation(s) activated)")
        return db_user

    def create_user_token(self, user: User) -> dict:
        """Create access token for user."""
        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = security.create_access_token(
            {"sub": user.email, "user_id": user.id},
            expires_delta=access_token_expires,
        )
        return {"access_token": access_token, "token_type": "bearer"}


auth_service = AuthService()
