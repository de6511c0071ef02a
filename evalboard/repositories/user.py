"""User repository: identity and role records."""

from typing import List, Optional
from datetime import datetime, timezone
from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.models.user import User
from evalboard.models.enums import UserRole, UserStatus
from evalboard.utils.store import execute_read


class UserRepository:
    """User repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ===== USER CRUD OPERATIONS =====

    def add(self, email: str, hashed_password: str, role: UserRole, name: Optional[str] = None) -> User:
        """Stage a new user in the session without committing."""
        user = User(
            email=email.lower(),
            password=hashed_password,
            name=name,
            role=role,
            status=UserStatus.ACTIVE,
        )
        self.session.add(user)
        return user

    async def create(self, email: str, hashed_password: str, role: UserRole, name: Optional[str] = None) -> User:
        """Create user."""
        user = self.add(email, hashed_password, role, name)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        query = select(User).where(User.id == user_id)
        result = await execute_read(self.session, query, "user lookup")
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        query = select(User).where(User.email == email.lower())
        result = await execute_read(self.session, query, "user lookup by email")
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_user_id: Optional[int] = None) -> bool:
        """Check if email already exists."""
        query = select(func.count(User.id)).where(User.email == email.lower())
        if exclude_user_id:
            query = query.where(User.id != exclude_user_id)
        result = await execute_read(self.session, query, "email check")
        return result.scalar_one() > 0

    async def update_last_login(self, user_id: int) -> None:
        """Update user last login time."""
        query = (
            update(User)
            .where(User.id == user_id)
            .values(last_login_at=datetime.now(timezone.utc))
        )
        await self.session.execute(query)
        await self.session.commit()

    # ===== ROLE QUERIES =====

    async def list_by_role(self, role: UserRole) -> List[User]:
        query = select(User).where(User.role == role).order_by(User.name, User.email)
        result = await execute_read(self.session, query, "users by role")
        return list(result.scalars().all())

    async def delete(self, user_id: int) -> bool:
        """Delete the identity and role record."""
        result = await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.commit()
        return result.rowcount > 0
