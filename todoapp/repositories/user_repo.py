from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from todoapp.models.user import User


class UserRepository:
    async def create(self, db: AsyncSession, username: str, password: str) -> User:
        user = User(username=username, password=password)
        db.add(user)
        # id is generated client side, so no refresh round-trip is needed
        await db.commit()
        return user

    async def list(self, db: AsyncSession) -> Sequence[User]:
        result = await db.execute(select(User))
        return result.scalars().all()
