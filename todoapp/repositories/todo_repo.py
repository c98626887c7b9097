from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from todoapp.models.todo import Todo


class TodoRepository:
    async def create(
        self, db: AsyncSession, task: str, user_id: str, done: Optional[bool] = None
    ) -> Todo:
        todo = Todo(task=task, user_id=user_id, done=bool(done))
        db.add(todo)
        await db.commit()
        return todo

    async def list(self, db: AsyncSession) -> Sequence[Todo]:
        result = await db.execute(select(Todo))
        return result.scalars().all()
