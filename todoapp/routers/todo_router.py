from fastapi import APIRouter, Depends

from todoapp.client import DataAccessClient
from todoapp.deps import get_client
from todoapp.errors import ValidationError
from todoapp.schemas.todo import TodoCreate, TodoOut

router = APIRouter()


@router.get("", response_model=list[TodoOut])
async def list_todos(client: DataAccessClient = Depends(get_client)):
    return await client.list_todos()


@router.post("", response_model=TodoOut, status_code=201)
async def create_todo(todo_in: TodoCreate, client: DataAccessClient = Depends(get_client)):
    if not todo_in.task or not todo_in.user_id:
        raise ValidationError("Task and userId are required")
    return await client.create_todo(todo_in.task, todo_in.user_id, todo_in.done)
