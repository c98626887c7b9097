from fastapi import APIRouter, Depends

from todoapp.client import DataAccessClient
from todoapp.deps import get_client
from todoapp.errors import ValidationError
from todoapp.schemas.user import UserCreate, UserOut

router = APIRouter()


@router.get("/", response_model=list[UserOut])
async def list_users(client: DataAccessClient = Depends(get_client)):
    return await client.list_users()


@router.post("/", response_model=UserOut, status_code=201)
async def create_user(user_in: UserCreate, client: DataAccessClient = Depends(get_client)):
    if not user_in.username or not user_in.password:
        raise ValidationError("Username and password are required")
    return await client.create_user(user_in.username, user_in.password)
