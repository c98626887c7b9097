import json
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates

from todoapp.client import DataAccessClient
from todoapp.deps import get_client
from todoapp.schemas.user import UserOut

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter()


@router.get("/")
async def home(request: Request, client: DataAccessClient = Depends(get_client)):
    # rendered on every request; storage errors are left to the server
    users = await client.list_users()
    users_json = json.dumps([UserOut.model_validate(u).model_dump() for u in users])
    return templates.TemplateResponse(
        request,
        "index.html",
        {"users_json": users_json},
        headers={"Cache-Control": "no-store"},
    )
