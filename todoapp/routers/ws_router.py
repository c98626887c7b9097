import random

import structlog
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.responses import PlainTextResponse

from todoapp.client import DataAccessClient
from todoapp.deps import get_client
from todoapp.errors import StorageError

logger = structlog.get_logger(__name__)

router = APIRouter()

ERROR_REPLY = "Error creating user"


def placeholder_credential() -> str:
    return str(random.random())


@router.get("/")
async def upgrade_required():
    return PlainTextResponse("Upgrade failed", status_code=500)


@router.websocket("/")
async def echo_and_create(websocket: WebSocket, client: DataAccessClient = Depends(get_client)):
    """Create a placeholder user for every inbound message, then echo it."""
    await websocket.accept()
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            break
        try:
            user = await client.create_user(placeholder_credential(), placeholder_credential())
        except StorageError as exc:
            logger.error("Error creating user", kind=exc.kind, error=exc.message)
            reply = ERROR_REPLY
        else:
            logger.info("New user created", user_id=user.id, username=user.username)
            reply = message["bytes"] if message.get("bytes") is not None else message.get("text") or ""
        try:
            if isinstance(reply, bytes):
                await websocket.send_bytes(reply)
            else:
                await websocket.send_text(reply)
        except WebSocketDisconnect as exc:
            # peer left while the user was being created
            logger.info("WebSocket closed before reply", code=exc.code)
            break
