"""WebSocket routes for real-time notification delivery"""

import json
import logging
from typing import Dict, Set

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query, status

from nova.services.auth_service import AuthService
from nova.services.redis_service import RedisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ws", tags=["websocket"])


class ConnectionManager:
    """
    Manages WebSocket connections per user. Every connection of a user
    receives that user's newly created notifications.
    """

    def __init__(self):
        # Map of user_id to set of active connections
        self.active_connections: Dict[str, Set[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, user_id: str):
        """Accept WebSocket connection and register it for the user"""
        await websocket.accept()
        self.active_connections.setdefault(user_id, set()).add(websocket)

    def disconnect(self, websocket: WebSocket, user_id: str):
        """Remove WebSocket connection"""
        connections = self.active_connections.get(user_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            del self.active_connections[user_id]

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific websocket"""
        await websocket.send_json(message)

    async def broadcast_to_user(self, user_id: str, message: dict) -> int:
        """Send message to all of a user's connections; returns deliveries"""
        delivered = 0
        disconnected = []

        for connection in list(self.active_connections.get(user_id, ())):
            try:
                await connection.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping websocket for user {user_id}: {e}")
                disconnected.append(connection)

        for connection in disconnected:
            self.disconnect(connection, user_id)

        return delivered


# Global connection manager
manager = ConnectionManager()


@router.websocket("/notifications")
async def websocket_notifications(websocket: WebSocket, token: str = Query(...)):
    """
    WebSocket endpoint for live notifications.
    Browsers cannot set headers on websockets, so the access token comes as a query parameter.
    """
    payload = AuthService.validate_token(token, token_type="access")
    if not payload or await RedisService().is_token_blacklisted(token):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id = str(payload["sub"])
    await manager.connect(websocket, user_id)

    try:
        await manager.send_personal_message(
            {"type": "connected", "message": "Subscribed to notifications"},
            websocket,
        )

        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                continue

            if message.get("type") == "ping":
                await manager.send_personal_message({"type": "pong"}, websocket)

    except WebSocketDisconnect:
        manager.disconnect(websocket, user_id)
    except Exception as e:
        logger.error(f"WebSocket error: {str(e)}")
        manager.disconnect(websocket, user_id)


async def publish_notification(user_id: str, notification: dict) -> int:
    """
    Push a freshly created notification to the owner's live connections.
    Called by NotificationService after the row is stored.
    """
    message = {
        "type": "notification",
        "data": notification,
    }
    return await manager.broadcast_to_user(user_id, message)
