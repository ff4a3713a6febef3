"""
Live lists over WebSocket.

    ws://.../api/v1/live/{resource}?token=<jwt>&student_id=...

The server sends a snapshot {"state", "loading", "data", "error"} on every
state change of the list. Any change in the underlying table triggers a full
refetch. Sending the text "refresh" forces a refetch.
"""
import logging
from typing import Callable, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from fastapi import HTTPException
from supabase import Client

from tutorcenter.config.permissions_config import has_capability
from tutorcenter.core.dependencies import get_auth_service, get_user_profile, resolve_role
from tutorcenter.core.live_list import LiveResourceList
from tutorcenter.core.realtime import ChangeRegistry, get_change_registry
from tutorcenter.core.resource import ResourceDefinition
from tutorcenter.core.resource_router import filters_from_query
from tutorcenter.database.supabase_client import SupabaseClient, get_optional_service_supabase
from tutorcenter.modules.auth.service import AuthService
from tutorcenter.modules.classes.service import CLASSES
from tutorcenter.modules.materials.service import (
    DIAGNOSES, BOOKS, LINKS, BOOK_ASSIGNMENTS, STUDENT_SUBJECTS
)
from tutorcenter.modules.payments.service import PAYMENTS
from tutorcenter.modules.students.service import STUDENTS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/live", tags=["live"])

# resource name -> (definition, capability required to watch it)
LIVE_RESOURCES: Dict[str, Tuple[ResourceDefinition, str]] = {
    "students": (STUDENTS, "is_staff"),
    "classes": (CLASSES, "can_view_students_menu"),
    "payments": (PAYMENTS, "can_view_payments"),
    "diagnoses": (DIAGNOSES, "can_view_students_menu"),
    "books": (BOOKS, "can_view_students_menu"),
    "links": (LINKS, "can_view_students_menu"),
    "book-assignments": (BOOK_ASSIGNMENTS, "can_view_students_menu"),
    "student-subjects": (STUDENT_SUBJECTS, "can_view_students_menu"),
}

REFRESH_COMMAND = "refresh"


def get_token_client_factory() -> Callable[[str], Client]:
    return SupabaseClient.get_user_client


def _bearer_token(websocket: WebSocket, token: Optional[str]) -> Optional[str]:
    if token:
        return token
    scheme, _, value = websocket.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and value:
        return value
    return None


@router.websocket("/{resource_name}")
async def live_resource(
    websocket: WebSocket,
    resource_name: str,
    token: Optional[str] = Query(None),
    registry: ChangeRegistry = Depends(get_change_registry),
    auth_service: AuthService = Depends(get_auth_service),
    service_client: Optional[Client] = Depends(get_optional_service_supabase),
    client_factory: Callable[[str], Client] = Depends(get_token_client_factory),
):
    entry = LIVE_RESOURCES.get(resource_name)
    if entry is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Unknown resource")
        return
    definition, capability = entry

    token = _bearer_token(websocket, token)
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="No authorization header")
        return
    try:
        user = auth_service.get_current_user(token)
    except HTTPException as e:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(e.detail))
        return

    user_client = client_factory(token)
    role = resolve_role(get_user_profile(user["id"], service_client or user_client))
    if not has_capability(role, capability):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Insufficient permissions")
        return

    await websocket.accept()

    async def send_snapshot(snapshot):
        await websocket.send_json(snapshot.to_dict())

    live = LiveResourceList(
        definition.bind(user_client),
        registry,
        filters=filters_from_query(definition, websocket.query_params),
        on_snapshot=send_snapshot,
    )
    logger.info(f"Live {resource_name} opened for user {user['id']}")
    try:
        await live.start()
        while True:
            message = await websocket.receive_text()
            if message.strip() == REFRESH_COMMAND:
                await live.refresh()
    except WebSocketDisconnect:
        logger.info(f"Live {resource_name} closed by user {user['id']}")
    finally:
        await live.close()
