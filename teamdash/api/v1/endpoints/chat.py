# teamdash/api/v1/endpoints/chat.py
from fastapi import APIRouter, Body, Depends, status
from typing import List

from teamdash.api import deps
from teamdash.core import security
from teamdash.schemas import chat as chat_schema
from teamdash.schemas.user import User
from teamdash.services.chat import ChatService

router = APIRouter()

@router.get("/project/{project_id}/group", response_model=chat_schema.Group)
def get_group_by_project(
    project_id: int,
    chat: ChatService = Depends(deps.get_chat_service),
    current_user: User = Depends(security.get_current_user)
):
    return chat.get_group_by_project(project_id)

@router.get("/groups/{group_id}", response_model=chat_schema.Group)
def get_group(
    group_id: int,
    chat: ChatService = Depends(deps.get_chat_service),
    current_user: User = Depends(security.get_current_user)
):
    return chat.get_group(group_id)

@router.get("/groups/{group_id}/messages", response_model=List[chat_schema.Message])
def list_messages(
    group_id: int,
    chat: ChatService = Depends(deps.get_chat_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Messages in the order they were sent. Project members and the project manager only. """
    return chat.list_messages(group_id, current_user)

@router.get("/groups/{group_id}/messages/latest", response_model=List[chat_schema.Message])
def latest_messages(
    group_id: int,
    limit: int = 20,
    chat: ChatService = Depends(deps.get_chat_service),
    current_user: User = Depends(security.get_current_user)
):
    return chat.latest_messages(group_id, current_user, limit)

@router.post("/groups/{group_id}/messages", response_model=chat_schema.Message, status_code=status.HTTP_201_CREATED)
def send_message(
    group_id: int,
    content: str = Body(..., media_type="text/plain"),
    chat: ChatService = Depends(deps.get_chat_service),
    current_user: User = Depends(security.get_current_user)
):
    return chat.send_message(group_id, content, current_user)
