from typing import Annotated, Union
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from scootsupport.core.database import get_db
from scootsupport.core.security import get_current_user
from scootsupport.models.user import AuthUser
from scootsupport.schemas.chat import ChatCompletionRequest, DirectSaveRequest
from scootsupport.services.chat_service import chat_service
from scootsupport.utils.response import to_jsonable

router = APIRouter(prefix="/chat", tags=["chat"])

# Legacy and current save-chat bodies, told apart by their "type" field
SaveChatRequest = Annotated[
    Union[ChatCompletionRequest, DirectSaveRequest],
    Body(discriminator="type")
]

@router.post("/completion")
async def chat_completion(
    request: ChatCompletionRequest,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return await chat_service.process_message(
        db,
        user,
        request.message,
        conversation_id=request.conversation_id,
        file_context=request.file_context
    )

@router.post("/save")
async def save_chat(
    request: SaveChatRequest,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if isinstance(request, DirectSaveRequest):
        return to_jsonable(chat_service.save_exchange(db, user, request))

    result = await chat_service.process_message(
        db,
        user,
        request.message,
        conversation_id=request.conversation_id,
        file_context=request.file_context
    )
    result["success"] = True
    return result

@router.get("/conversations")
async def list_conversations(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    conversations = chat_service.list_conversations(db, user)
    return {"conversations": to_jsonable(conversations)}

@router.get("/conversations/{conversation_id}/messages")
async def get_messages(
    conversation_id: int,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    messages = chat_service.get_messages(db, user, conversation_id)
    return {"messages": to_jsonable(messages)}
