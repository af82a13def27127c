# routes/messaging.py - Conversation reads and message sending for participants
from fastapi import APIRouter, Body, Depends
from typing import Any
from config import get_store
from repository.messages import ConversationRepo
from repository.store import DocumentStore
from repository.users import get_current_uid, ensure_self

router = APIRouter(tags=["Messaging"])


@router.get("/users/{user_id}/conversations")
def get_user_conversations(
    user_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Conversations the caller takes part in, most recently active first"""
    ensure_self(current_uid, user_id, "Forbidden: You are not authorized to view other users' conversations")
    return ConversationRepo.list_for_user(store, current_uid)


@router.get("/conversations/{conversation_id}")
def get_conversation_details(
    conversation_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    return ConversationRepo.get_for_participant(store, conversation_id, current_uid)


@router.get("/conversations/{conversation_id}/messages")
def get_messages_for_conversation(
    conversation_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Messages of the conversation, oldest first"""
    ConversationRepo.get_for_participant(store, conversation_id, current_uid)
    return ConversationRepo.list_messages(store, conversation_id)


@router.post("/conversations/{conversation_id}/messages", status_code=201)
def send_message(
    conversation_id: str,
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    message_id = ConversationRepo.send_message(store, conversation_id, current_uid, payload)
    return {"message": "Message sent", "messageId": message_id}
