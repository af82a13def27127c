# repository/messages.py - Conversations and their messages
from typing import Any, Dict, List
from models.messages import SendMessageRequest
from repository.store import DocumentStore, Transaction, SERVER_TIMESTAMP, CONVERSATIONS, MESSAGES
from utils.errors import Forbidden, NotFound, ValidationError, parse_payload
import logging

logger = logging.getLogger(__name__)


def ensure_conversation_participant(conversation: Dict[str, Any], caller_id: str) -> None:
    if caller_id not in (conversation.get("participantIds") or []):
        raise Forbidden("Forbidden: You are not a participant in this conversation")


class ConversationRepo:
    @staticmethod
    def get_for_participant(store: DocumentStore, conversation_id: str, caller_id: str) -> Dict[str, Any]:
        conversation = store.get(CONVERSATIONS, conversation_id)
        if conversation is None:
            raise NotFound("Conversation not found")
        ensure_conversation_participant(conversation, caller_id)
        return conversation

    @staticmethod
    def list_for_user(store: DocumentStore, user_id: str) -> List[Dict[str, Any]]:
        return store.find(
            CONVERSATIONS,
            [("participantIds", "array-contains", user_id)],
            order_by="updatedAt",
            descending=True,
        )

    @staticmethod
    def list_messages(store: DocumentStore, conversation_id: str) -> List[Dict[str, Any]]:
        return store.find(MESSAGES, [("conversationId", "==", conversation_id)], order_by="timestamp")

    @staticmethod
    def send_message(store: DocumentStore, conversation_id: str, caller_id: str, payload: Any) -> str:
        """Insert the message and point the conversation at it in one transaction.

        Participation is checked before the payload is validated.
        """
        def _send(txn: Transaction) -> str:
            conversation = txn.get(CONVERSATIONS, conversation_id)
            if conversation is None:
                raise NotFound("Conversation not found")
            ensure_conversation_participant(conversation, caller_id)

            message = parse_payload(SendMessageRequest, payload)
            if not message.has_content():
                raise ValidationError("Either text or imageUrl must be provided")
            if message.senderId != caller_id:
                raise Forbidden("Forbidden: Cannot send message on behalf of another user")

            message_id = txn.create(MESSAGES, {
                **message.model_dump(mode="json", exclude_none=True),
                "conversationId": conversation_id,
                "senderId": caller_id,
                "timestamp": SERVER_TIMESTAMP,
                "read": False,
                "systemMessage": False,
            })
            txn.update(CONVERSATIONS, conversation_id, {
                "lastMessageId": message_id,
                "updatedAt": SERVER_TIMESTAMP,
            })
            return message_id

        message_id = store.run_transaction(_send)
        logger.info(f"Message {message_id} sent to conversation {conversation_id}")
        return message_id
