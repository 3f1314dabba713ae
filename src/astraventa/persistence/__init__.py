from astraventa.persistence.conversation_store import ConversationStore

__all__ = ["ConversationStore"]
