from .callbacks import ConversationCallback
from .controller import ConversationController
from .session import ConversationSession
from .uploads import upload_spreadsheet

__all__ = [
    "ConversationCallback",
    "ConversationController",
    "ConversationSession",
    "upload_spreadsheet",
]
