"""Request dispatch and title generation services."""

from backend.services.chat_service import ChatService, parse_body
from backend.services.title_service import TitleGenerator

__all__ = ["ChatService", "TitleGenerator", "parse_body"]
