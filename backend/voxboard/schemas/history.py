"""
Voxboard Backend - Chat History Schemas
========================================

History and message payloads keep snake_case keys (message_id,
is_speech_to_text, created_at) as the chat client expects.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HistoryCreateRequest(BaseModel):
    """Body of POST /history/email."""

    email: Optional[str] = None
    title: Optional[str] = None


class MessageCreateRequest(BaseModel):
    """Body of POST /history/{email}."""

    message: Optional[str] = None
    is_speech_to_text: Optional[bool] = Field(
        default=None,
        description="True when the message came from speech-to-text input",
    )


class HistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str
    id: str
    title: str


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message_id: str
    email: str
    message: str
    created_at: datetime
    is_speech_to_text: bool


class HistoryDetail(BaseModel):
    """A history header with all of its messages, oldest first."""

    history: HistoryResponse
    messages: List[MessageResponse]
