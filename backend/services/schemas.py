"""Request and response models for the chat and completion endpoints."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessageBody(BaseModel):
    """A single message in the conversation history."""

    role: Literal["user", "assistant", "system"]
    content: str = Field(..., min_length=1)


class ChatRequestBody(BaseModel):
    """Body of ``POST /api/chat``."""

    messages: List[ChatMessageBody]
    model: str = Field(..., min_length=1)


class CompletionRequestBody(BaseModel):
    """Body of ``POST /api/completion``. Ids are opaque passthroughs."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., min_length=1)
    is_title: bool = Field(default=False, alias="isTitle")
    message_id: str | None = Field(default="", alias="messageId")
    thread_id: str | None = Field(default="", alias="threadId")


class CompletionResponseBody(BaseModel):
    """Generated title echoed with the request's passthrough fields."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    is_title: bool = Field(alias="isTitle")
    message_id: str | None = Field(alias="messageId")
    thread_id: str | None = Field(alias="threadId")


class ModelSummary(BaseModel):
    """Public description of a supported model."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    name: str
    provider: str
    model_id: str = Field(alias="modelId")
    header_key: str = Field(alias="headerKey")
