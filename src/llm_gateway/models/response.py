"""
Vendor response envelopes.

Only the fields the gateway reads are modelled; everything else in a
vendor payload is ignored.
"""

from typing import Optional, List

from pydantic import BaseModel, Field


# Chat replies

class OpenAIReplyMessage(BaseModel):
    """Assistant message inside a chat completion choice."""
    role: Optional[str] = None
    content: Optional[str] = None


class OpenAIChoice(BaseModel):
    """A single completion choice."""
    index: int = 0
    message: Optional[OpenAIReplyMessage] = None
    finish_reason: Optional[str] = None


class OpenAIChatResponse(BaseModel):
    """OpenAI-compatible chat completion response."""
    choices: List[OpenAIChoice]

    def reply_text(self) -> Optional[str]:
        """``choices[0].message.content``, or None if absent."""
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content


class AnthropicContentBlock(BaseModel):
    """Content block of a Messages API response."""
    type: Optional[str] = None
    text: Optional[str] = None


class AnthropicMessageResponse(BaseModel):
    """Anthropic Messages API response."""
    content: List[AnthropicContentBlock]
    stop_reason: Optional[str] = None

    def reply_text(self) -> Optional[str]:
        """``content[0].text``, or None if absent."""
        if not self.content:
            return None
        return self.content[0].text


class GooglePart(BaseModel):
    text: Optional[str] = None


class GoogleContent(BaseModel):
    parts: List[GooglePart] = Field(default_factory=list)
    role: Optional[str] = None


class GoogleCandidate(BaseModel):
    content: Optional[GoogleContent] = None
    finishReason: Optional[str] = None


class GoogleGenerateResponse(BaseModel):
    """Gemini generateContent response."""
    candidates: List[GoogleCandidate]

    def reply_text(self) -> Optional[str]:
        """``candidates[0].content.parts[0].text``, or None if absent."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


# Model listings

class OpenAIModelItem(BaseModel):
    id: str


class OpenAIModelList(BaseModel):
    """``{"data": [{"id": ...}]}``"""
    data: List[OpenAIModelItem]

    def model_ids(self) -> List[str]:
        return [item.id for item in self.data]


class AnthropicModelItem(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None


class AnthropicModelList(BaseModel):
    """``{"data": [...]}`` or ``{"models": [...]}``; items carry ``id`` and/or ``name``."""
    data: Optional[List[AnthropicModelItem]] = None
    models: Optional[List[AnthropicModelItem]] = None

    def model_ids(self) -> List[str]:
        if self.data is not None:
            items = self.data
        elif self.models is not None:
            items = self.models
        else:
            items = []
        ids = [item.id if item.id is not None else item.name for item in items]
        return [model_id for model_id in ids if model_id]


class GoogleModelItem(BaseModel):
    name: str
    supportedGenerationMethods: List[str] = Field(default_factory=list)


class GoogleModelList(BaseModel):
    """``{"models": [{"name": "models/<id>"}]}``"""
    models: List[GoogleModelItem]

    def model_ids(self) -> List[str]:
        # "models/gemini-1.5-pro" -> "gemini-1.5-pro"
        return [item.name.rsplit("/", 1)[-1] for item in self.models]
