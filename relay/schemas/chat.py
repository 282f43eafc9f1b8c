from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional

ROLES = {"system", "user", "assistant"}


class ConversationTurn(BaseModel):
    role: Literal["system", "user", "assistant"] = "user"
    content: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, v):
        role = str(v or "").strip().lower()
        return role if role in ROLES else "user"

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, v):
        return "" if v is None else str(v)


class RelayRequest(BaseModel):
    # clients send any subset of these; unknown keys are ignored
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message: Optional[str] = None
    prompt: Optional[str] = None
    query: Optional[str] = None
    text: Optional[str] = None
    messages: Optional[List[ConversationTurn]] = None
    history: Optional[List[ConversationTurn]] = None
    model: Optional[str] = None
    assistant_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("assistantId", "assistant_id")
    )
    voice: Optional[bool] = None
    tts_model: Optional[str] = None
    tts_voice: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = Field(default=None, gt=0)


class ArticleRequest(RelayRequest):
    topic: Optional[str] = None
    tone: Optional[str] = None
    min_words: Optional[int] = Field(default=None, gt=0)


class ChatResponse(BaseModel):
    # text/response/answer carry the same string; each client reads a different one
    ok: bool
    text: str
    response: str
    answer: str
    audio: Optional[str] = None

    @classmethod
    def build(cls, text: str, *, voice: bool = False, audio: Optional[str] = None) -> "ChatResponse":
        if voice:
            return cls(ok=True, text=text, response=text, answer=text, audio=audio)
        return cls(ok=True, text=text, response=text, answer=text)


class ArticleResponse(BaseModel):
    ok: bool
    title: str
    content: str


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
