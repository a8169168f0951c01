from __future__ import annotations
import json
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

from pydantic import BaseModel, field_validator

# Word ids arrive as numbers from the store but clients may echo them back as strings
WordId = Union[int, str]


def now_timestamp() -> str:
    # ISO-8601 UTC with milliseconds, e.g. 2026-10-19T12:00:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _id_key(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def same_id(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return False
    return _id_key(a) == _id_key(b)


class Comment(BaseModel):
    text: str
    timestamp: str

class WordEntry(BaseModel):
    id: int
    word: str = ''
    language: str = ''
    definition: str = ''
    audioUrl: Optional[str] = None
    comments: List[Comment] = []

class Dataset(BaseModel):
    words: List[WordEntry] = []

    def find(self, word_id: Any) -> Optional[WordEntry]:
        return next((w for w in self.words if same_id(w.id, word_id)), None)


def _as_text(value: Any) -> str:
    # Bodies are not validated: any JSON value is kept, non-strings as their JSON text
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


# Request bodies: no validation beyond shape
class NewWordRequest(BaseModel):
    word: str = ''
    language: str = ''
    definition: str = ''
    audioUrl: Optional[str] = None

    @field_validator('word', 'language', 'definition', mode='before')
    @classmethod
    def _text(cls, value):
        return _as_text(value)

    @field_validator('audioUrl', mode='before')
    @classmethod
    def _url(cls, value):
        return _as_text(value) if value else None

class AddCommentRequest(BaseModel):
    # A missing id matches no word and takes the not-found path
    wordId: Any = None
    comment: str = ''

    @field_validator('comment', mode='before')
    @classmethod
    def _text(cls, value):
        return _as_text(value)

# Broadcast payload for 'newComment'; 'newWord' carries a full WordEntry
class CommentCreated(BaseModel):
    wordId: Any
    comment: Comment
