from __future__ import annotations
import logging
from typing import Callable, List, Optional

import httpx
import socketio

from ..managers.broadcast import NEW_COMMENT, NEW_WORD
from ..schemas import Comment, CommentCreated, WordEntry
from .state import WordFeed

logger = logging.getLogger(__name__)

WordHook = Callable[[WordFeed], None]
CommentsHook = Callable[[List[Comment]], None]


class WordFeedSession:
    """Headless viewer: one Socket.IO connection plus a local WordFeed.

    ``on_word`` is called whenever the displayed word changes and
    ``on_comments`` when only its comment list grew.
    """

    def __init__(
        self,
        base_url: str,
        on_word: Optional[WordHook] = None,
        on_comments: Optional[CommentsHook] = None,
        http: Optional[httpx.AsyncClient] = None,
        sio: Optional[socketio.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.feed = WordFeed()
        self.on_word = on_word
        self.on_comments = on_comments
        self.http = http or httpx.AsyncClient(base_url=self.base_url, timeout=60)
        self.sio = sio or socketio.AsyncClient()
        self.sio.on(NEW_WORD, self.handle_new_word)
        self.sio.on(NEW_COMMENT, self.handle_new_comment)

    async def connect(self):
        await self.sio.connect(self.base_url)
        await self.sync()

    async def sync(self):
        """Replace the local list with the server's and show the first word."""
        r = await self.http.get('/getWords')
        r.raise_for_status()
        self.feed.load(WordEntry.model_validate(w) for w in r.json()['words'])
        self._render_word()

    async def handle_new_word(self, data):
        if self.feed.add_word(WordEntry.model_validate(data)):
            self._render_word()

    async def handle_new_comment(self, data):
        payload = CommentCreated.model_validate(data)
        if self.feed.add_comment(payload.wordId, payload.comment):
            self._render_comments()

    def next(self):
        self.feed.next()
        self._render_word()

    def previous(self):
        self.feed.previous()
        self._render_word()

    async def submit_word(self, word: str, language: str, definition: str, audio: Optional[bytes] = None) -> dict:
        audio_url = None
        if audio:
            files = {'audio': ('pronunciation.webm', audio, 'audio/webm')}
            r = await self.http.post('/uploadAudio', files=files)
            if r.is_success:
                audio_url = r.json().get('audioUrl')
            else:
                logger.warning("Audio upload rejected (%s), submitting without audio", r.status_code)
        r = await self.http.post('/newWord', json={
            'word': word,
            'language': language,
            'definition': definition,
            'audioUrl': audio_url,
        })
        r.raise_for_status()
        return r.json()

    async def submit_comment(self, text: str) -> dict:
        current = self.feed.current
        if current is None:
            raise ValueError("no word to comment on")
        r = await self.http.post('/addComment', json={'wordId': current.id, 'comment': text})
        r.raise_for_status()
        return r.json()

    async def wait(self):
        await self.sio.wait()

    async def close(self):
        if self.sio.connected:
            await self.sio.disconnect()
        await self.http.aclose()

    def _render_word(self):
        if self.on_word is not None:
            self.on_word(self.feed)

    def _render_comments(self):
        current = self.feed.current
        if self.on_comments is not None and current is not None:
            self.on_comments(current.comments)
