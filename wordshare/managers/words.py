from __future__ import annotations
import asyncio
import logging
import time
from typing import List, Optional

from ..schemas import AddCommentRequest, Comment, Dataset, NewWordRequest, WordEntry, now_timestamp
from .broadcast import Broadcaster

logger = logging.getLogger(__name__)


class WordManager:
    """In-memory word list backed by a remote document store.

    The in-memory dataset answers requests; every mutation is persisted by
    writing the whole dataset back. Mutations inside this process are
    serialized, but another process writing the same document can still
    overwrite ours (last writer wins).
    """

    def __init__(self, store, broadcaster: Broadcaster):
        self.store = store
        self.broadcaster = broadcaster
        self.dataset = Dataset()
        self._lock = asyncio.Lock()
        self._last_id = 0

    async def load(self):
        data = await self.store.read()
        self.dataset = data or Dataset()
        self._last_id = max((w.id for w in self.dataset.words), default=0)
        logger.info("Database ready (%d words)", len(self.dataset.words))

    async def refresh(self) -> Dataset:
        # Waits for pending mutations so a re-read cannot drop an unsaved append
        async with self._lock:
            return await self._refresh()

    async def _refresh(self) -> Dataset:
        # Caller holds the lock. A failed read keeps the stale copy
        data = await self.store.read()
        if data is not None:
            self.dataset = data
            self._last_id = max([self._last_id] + [w.id for w in data.words])
        return self.dataset

    async def list_words(self) -> List[WordEntry]:
        dataset = await self.refresh()
        return list(dataset.words)

    def _next_id(self) -> int:
        # Millisecond timestamp, bumped when the clock has not moved past the last id
        now_ms = int(time.time() * 1000)
        self._last_id = max(now_ms, self._last_id + 1)
        return self._last_id

    async def create_word(self, req: NewWordRequest) -> WordEntry:
        async with self._lock:
            entry = WordEntry(
                id=self._next_id(),
                word=req.word,
                language=req.language,
                definition=req.definition,
                audioUrl=req.audioUrl or None,
                comments=[],
            )
            self.dataset.words.append(entry)
            if not await self.store.write(self.dataset):
                logger.warning("Word %s kept in memory but not persisted", entry.id)
        await self.broadcaster.word_created(entry)
        return entry

    async def add_comment(self, req: AddCommentRequest) -> Optional[Comment]:
        async with self._lock:
            dataset = await self._refresh()
            word = dataset.find(req.wordId)
            if word is None:
                return None
            comment = Comment(text=req.comment, timestamp=now_timestamp())
            word.comments.append(comment)
            if not await self.store.write(dataset):
                logger.warning("Comment on word %s kept in memory but not persisted", word.id)
        await self.broadcaster.comment_created(req.wordId, comment)
        return comment
