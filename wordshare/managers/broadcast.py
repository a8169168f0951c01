from __future__ import annotations
import logging

from ..schemas import Comment, CommentCreated, WordEntry, WordId

logger = logging.getLogger(__name__)

NEW_WORD = 'newWord'
NEW_COMMENT = 'newComment'


class Broadcaster:
    """Publishes dataset changes to every connected Socket.IO session.

    Delivery is fire-and-forget: sessions that connect later never see
    earlier events and must fetch the word list instead.
    """

    def __init__(self, sio):
        self.sio = sio

    async def word_created(self, entry: WordEntry):
        await self.sio.emit(NEW_WORD, entry.model_dump(mode='json'))
        logger.debug("Broadcast %s id=%s", NEW_WORD, entry.id)

    async def comment_created(self, word_id: WordId, comment: Comment):
        payload = CommentCreated(wordId=word_id, comment=comment)
        await self.sio.emit(NEW_COMMENT, payload.model_dump(mode='json'))
        logger.debug("Broadcast %s wordId=%s", NEW_COMMENT, word_id)
