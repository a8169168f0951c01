"""Local copy of the word list as one viewer sees it.

A session loads the full list once, then folds in broadcasts. The cursor
follows the newest word until the viewer navigates away from the end; it
resumes following once navigation lands back on the last word.
"""
from __future__ import annotations
from typing import Iterable, List, Optional

from ..schemas import Comment, WordEntry, WordId, same_id


class WordFeed:
    def __init__(self, words: Optional[Iterable[WordEntry]] = None):
        self.words: List[WordEntry] = []
        self.cursor = 0
        self.following = True
        if words is not None:
            self.load(words)

    def load(self, words: Iterable[WordEntry]):
        self.words = list(words)
        self.cursor = 0
        self.following = self._at_end()

    def _at_end(self) -> bool:
        return self.cursor >= len(self.words) - 1

    @property
    def current(self) -> Optional[WordEntry]:
        if not self.words:
            return None
        return self.words[self.cursor]

    @property
    def counter(self) -> str:
        if not self.words:
            return ''
        return f"( {self.cursor + 1:02d}/{len(self.words):02d} )"

    def add_word(self, entry: WordEntry) -> bool:
        """Append a broadcast word; True when the displayed word changed."""
        self.words.append(entry)
        if self.following:
            self.cursor = len(self.words) - 1
            return True
        return False

    def add_comment(self, word_id: WordId, comment: Comment) -> bool:
        """Append a broadcast comment; True when it belongs to the displayed word."""
        word = next((w for w in self.words if same_id(w.id, word_id)), None)
        if word is None:
            return False
        word.comments.append(comment)
        current = self.current
        return current is not None and same_id(current.id, word_id)

    def _move(self, step: int) -> Optional[WordEntry]:
        if not self.words:
            return None
        self.cursor = (self.cursor + step) % len(self.words)
        self.following = self._at_end()
        return self.current

    def next(self) -> Optional[WordEntry]:
        return self._move(1)

    def previous(self) -> Optional[WordEntry]:
        return self._move(-1)
