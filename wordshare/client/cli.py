"""
Watch the shared word list from a terminal.
"""
from __future__ import annotations

import argparse
import asyncio
import logging

from .session import WordFeedSession

logger = logging.getLogger(__name__)


def show_word(feed):
    word = feed.current
    if word is None:
        logger.info("No words yet")
        return
    logger.info("%s %s [%s]: %s", feed.counter, word.word, word.language, word.definition)
    if word.audioUrl:
        logger.info("  audio: %s", word.audioUrl)
    show_comments(word.comments)


def show_comments(comments):
    for comment in comments:
        logger.info("  - %s", comment.text)


async def watch(url: str):
    session = WordFeedSession(url, on_word=show_word, on_comments=show_comments)
    try:
        await session.connect()
        await session.wait()
    finally:
        await session.close()


def main():
    parser = argparse.ArgumentParser(prog="wordshare-watch", description="Follow new words live")
    parser.add_argument("--url", default="http://localhost:3000", help="Server base URL")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(message)s')
    try:
        asyncio.run(watch(args.url))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
