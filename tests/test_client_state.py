from wordshare.client.state import WordFeed
from wordshare.schemas import Comment, WordEntry


def word(i):
    return WordEntry(id=i, word=f"word{i}", language="xx", definition=f"def {i}")


def comment(text):
    return Comment(text=text, timestamp="2026-10-19T12:00:00.000Z")


class TestLoad:
    def test_empty(self):
        feed = WordFeed()
        assert feed.current is None
        assert feed.counter == ""
        assert feed.next() is None
        assert feed.previous() is None

    def test_load_shows_first(self):
        feed = WordFeed([word(1), word(2), word(3)])
        assert feed.current.id == 1
        assert feed.counter == "( 01/03 )"
        assert not feed.following


class TestNewWord:
    def test_first_word_is_shown(self):
        feed = WordFeed([])
        assert feed.add_word(word(1))
        assert feed.current.id == 1

    def test_following_viewer_advances(self):
        # session B sits on the last word
        feed = WordFeed([word(1), word(2)])
        feed.next()
        assert feed.following
        assert feed.add_word(word(3))
        assert feed.current.id == 3
        assert feed.counter == "( 03/03 )"

    def test_viewer_on_earlier_word_stays(self):
        # session C reads an older word
        feed = WordFeed([word(1), word(2), word(3)])
        assert not feed.add_word(word(4))
        assert feed.current.id == 1
        assert len(feed.words) == 4

    def test_following_resumes_when_back_at_end(self):
        feed = WordFeed([word(1), word(2)])
        feed.next()
        feed.previous()
        assert not feed.add_word(word(3))
        assert feed.current.id == 1
        feed.previous()
        assert feed.current.id == 3
        assert feed.following
        assert feed.add_word(word(4))
        assert feed.current.id == 4

    def test_single_word_follows(self):
        feed = WordFeed([word(1)])
        assert feed.add_word(word(2))
        assert feed.current.id == 2


class TestNavigation:
    def test_wraps_around(self):
        feed = WordFeed([word(1), word(2), word(3)])
        assert feed.previous().id == 3
        assert feed.next().id == 1
        assert feed.next().id == 2


class TestNewComment:
    def test_comment_on_displayed_word(self):
        feed = WordFeed([word(1), word(2)])
        assert feed.add_comment(1, comment("beautiful word"))
        assert [c.text for c in feed.current.comments] == ["beautiful word"]

    def test_comment_on_other_word(self):
        feed = WordFeed([word(1), word(2)])
        assert not feed.add_comment(2, comment("later"))
        assert feed.words[1].comments[0].text == "later"
        assert feed.current.comments == []

    def test_string_id_matches(self):
        feed = WordFeed([word(7)])
        assert feed.add_comment("7", comment("loose"))

    def test_unknown_word_ignored(self):
        feed = WordFeed([word(1)])
        assert not feed.add_comment(99, comment("lost"))
        assert feed.current.comments == []
