"""Token stream — a pull-style view over the stdlib HTML tokenizer.

``html.parser.HTMLParser`` is push-based: it calls ``handle_*`` methods as it
goes.  :class:`TokenStream` feeds the whole markup once, records each callback
as a :class:`~scopewalk.models.Token`, and hands them out one at a time.
Entities are decoded by the tokenizer (``convert_charrefs``), so adjacent text
is delivered as a single token.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from html.parser import HTMLParser

from scopewalk.models import Token, TokenType

_END = Token(TokenType.END)


class _TokenRecorder(HTMLParser):
    """Collect tokens in document order."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: deque[Token] = deque()

    @staticmethod
    def _attrs(attrs: list[tuple[str, str | None]]) -> tuple[tuple[str, str], ...]:
        # Valueless attributes (``<input disabled>``) come through as None.
        return tuple((key, value or "") for key, value in attrs)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        raw = self.get_starttag_text() or f"<{tag}>"
        self.tokens.append(Token(TokenType.START_TAG, raw, tag, self._attrs(attrs)))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        raw = self.get_starttag_text() or f"<{tag}/>"
        self.tokens.append(
            Token(TokenType.SELF_CLOSING_TAG, raw, tag, self._attrs(attrs))
        )

    def handle_endtag(self, tag: str) -> None:
        self.tokens.append(Token(TokenType.END_TAG, f"</{tag}>", tag))

    def handle_data(self, data: str) -> None:
        self.tokens.append(Token(TokenType.TEXT, data, data))

    def handle_comment(self, data: str) -> None:
        self.tokens.append(Token(TokenType.COMMENT, f"<!--{data}-->", data))


class TokenStream:
    """Single-pass token source over rendered markup.

    ``next()`` returns the ``END`` token once the markup is exhausted (and on
    every call after that); iterating stops after yielding it.
    """

    def __init__(self, markup: str) -> None:
        recorder = _TokenRecorder()
        recorder.feed(markup)
        recorder.close()
        self._tokens = recorder.tokens

    def next(self) -> Token:
        if self._tokens:
            return self._tokens.popleft()
        return _END

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next()
            yield tok
            if tok.type is TokenType.END:
                return
