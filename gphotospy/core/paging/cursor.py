"""Continuation cursor for token-paginated endpoints."""
from dataclasses import dataclass
from typing import Optional


def has_token(token: Optional[str]) -> bool:
    """True when a continuation token actually points at another page."""
    return token is not None and token.strip() != ''


@dataclass(frozen=True)
class PageCursor:
    """
    Position in a paginated listing.

    ``PageCursor.first()`` addresses the first page and sends no token.
    Termination is represented by the absence of a cursor, so an
    enumeration loop runs ``while cursor is not None``.
    """
    token: Optional[str] = None

    @classmethod
    def first(cls) -> 'PageCursor':
        return cls(None)

    @property
    def is_first(self) -> bool:
        return self.token is None

    def advance(self, next_token: Optional[str]) -> Optional['PageCursor']:
        """Cursor for the next page, or None when the listing is exhausted."""
        if not has_token(next_token):
            return None
        return PageCursor(next_token)
