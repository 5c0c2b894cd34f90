"""Failure type for the binary cache codec."""
from __future__ import annotations


class CacheCorruptionError(BaseException):
    """Raised when a binary cache does not decode.

    The binary codec only ever reads bytes this program wrote itself,
    so a bad discriminator, a truncated buffer or trailing garbage means
    the cache is corrupt and the program cannot continue.  This derives
    from ``BaseException`` (like ``SystemExit``) so that ``except
    Exception`` handlers meant for recoverable manifest errors never
    catch it.
    """

    def __init__(self, what: str, offset: int) -> None:
        self.what = what
        self.offset = offset
        super().__init__(f"binary encoding of {what} was corrupted (at byte {offset})")
