"""Cooperative cancellation flag."""

from __future__ import annotations


class CancellationSignal:
    """Single-writer flag that moves once from not-requested to requested.

    The host creates one signal per request and calls :meth:`request` when the
    user cancels. Readers only ever observe :attr:`requested`; there is no way
    to clear the flag.
    """

    __slots__ = ("_requested",)

    def __init__(self, *, requested: bool = False) -> None:
        self._requested = requested

    @property
    def requested(self) -> bool:
        return self._requested

    def request(self) -> None:
        self._requested = True

    @classmethod
    def never(cls) -> CancellationSignal:
        """A fresh signal nobody holds a reference to, so it is never requested."""
        return cls()

    def __repr__(self) -> str:
        return f"CancellationSignal(requested={self._requested})"
