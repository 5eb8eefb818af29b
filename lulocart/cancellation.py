from __future__ import annotations


class CancellationToken:
    """Marks the lifetime of a view that started a request.

    Results of a request are committed only while the token is live; the view
    cancels the token when it goes away.
    """

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def live_token() -> CancellationToken:
    """A token for callers that never cancel."""
    return CancellationToken()
