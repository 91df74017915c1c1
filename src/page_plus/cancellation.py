"""Cooperative cancellation for the scroll loops."""

from dataclasses import dataclass

from .errors import ScrollCancelled


@dataclass
class CancellationToken:
    """Cooperative cancellation token for polling loops.

    Create a token, pass it to ``autoscroll(..., cancel_token=token)`` or
    ``scroll_to_bottom(..., cancel_token=token)``, and call ``token.cancel()``
    from any coroutine or thread to stop the loop.

    The loop checks ``raise_if_cancelled()`` before each tick and after each
    settle delay and raises ``ScrollCancelled``.
    """

    _cancelled: bool = False

    def cancel(self) -> None:
        """Request cancellation. Thread-safe (single bool write)."""
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        """Raise ``ScrollCancelled`` if cancellation was requested."""
        if self._cancelled:
            raise ScrollCancelled("Scroll was cancelled")
