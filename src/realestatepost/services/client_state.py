"""Observable in-flight / last-error state for caller-side UI binding."""

from typing import Callable, Optional

from realestatepost.utils.errors import RealEstatePostError
from realestatepost.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

Listener = Callable[["ClientState"], None]


class ClientState:
    """
    Advisory state published by ApiClient.

    Values are not synchronized across concurrent calls; whichever call
    finishes last wins. Use them as UI hints only.
    """

    def __init__(self):
        self.in_flight: bool = False
        self.last_error: Optional[RealEstatePostError] = None
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def begin(self) -> None:
        self.in_flight = True
        self._notify()

    def succeed(self) -> None:
        self.in_flight = False
        self.last_error = None
        self._notify()

    def fail(self, error: RealEstatePostError) -> None:
        self.in_flight = False
        self.last_error = error
        self._notify()

    def settle(self) -> None:
        """Clear in_flight without touching last_error (cancelled calls)."""
        if self.in_flight:
            self.in_flight = False
            self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.warning(
                    "Client state listener failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(e)
                )
