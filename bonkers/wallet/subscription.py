"""Change subscriptions for the wallet state store."""

from __future__ import annotations

from typing import Any, Callable

# (current, previous, subscription)
ChangeCallback = Callable[[Any, Any, "Subscription"], None]


class Subscription:
    """Handle returned by every ``watch_*`` call.

    ``cancel()`` is idempotent and may be called from inside the callback it
    belongs to.
    """

    def __init__(self, unsubscribe: Callable[["Subscription"], None]) -> None:
        self._unsubscribe = unsubscribe
        self.active = True

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        self._unsubscribe(self)


class Listener:
    """A selector over the wallet state plus the callback fired when it changes."""

    def __init__(
        self,
        selector: Callable[[Any], Any],
        callback: ChangeCallback,
        unsubscribe: Callable[[Subscription], None],
    ) -> None:
        self.selector = selector
        self.callback = callback
        self.subscription = Subscription(unsubscribe)

    def notify(self, previous_state: Any, current_state: Any) -> None:
        if not self.subscription.active:
            return
        previous = self.selector(previous_state)
        current = self.selector(current_state)
        if current != previous:
            self.callback(current, previous, self.subscription)
