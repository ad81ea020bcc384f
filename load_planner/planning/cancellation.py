"""Cooperative cancellation for planning requests."""

import threading

from load_planner.exceptions import PlanningCancelledError


class CancellationToken:
    """
    Flag a caller sets to abort a running plan.

    The planner checks the token between selection and reduction steps;
    work already in progress for one step is allowed to finish.

    Example:
        token = CancellationToken()
        # from another thread: token.cancel()
        plan = planner.plan(manifest, candidates, route, cancel_token=token)
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """Whether cancellation was requested."""
        return self._event.is_set()

    def raise_if_cancelled(self, stage: str = "planning") -> None:
        """
        Raise if cancellation was requested.

        Raises:
            PlanningCancelledError: If the token was cancelled
        """
        if self._event.is_set():
            raise PlanningCancelledError(stage)
