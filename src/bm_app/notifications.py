"""Transient user-visible notices (the "toast" channel).

Errors never escape an intent: AppContext.run_intent turns any AppError into
an error notice here and leaves the application in a re-enterable state.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from src.bm_common.enums import NoticeLevel
from src.bm_common.errors import (
    AppError,
    PartialTransactionError,
    RemoteError,
    SessionRequiredError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str


NoticeListener = Callable[[Notice], None]


def describe_error(exc: AppError) -> str:
    if isinstance(exc, ValidationError):
        return f"Please check {exc.field}: {exc.detail}"
    if isinstance(exc, PartialTransactionError):
        return (
            f"Invoice {exc.invoice.invoice_number} was saved but its sale was not "
            "recorded. Retry to record the sale."
        )
    if isinstance(exc, SessionRequiredError):
        return "Please sign in first"
    if isinstance(exc, RemoteError):
        return "Something went wrong. Please try again."
    return exc.message


class NotificationCenter:
    def __init__(self, history_size: int = 20) -> None:
        self._listeners: list[NoticeListener] = []
        self._history: list[Notice] = []
        self._history_size = history_size

    @property
    def history(self) -> list[Notice]:
        return list(self._history)

    def subscribe(self, listener: NoticeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def success(self, message: str) -> Notice:
        return self._push(Notice(NoticeLevel.SUCCESS, message))

    def error(self, exc: AppError) -> Notice:
        return self._push(Notice(NoticeLevel.ERROR, describe_error(exc)))

    def _push(self, notice: Notice) -> Notice:
        self._history = [*self._history, notice][-self._history_size:]
        for listener in list(self._listeners):
            try:
                listener(notice)
            except Exception:
                logger.exception("Notice listener raised")
        return notice
