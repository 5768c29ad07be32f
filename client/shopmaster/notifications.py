# Overview: Transient user notifications (toasts) raised by console actions.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable


logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"
STATUS_INFO = "info"

DEFAULT_TITLES = {
    STATUS_SUCCESS: "Success",
    STATUS_ERROR: "Error",
    STATUS_INFO: "Info",
}


@dataclass(frozen=True)
class Notification:
    status: str
    title: str
    description: str

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "title": self.title,
            "description": self.description,
        }


class Notifier:
    """
    Collects the notifications raised while the console works.

    Every notification is kept in history (oldest first), logged, and
    passed to listener when one is set (a UI shows it as a toast).
    """

    def __init__(self, listener: Callable[[Notification], None] | None = None):
        self.listener = listener
        self.history: list[Notification] = []

    def notify(self, status: str, description: str, title: str | None = None) -> Notification:
        notification = Notification(
            status=status,
            title=title or DEFAULT_TITLES.get(status, "Info"),
            description=description,
        )
        self.history.append(notification)

        if status == STATUS_ERROR:
            logger.warning("%s: %s", notification.title, description)
        else:
            logger.info("%s: %s", notification.title, description)

        if self.listener is not None:
            self.listener(notification)
        return notification

    def success(self, description: str, title: str | None = None) -> Notification:
        return self.notify(STATUS_SUCCESS, description, title)

    def error(self, description: str, title: str | None = None) -> Notification:
        return self.notify(STATUS_ERROR, description, title)

    def info(self, description: str, title: str | None = None) -> Notification:
        return self.notify(STATUS_INFO, description, title)

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None
