"""Toast notifier that writes to a logger."""

import itertools
import logging

logger = logging.getLogger(__name__)


class LoggingToastNotifier:
    """Notifier for headless consumers.

    Loading toasts log at debug, successes at info and errors at
    warning.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self._ids = itertools.count(1)

    def loading(self, message: str) -> str:
        toast_id = f"toast-{next(self._ids)}"
        self._log.debug("[%s] %s", toast_id, message)
        return toast_id

    def success(self, message: str, toast_id: str | None = None) -> str:
        toast_id = toast_id or f"toast-{next(self._ids)}"
        self._log.info("[%s] %s", toast_id, message)
        return toast_id

    def error(
        self,
        message: str,
        toast_id: str | None = None,
        description: str | None = None,
    ) -> str:
        toast_id = toast_id or f"toast-{next(self._ids)}"
        if description:
            self._log.warning("[%s] %s: %s", toast_id, message, description)
        else:
            self._log.warning("[%s] %s", toast_id, message)
        return toast_id
