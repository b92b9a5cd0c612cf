from dataclasses import dataclass
from typing import Callable, Optional
import logging

SUCCESS = 'success'
DANGER = 'danger'
INFO = 'info'


@dataclass(frozen=True)
class Notification(object):
    variant: str
    message: str


class LoggingNotifier(object):

    """
    The default notification sink: writes every notification to the
    log, at ERROR level for failures and INFO otherwise.
    """

    def __init__(self, logger: logging.Logger = None):
        if logger is None:
            self.logger = logging.getLogger(__name__)
        else:
            self.logger = logger

    def __call__(self, notification: Notification):
        level = logging.ERROR if notification.variant == DANGER \
            else logging.INFO
        self.logger.log(level, f'[{notification.variant}] '
                               + notification.message)


NotificationSink = Callable[[Notification], None]


def notify(sink: Optional[NotificationSink], variant: str, message: str,
           logger: logging.Logger = None):
    """
    Hands a notification to `sink`. Notifications are fire-and-forget:
    a missing sink is fine and a failing one is only logged.
    """
    if sink is None:
        return
    if logger is None:
        logger = logging.getLogger(__name__)
    try:
        sink(Notification(variant=variant, message=message))
    except Exception:
        logger.exception('Notification sink failed; dropping notification.')
