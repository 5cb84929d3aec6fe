import logging

from callquiet.errors import BootstrapError, CommandError
from callquiet.shell import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)

APP_NAME = "callquiet"


class Notifier:
    """
    Fire-and-forget desktop notifications. notify() never raises.
    """

    required_commands = ()

    def check_environment(self):
        pass

    def notify(self, title, message, duration_ms=3000):
        raise NotImplementedError


class NullNotifier(Notifier):
    def notify(self, title, message, duration_ms=3000):
        logger.debug(f"Notification suppressed: {title}: {message}")


class NotifySendNotifier(Notifier):
    required_commands = ("notify-send",)

    def __init__(self, timeout=DEFAULT_TIMEOUT):
        self.timeout = timeout

    def notify(self, title, message, duration_ms=3000):
        cmd = ["notify-send", "-a", APP_NAME, "-t", str(int(duration_ms)), title, message]
        try:
            run_command(cmd, timeout=self.timeout)
        except CommandError as e:
            logger.warning(f"Notification failed: {e}")


class LibnotifyNotifier(Notifier):
    """
    Talks to the notification daemon through libnotify (PyGObject).
    Needs the system GI typelib for Notify, e.g. gir1.2-notify-0.7 on Ubuntu.
    """

    def __init__(self):
        self._notify = None

    def check_environment(self):
        try:
            import gi
            gi.require_version('Notify', '0.7')
            from gi.repository import Notify
        except (ImportError, ValueError) as e:
            raise BootstrapError(f"libnotify bindings unavailable: {e}") from e

        if not Notify.init(APP_NAME):
            raise BootstrapError("libnotify failed to initialise")
        self._notify = Notify

    def notify(self, title, message, duration_ms=3000):
        if self._notify is None:
            logger.warning("libnotify not initialised, dropping notification")
            return
        try:
            n = self._notify.Notification.new(title, message)
            n.set_timeout(int(duration_ms))
            n.show()
        except Exception as e:
            logger.warning(f"Notification failed: {e}")
