import logging
import shutil
import signal
import sys

from callquiet.config.manager import ConfigManager
from callquiet.detectors import XwininfoCallDetector
from callquiet.dnd import XfconfSettingStore
from callquiet.errors import BootstrapError
from callquiet.monitor import MonitorLoop
from callquiet.notifier import LibnotifyNotifier, NotifySendNotifier, NullNotifier

logger = logging.getLogger(__name__)


def setup_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def build_notifier(config):
    if config.notifier == "libnotify":
        return LibnotifyNotifier()
    if config.notifier == "none":
        return NullNotifier()
    return NotifySendNotifier(timeout=config.command_timeout)


def bootstrap(config, progress=None):
    """
    Wires the loop together and checks the desktop can support it.
    Raises BootstrapError if it can't.
    """
    detector = XwininfoCallDetector(config.window_title, timeout=config.command_timeout)
    store = XfconfSettingStore(config.xfconf_channel, config.xfconf_property, timeout=config.command_timeout)
    notifier = build_notifier(config)

    for component in (detector, store, notifier):
        for cmd in component.required_commands:
            if shutil.which(cmd) is None:
                raise BootstrapError(f"Required command not found on PATH: {cmd}")

    detector.check_environment()
    notifier.check_environment()

    return MonitorLoop(
        detector,
        store,
        notifier=notifier,
        poll_interval=config.poll_interval,
        notify_duration_ms=config.notify_duration_ms,
        progress=progress,
    )


def install_signal_handlers(loop, signals=(signal.SIGINT, signal.SIGTERM)):
    """
    Each signal asks the loop to stop once; a repeat gets the default behaviour.
    """
    def _handler(signum, frame):
        signal.signal(signum, signal.SIG_DFL)
        logger.info(f"Received {signal.Signals(signum).name}, shutting down...")
        loop.request_stop()

    for sig in signals:
        signal.signal(sig, _handler)
    return _handler


def main(environ=None):
    try:
        config = ConfigManager(environ)
    except BootstrapError as e:
        setup_logging()
        logger.error(f"Configuration error: {e}")
        return 1

    setup_logging(config.log_level)

    try:
        loop = bootstrap(config)
    except BootstrapError as e:
        logger.error(f"Cannot start: {e}")
        return 1

    install_signal_handlers(loop)
    logger.info("Press Ctrl+C to stop.")

    if not loop.run():
        return 1
    logger.info("Stopped cleanly.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
