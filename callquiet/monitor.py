import logging
import sys
import threading

from callquiet.config.mute_states import (
    ACTION_MUTE,
    ACTION_NONE,
    ACTION_UNMUTE,
    STATE_IDLE,
    STATE_MUTED,
)
from callquiet.errors import SettingError, SignalQueryError
from callquiet.notifier import NullNotifier

logger = logging.getLogger(__name__)


class MonitorLoop:
    """
    Polls the call detector and keeps 'Do Not Disturb' in step with it.

    `muted` is True only while DND is on because *we* turned it on.
    If the user enabled DND themselves we leave it alone, and we never
    switch it off on their behalf.
    """

    def __init__(self, signal_source, setting_store, notifier=None,
                 poll_interval=1.0, notify_duration_ms=3000, progress=None):
        self.signal_source = signal_source
        self.setting_store = setting_store
        self.notifier = notifier or NullNotifier()
        self.poll_interval = poll_interval
        self.notify_duration_ms = notify_duration_ms
        self.progress = progress or sys.stdout

        self.muted = False
        # Set once on stop; waking it cancels the pending wait between cycles
        self._stop_event = threading.Event()

    @property
    def state(self):
        return STATE_MUTED if self.muted else STATE_IDLE

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def request_stop(self):
        """
        Called from the signal handlers. Does not interrupt a command in flight.
        """
        if not self._stop_event.is_set():
            logger.info("Stop requested")
        self._stop_event.set()

    def _write_progress(self, text):
        try:
            self.progress.write(text)
            self.progress.flush()
        except (OSError, ValueError) as e:
            # Closed pipe or closed stream; the dots are cosmetic
            logger.debug(f"Progress output unavailable: {e}")

    def _tick(self):
        self._write_progress(".")

    def _announce(self, message):
        # Finish the row of dots before the log line
        self._write_progress("\n")
        logger.info(message)

    def _notify(self, title, message):
        try:
            self.notifier.notify(title, message, self.notify_duration_ms)
        except Exception as e:
            logger.warning(f"Notifier error ignored: {e}")

    def poll(self):
        """
        One cycle. Returns the action taken: ACTION_NONE, ACTION_MUTE or ACTION_UNMUTE.
        """
        self._tick()

        try:
            should_mute = self.signal_source.is_active()
        except SignalQueryError as e:
            logger.warning(f"Call detection failed, retrying next cycle: {e}")
            return ACTION_NONE

        if not should_mute and self.muted:
            return self._unmute()

        if should_mute and not self.muted:
            return self._mute()

        return ACTION_NONE

    def _unmute(self):
        try:
            self.setting_store.set_enabled(False)
        except SettingError as e:
            logger.warning(f"Unmute failed, retrying next cycle: {e}")
            return ACTION_NONE

        self.muted = False
        self._announce("Unmuted notifications")
        # After unmuting so the popup is actually shown
        self._notify("Call ended", "Notifications are back on")
        return ACTION_UNMUTE

    def _mute(self):
        try:
            user_already_muted = self.setting_store.is_enabled()
        except SettingError as e:
            logger.warning(f"Could not read DND state, retrying next cycle: {e}")
            return ACTION_NONE

        if user_already_muted:
            logger.debug("DND already on, leaving it to the user")
            return ACTION_NONE

        try:
            self.setting_store.set_enabled(True)
        except SettingError as e:
            logger.warning(f"Mute failed, retrying next cycle: {e}")
            return ACTION_NONE

        self.muted = True
        self._announce("Muted notifications")
        # Only once the mute really happened
        self._notify("Call detected", "Notifications muted until the call ends")
        return ACTION_MUTE

    def run(self) -> bool:
        """
        Blocks until request_stop(), then restores DND.
        Returns False if the final restore failed.
        """
        logger.info(f"Watching for calls every {self.poll_interval}s")
        try:
            while not self.stop_requested:
                try:
                    self.poll()
                except Exception:
                    logger.exception("Unexpected error during poll cycle")
                if self.stop_requested:
                    break
                self._stop_event.wait(self.poll_interval)
        finally:
            # Runs even if the wait itself blows up
            restored = self.shutdown()
        return restored

    def shutdown(self) -> bool:
        if not self.muted:
            return True

        # Unconditional, even if the call is still going
        try:
            self.setting_store.set_enabled(False)
        except Exception as e:
            logger.error(f"Could not restore notifications on exit, DND may still be on: {e}")
            return False

        self.muted = False
        self._announce("Unmuted notifications")
        return True
