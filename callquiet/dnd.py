import logging
import os

from callquiet.errors import CommandError, SettingError
from callquiet.shell import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)


class SettingStore:
    """
    Reads and writes the desktop's 'Do Not Disturb' flag.
    The flag is shared with the user, so it must be read before we take it over.
    """

    required_commands = ()

    def is_enabled(self) -> bool:
        raise NotImplementedError

    def set_enabled(self, state: bool):
        raise NotImplementedError


class XfconfSettingStore(SettingStore):
    """
    xfce4-notifyd keeps DND in xfconf: channel 'xfce4-notifyd', property '/do-not-disturb'.
    """

    required_commands = ("xfconf-query",)

    def __init__(self, channel="xfce4-notifyd", prop="/do-not-disturb", timeout=DEFAULT_TIMEOUT):
        self.channel = channel
        self.prop = prop
        self.timeout = timeout

    def _env(self):
        # Untranslated messages, so "does not exist" can be matched below
        return {**os.environ, "LC_ALL": "C"}

    def _base_cmd(self):
        return ["xfconf-query", "-c", self.channel, "-p", self.prop]

    def is_enabled(self) -> bool:
        try:
            out = run_command(self._base_cmd(), timeout=self.timeout, env=self._env())
        except CommandError as e:
            # Fresh profiles have no property until DND is toggled once
            if "does not exist" in str(e):
                logger.debug(f"{self.channel}{self.prop} not set yet, treating as off")
                return False
            raise SettingError(f"Could not read {self.channel}{self.prop}: {e}") from e

        value = out.strip().lower()
        if value == "true":
            return True
        if value == "false":
            return False
        raise SettingError(f"Unexpected value for {self.channel}{self.prop}: {out.strip()!r}")

    def set_enabled(self, state: bool):
        arg = "true" if state else "false"
        cmd = self._base_cmd() + ["--create", "--type", "bool", "--set", arg]
        try:
            run_command(cmd, timeout=self.timeout, env=self._env())
        except CommandError as e:
            raise SettingError(f"Could not set {self.channel}{self.prop} to {arg}: {e}") from e
        logger.debug(f"Executed: {' '.join(cmd)}")
