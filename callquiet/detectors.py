import logging
import os
import re

from callquiet.errors import BootstrapError, CommandError, SignalQueryError
from callquiet.shell import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)


class SignalSource:
    """
    Answers one question every cycle: should notifications be muted right now?
    """

    required_commands = ()

    def check_environment(self):
        pass

    def is_active(self) -> bool:
        raise NotImplementedError


class XwininfoCallDetector(SignalSource):
    """
    Detects a Zoom call by looking for its meeting window in the X11 window tree.
    """

    required_commands = ("xwininfo",)

    def __init__(self, window_title="Zoom Meeting", timeout=DEFAULT_TIMEOUT):
        self.window_title = window_title
        self.timeout = timeout
        # Top level entries look like:   0x3a00007 "Zoom Meeting": ("zoom" "zoom")  ...
        self._pattern = re.compile(r'^\s+0x\S+\s+"' + re.escape(window_title) + '"', re.MULTILINE)

    def check_environment(self):
        if not os.environ.get("DISPLAY"):
            raise BootstrapError("DISPLAY is not set, cannot inspect X11 windows")

    def matches(self, tree_output: str) -> bool:
        return bool(self._pattern.search(tree_output))

    def is_active(self) -> bool:
        try:
            out = run_command(["xwininfo", "-root", "-tree"], timeout=self.timeout)
        except CommandError as e:
            raise SignalQueryError(f"Window query failed: {e}") from e
        return self.matches(out)
