import math
import os
import logging

from callquiet.errors import BootstrapError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CALLQUIET_"

DEFAULT_CONFIG = {
    "poll_interval": 1.0,
    "window_title": "Zoom Meeting",
    "notifier": "notify-send",
    "notify_duration_ms": 3000,
    "xfconf_channel": "xfce4-notifyd",
    "xfconf_property": "/do-not-disturb",
    "command_timeout": 5.0,
    "log_level": "INFO",
}

NOTIFIERS = ("notify-send", "libnotify", "none")


class ConfigManager:
    """
    Defaults, overridden per key by CALLQUIET_<KEY> environment variables.
    """

    def __init__(self, environ=None):
        self._environ = os.environ if environ is None else environ
        self._load()

    def _load(self):
        self._config = DEFAULT_CONFIG.copy()
        for key, default in DEFAULT_CONFIG.items():
            raw = self._environ.get(ENV_PREFIX + key.upper())
            if raw is None or raw == "":
                continue
            try:
                self._config[key] = type(default)(raw)
            except ValueError as e:
                raise BootstrapError(f"Invalid value for {ENV_PREFIX}{key.upper()}: {raw!r}") from e
        self._validate()

    def _validate(self):
        for key in ("poll_interval", "command_timeout", "notify_duration_ms"):
            # float("inf") and float("nan") parse fine but break Event.wait
            if not math.isfinite(self._config[key]) or self._config[key] <= 0:
                raise BootstrapError(f"{key} must be positive, got {self._config[key]}")
        if self._config["notifier"] not in NOTIFIERS:
            raise BootstrapError(
                f"Unknown notifier {self._config['notifier']!r}, expected one of {', '.join(NOTIFIERS)}"
            )

    def get(self, key):
        return self._config.get(key)

    @property
    def poll_interval(self): return self.get("poll_interval")

    @property
    def window_title(self): return self.get("window_title")

    @property
    def notifier(self): return self.get("notifier")

    @property
    def notify_duration_ms(self): return self.get("notify_duration_ms")

    @property
    def xfconf_channel(self): return self.get("xfconf_channel")

    @property
    def xfconf_property(self): return self.get("xfconf_property")

    @property
    def command_timeout(self): return self.get("command_timeout")

    @property
    def log_level(self): return self.get("log_level")
