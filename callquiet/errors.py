class CallQuietError(Exception):
    """Base class for everything callquiet raises on purpose."""


class CommandError(CallQuietError):
    """An external command was missing, timed out or exited non-zero."""


class SignalQueryError(CallQuietError):
    """The call detector could not tell whether a call is active."""


class SettingError(CallQuietError):
    """Reading or writing the do-not-disturb setting failed."""


class BootstrapError(CallQuietError):
    """The environment is unusable, the daemon cannot start."""
