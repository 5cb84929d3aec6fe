# callquiet/config/mute_states.py

STATE_IDLE = "idle"
STATE_MUTED = "muted"

ACTION_NONE = "none"
ACTION_MUTE = "mute"
ACTION_UNMUTE = "unmute"
