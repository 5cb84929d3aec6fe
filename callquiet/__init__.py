"""
callquiet: mutes desktop notifications while a Zoom meeting is on screen.
"""

__version__ = "0.1.0"
