"""
MAXCO Repair AI - Desktop toolkit for device-repair technicians.

A sidebar of repair panels (schematics, hardware, firmware, chipsets, logs,
repair flows, job sheets) driven by typed search or push-to-talk voice
commands from a floating control.
"""

from .__version__ import (
    __version__,
    __title__,
    __description__,
    __author__,
    __author_email__,
    __license__,
    __url__,
    VERSION_INFO,
)

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__author__",
    "__author_email__",
    "__license__",
    "__url__",
    "VERSION_INFO",
]
