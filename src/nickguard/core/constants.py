"""Protocol constants."""

from __future__ import annotations

from typing import Final

DEFAULT_AGENT: Final = "NickServ"

# Appended to the protected nickname while a ghost session holds it
FALLBACK_SUFFIX: Final = "_"

# Notice markers (see nickguard.classifier)
AUTH_MARKER: Final = "registered"
GHOST_MARKER: Final = "ghost"
IDENTIFIED_MARKER: Final = "you are now identified"
