from __future__ import annotations

from duplicacy2ncdu.domain.constants import PROGVER as __version__

__all__ = ["__version__"]
