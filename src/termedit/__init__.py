from __future__ import annotations

from .constants import TERMEDIT_VERSION as __version__

__all__ = ["__version__"]
