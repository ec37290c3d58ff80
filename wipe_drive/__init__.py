"""Interactive secure wipe for HDDs and SSDs."""

from .__version__ import __version__


__all__ = ["__version__"]
