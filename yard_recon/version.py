from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from . import __version__

DISTRIBUTION_NAME = "yard-recon"


def get_app_version() -> str:
    """Installed distribution version (source checkout: package ``__version__``)."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return __version__
