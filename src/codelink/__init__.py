"""codelink: commit-pinned source links and snippets from an editor selection.

``__version__`` is what the server reports to MCP clients and what the
lookup client sends in its User-Agent.
"""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

UNKNOWN_VERSION = "0.0.0+unknown"


def _installed_version() -> str:
    try:
        return version("codelink")
    except PackageNotFoundError:
        # Running from a source checkout that was never installed
        warnings.warn(
            f"codelink is not installed; reporting version {UNKNOWN_VERSION}",
            RuntimeWarning,
            stacklevel=3,
        )
        return UNKNOWN_VERSION


__version__ = _installed_version()
