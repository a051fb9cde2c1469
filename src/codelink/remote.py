"""Git remote URL normalisation.

Turns whatever ``git remote get-url`` prints into the HTTPS base URL that a
code host serves the repository under:

    git@github.com:org/repo.git     → https://github.com/org/repo
    https://github.com/org/repo.git → https://github.com/org/repo
"""

from __future__ import annotations

import re

_SSH_SHORTHAND_RE = re.compile(r"^[^@/]+@([^:/]+):(.+)$")


def normalize(remote_url: str) -> str:
    """Return the canonical HTTPS form of a remote URL.

    Unrecognised forms come back unchanged (minus any ``.git`` suffix);
    callers decide whether the result is usable.
    """
    url = remote_url.strip().removesuffix(".git")

    match = _SSH_SHORTHAND_RE.match(url)
    if match:
        host, path = match.groups()
        return f"https://{host}/{path}"

    return url
