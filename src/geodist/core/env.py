"""
`.env` loading.

Settings read a few `GEODIST_*` variables; developers can keep them in a `.env` file
next to where they run the CLI (or in any parent directory), or point
`GEODIST_ENV_FILE` at one explicitly. Variables already set in the process win.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load a `.env` file once if one is found; returns its path (or None)."""
    explicit = os.getenv("GEODIST_ENV_FILE")
    if explicit:
        env_path = Path(explicit).expanduser().resolve()
        if not env_path.is_file():
            return None
    else:
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        env_path = Path(found)

    load_dotenv(dotenv_path=env_path, override=False)
    return env_path
