"""
Page title to file path mapping.

Rules:
- '/' is replaced with '.' and the page title is declared explicitly
- ':' is replaced with '_' and the page title is declared explicitly
- '.' is kept, but the title is declared explicitly since Logseq would
  otherwise read it back as a '/'
"""

from pathlib import Path
from typing import Optional, Union

from ..config import ConfigManager, config as default_config
from ..models import PageTarget


def escape_title(title: str) -> str:
    """Turn a page title into a filename stem."""
    return title.replace("/", ".").replace(":", "_")


def title_preamble(title: str) -> Optional[str]:
    """
    Return the 'title::' line a page needs, or None when the filename
    alone reads back as the same title.
    """
    if escape_title(title) == title and "." not in title:
        return None
    return f"title:: {title}"


def map_title(
    title: str,
    root: Union[str, Path],
    settings: Optional[ConfigManager] = None
) -> PageTarget:
    """
    Map a page title to its output file and optional preamble.

    Args:
        title: The page title
        root: Output root directory
        settings: Configuration (defaults to the global config)

    Returns:
        PageTarget with path <root>/pages/<escaped title>.md
    """
    settings = settings or default_config
    path = Path(root) / settings.pages_directory / f"{escape_title(title)}{settings.file_extension}"
    return PageTarget(title=title, path=path, preamble=title_preamble(title), kind="page")
