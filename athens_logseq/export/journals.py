"""
Journal page recognition.

Athens names daily pages like 'July 16, 2021'; Logseq stores them as
journals/2021_07_16.md.
"""

import re
from pathlib import Path
from typing import Optional, Union

from ..config import ConfigManager, config as default_config
from ..models import JournalDescriptor, PageTarget


MONTHS = {
    "January": "01",
    "February": "02",
    "March": "03",
    "April": "04",
    "May": "05",
    "June": "06",
    "July": "07",
    "August": "08",
    "September": "09",
    "October": "10",
    "November": "11",
    "December": "12",
}

JOURNAL_TITLE_PATTERN = re.compile(
    r"^(" + "|".join(MONTHS) + r") (\d{1,2}), (\d+)$"
)


def classify(title: str) -> Optional[JournalDescriptor]:
    """
    Parse a journal title, or return None for an ordinary page.

    Titles that only look like dates ('July 123, 2021', 'Jul 16, 2021')
    are ordinary pages.
    """
    match = JOURNAL_TITLE_PATTERN.match(title)
    if not match:
        return None
    month, day, year = match.groups()
    return JournalDescriptor(title=title, month=month, day=int(day), year=int(year))


def journal_filename(journal: JournalDescriptor) -> str:
    """Format a journal date as Logseq's filename stem, e.g. 2021_07_13."""
    return f"{journal.year}_{MONTHS[journal.month]}_{journal.day:02d}"


def journal_target(
    journal: JournalDescriptor,
    root: Union[str, Path],
    settings: Optional[ConfigManager] = None
) -> PageTarget:
    """Output target for a journal page; journals never need a preamble."""
    settings = settings or default_config
    path = Path(root) / settings.journals_directory / f"{journal_filename(journal)}{settings.file_extension}"
    return PageTarget(title=journal.title, path=path, preamble=None, kind="journal")
