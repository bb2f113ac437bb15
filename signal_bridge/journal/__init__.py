"""Trade journal persistence."""

from .writer import JOURNAL_FILE_NAME, JOURNAL_HEADER, JournalWriter, day_folder

__all__ = ["JOURNAL_FILE_NAME", "JOURNAL_HEADER", "JournalWriter", "day_folder"]
