"""Tests for page title to path mapping and journal recognition."""

import tempfile
import unittest
from pathlib import Path

from athens_logseq.config import ConfigManager
from athens_logseq.export.journals import classify, journal_filename, journal_target
from athens_logseq.export.paths import escape_title, map_title, title_preamble


class TestTitleMapping(unittest.TestCase):
    """Test map_title escaping and preamble rules."""

    def setUp(self):
        self.root = Path("/graph")
        self.settings = ConfigManager("/nonexistent/config.yaml")

    def test_plain_title_round_trips(self):
        for title in ["Reading", "Weekly review", "Émile Zola", "C++ notes"]:
            target = map_title(title, self.root, self.settings)

            self.assertIsNone(target.preamble)
            self.assertEqual(target.path.stem, title)
            self.assertEqual(target.path, self.root / "pages" / f"{title}.md")
            self.assertEqual(target.kind, "page")

    def test_slash_is_escaped(self):
        target = map_title("Project/Notes", self.root, self.settings)

        self.assertEqual(target.path.name, "Project.Notes.md")
        self.assertEqual(target.preamble, "title:: Project/Notes")

    def test_colon_is_escaped(self):
        target = map_title("9:00 Meeting", self.root, self.settings)

        self.assertEqual(target.path.name, "9_00 Meeting.md")
        self.assertEqual(target.preamble, "title:: 9:00 Meeting")

    def test_dot_needs_preamble(self):
        target = map_title("v1.2", self.root, self.settings)

        self.assertEqual(target.path.name, "v1.2.md")
        self.assertEqual(target.preamble, "title:: v1.2")

    def test_escape_title(self):
        self.assertEqual(escape_title("a/b:c.d"), "a.b_c.d")
        self.assertIsNone(title_preamble("abc"))
        self.assertEqual(title_preamble("a:b"), "title:: a:b")

    def test_configured_pages_directory(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.yaml"
            config_path.write_text("paths:\n  pages_dir: notes\n", encoding="utf-8")
            settings = ConfigManager(str(config_path))

        target = map_title("Reading", self.root, settings)

        self.assertEqual(target.path, self.root / "notes" / "Reading.md")


class TestJournalClassifier(unittest.TestCase):
    """Test journal title recognition."""

    def setUp(self):
        self.settings = ConfigManager("/nonexistent/config.yaml")

    def test_two_digit_day(self):
        journal = classify("July 16, 2021")

        self.assertIsNotNone(journal)
        self.assertEqual((journal.month, journal.day, journal.year), ("July", 16, 2021))
        target = journal_target(journal, "/graph", self.settings)
        self.assertEqual(target.path, Path("/graph/journals/2021_07_16.md"))
        self.assertIsNone(target.preamble)
        self.assertEqual(target.kind, "journal")

    def test_single_digit_day_is_padded(self):
        journal = classify("January 3, 1999")

        self.assertEqual(journal_filename(journal), "1999_01_03")
        self.assertEqual(
            journal_target(journal, "/graph", self.settings).path,
            Path("/graph/journals/1999_01_03.md")
        )

    def test_every_month(self):
        months = ["January", "February", "March", "April", "May", "June", "July",
                  "August", "September", "October", "November", "December"]
        for number, month in enumerate(months, 1):
            journal = classify(f"{month} 1, 2020")
            self.assertEqual(journal_filename(journal), f"2020_{number:02d}_01")

    def test_not_a_date(self):
        self.assertIsNone(classify("Not A Date"))

    def test_date_like_titles_are_regular_pages(self):
        for title in ["Jul 16, 2021", "July 16 2021", "july 16, 2021", "July 123, 2021",
                      "July 16, 2021 notes", " July 16, 2021", "2021-07-16"]:
            self.assertIsNone(classify(title), title)


if __name__ == '__main__':
    unittest.main()
