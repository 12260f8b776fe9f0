"""
Test Result Persistence - create-or-append semantics and naming

Run with: pytest tests/test_persistence.py -v
"""

from datetime import datetime

import pytest

from backend.persistence import ResultPersistence
from backend.settings import ProfilerSettings
from backend.utils.helpers import build_result_filename, format_file_date, format_timestamp

MOMENT = datetime(2024, 12, 8, 10, 15, 3)


@pytest.fixture
def persistence(tmp_path):
    return ResultPersistence(str(tmp_path / "results"))


def test_create_new_file(persistence, tmp_path):
    path = persistence.create_or_append(tmp_path / "results" / "a.md", "# Result\n")
    assert path.read_text() == "# Result\n"


@pytest.mark.parametrize("existing", [
    "Prior notes",
    "Prior notes\n",
    "Prior notes\n\n",
])
def test_append_separated_by_one_blank_line(persistence, tmp_path, existing):
    target = tmp_path / "results" / "a.md"
    target.parent.mkdir(parents=True)
    target.write_text(existing)

    persistence.create_or_append(target, "# New")

    content = target.read_text()
    assert content.startswith(existing)
    assert content == "Prior notes\n\n# New"


def test_append_twice(persistence, tmp_path):
    target = tmp_path / "results" / "a.md"
    persistence.create_or_append(target, "first\n")
    persistence.create_or_append(target, "second\n")
    assert target.read_text() == "first\n\nsecond\n"


def test_append_to_empty_file(persistence, tmp_path):
    target = tmp_path / "results" / "a.md"
    target.parent.mkdir(parents=True)
    target.write_text("")
    persistence.create_or_append(target, "body")
    assert target.read_text() == "body"


def test_save_result_uses_settings(persistence, tmp_path):
    settings = ProfilerSettings(default_save_location="/Journal/PERMA")
    path = persistence.save_result("doc", settings, MOMENT)

    assert path == (tmp_path / "results" / "Journal" / "PERMA" / "PERMA-Results-2024-12-08.md").resolve()
    assert path.read_text() == "doc"


def test_save_result_same_day_appends(persistence):
    settings = ProfilerSettings()
    first = persistence.save_result("morning", settings, MOMENT)
    second = persistence.save_result("evening", settings, MOMENT.replace(hour=20))
    assert first == second
    assert second.read_text() == "morning\n\nevening"


def test_save_location_cannot_escape_root(persistence):
    with pytest.raises(ValueError, match="escapes"):
        persistence.resolve_path("../outside", "a.md")


def test_write_failure_propagates(persistence, tmp_path):
    blocker = tmp_path / "results"
    blocker.write_text("a file where a directory should be")
    with pytest.raises(OSError):
        persistence.create_or_append(blocker / "a.md", "doc")


class TestFileNaming:

    def test_date_substitution_and_extension(self):
        assert build_result_filename("PERMA-Results-{{date}}", MOMENT) == "PERMA-Results-2024-12-08.md"

    def test_existing_extension_kept(self):
        assert build_result_filename("perma-{{date}}.md", MOMENT) == "perma-2024-12-08.md"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            build_result_filename("   ", MOMENT)

    def test_path_separator_rejected(self):
        with pytest.raises(ValueError, match="path separators"):
            build_result_filename("a/{{date}}", MOMENT)

    def test_date_formats(self):
        assert format_file_date(MOMENT) == "2024-12-08"
        assert format_timestamp(MOMENT) == "2024-12-08 10:15:03"
