import threading

from pasterbar_core.config import HistoryStoreSettings
from pasterbar_core.store import HistoryStore

from pasterbar_cli.main import app


def _read_back(database_path):
    store = HistoryStore(HistoryStoreSettings(database_path=database_path))
    try:
        return store.query_all()
    finally:
        store.close()


def test_no_arguments_shows_help(runner):
    result = runner.invoke(app, [])
    assert "watch" in result.output
    assert "history" in result.output


class TestHistory:
    def test_empty(self, runner):
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "No clipboard history" in result.output

    def test_lists_entries_by_display_name(self, runner, seeded):
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "hello clipboard" in result.output
        assert "capture.png" in result.output
        assert "report.txt" in result.output

    def test_newest_first_with_limit(self, runner, seeded):
        result = runner.invoke(app, ["history", "--limit", "1"])
        assert result.exit_code == 0
        assert "report.txt" in result.output
        assert "hello clipboard" not in result.output

    def test_filter_by_type(self, runner, seeded):
        result = runner.invoke(app, ["history", "--type", "image"])
        assert result.exit_code == 0
        assert "capture.png" in result.output
        assert "report.txt" not in result.output

    def test_rejects_zero_limit(self, runner, seeded):
        result = runner.invoke(app, ["history", "--limit", "0"])
        assert result.exit_code != 0


class TestClear:
    def test_with_yes(self, runner, seeded):
        result = runner.invoke(app, ["clear", "--yes"])
        assert result.exit_code == 0
        assert "cleared" in result.output
        assert _read_back(seeded) == []

    def test_confirmed_at_prompt(self, runner, seeded):
        result = runner.invoke(app, ["clear"], input="y\n")
        assert result.exit_code == 0
        assert _read_back(seeded) == []

    def test_declined_keeps_history(self, runner, seeded):
        result = runner.invoke(app, ["clear"], input="n\n")
        assert result.exit_code == 1
        assert len(_read_back(seeded)) == 3


class TestCopy:
    def test_text_entry(self, runner, seeded, clipboard):
        result = runner.invoke(app, ["copy", "1"])
        assert result.exit_code == 0
        assert "Copied text entry 1" in result.output
        assert clipboard.read_payload().text == "hello clipboard"

    def test_file_entry(self, runner, seeded, clipboard):
        result = runner.invoke(app, ["copy", "3"])
        assert result.exit_code == 0
        assert [str(p) for p in clipboard.read_payload().file_paths] == [
            "/tmp/docs/report.txt"
        ]

    def test_image_entry_with_missing_file_fails(self, runner, seeded, clipboard):
        before = clipboard.change_count()
        result = runner.invoke(app, ["copy", "2"])
        assert result.exit_code == 1
        assert "Could not copy entry 2" in result.output
        assert clipboard.change_count() == before

    def test_unknown_id(self, runner, seeded):
        result = runner.invoke(app, ["copy", "99"])
        assert result.exit_code == 1
        assert "No entry with ID 99" in result.output

    def test_does_not_add_history(self, runner, seeded):
        runner.invoke(app, ["copy", "1"])
        assert len(_read_back(seeded)) == 3


class TestInfo:
    def test_reports_paths_and_count(self, runner, seeded):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Environment:" in result.output
        assert "test" in result.output
        assert "clipboard_data.db" in result.output
        assert "Entries: 3" in result.output

    def test_unavailable_database(self, runner, monkeypatch, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("x")
        monkeypatch.setenv("PASTERBAR_DATABASE_PATH", str(blocker / "clipboard_data.db"))
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "database unavailable" in result.output


class TestWatch:
    def test_records_clipboard_changes(self, runner, clipboard, database_path):
        clipboard.set_text("already there")
        timer = threading.Timer(0.3, clipboard.set_text, args=("fresh copy",))
        timer.start()
        try:
            result = runner.invoke(app, ["watch", "--duration", "1.5"])
        finally:
            timer.cancel()
        assert result.exit_code == 0
        assert "Watching clipboard" in result.output
        assert "fresh copy" in result.output
        contents = [entry.content for entry in _read_back(database_path)]
        assert contents == ["fresh copy"]

    def test_quiet_suppresses_entry_lines(self, runner, clipboard, database_path):
        timer = threading.Timer(0.3, clipboard.set_text, args=("silent copy",))
        timer.start()
        try:
            result = runner.invoke(app, ["watch", "--duration", "1.5", "--quiet"])
        finally:
            timer.cancel()
        assert result.exit_code == 0
        assert "silent copy" not in result.output
        assert [entry.content for entry in _read_back(database_path)] == ["silent copy"]
