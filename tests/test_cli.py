"""Tests for the console menu handlers."""
from __future__ import annotations

import io

import pytest
from rich.console import Console

from address_book import cli
from address_book.config import Settings
from address_book.models import Contact
from address_book.session import Session


@pytest.fixture
def answers(monkeypatch):
    """Queue of replies fed to ``console.input``; output lands in a buffer."""
    queue = []
    fake = Console(file=io.StringIO(), width=200, color_system=None)
    monkeypatch.setattr(fake, "input", lambda prompt="": queue.pop(0))
    monkeypatch.setattr(cli, "console", fake)
    return queue


@pytest.fixture
def session(tmp_path):
    s = Session(Settings(data_dir=tmp_path))
    s.add(Contact("Alice", "F", "111", "C1", ""))
    s.add(Contact("Bob", "M", "222", "C2", "x"))
    s.add(Contact("Alice", "F", "444", "C3", "twin"))
    return s


def output():
    return cli.console.file.getvalue()


class TestHandlers:

    def test_add(self, answers, session):
        answers.extend(["Carol", "F", "333", "C1", "monitor"])

        res = cli.dispatch(session, "1")

        assert "Contact added" in res
        assert session.store.all()[-1] == Contact("Carol", "F", "333", "C1", "monitor")

    def test_add_requires_name(self, answers, session):
        answers.extend(["", "Dan", "M", "", "", ""])

        cli.dispatch(session, "1")

        assert session.store.all()[-1].name == "Dan"
        assert "cannot be empty" in output()

    def test_delete_single(self, answers, session):
        answers.extend(["Phone", "222"])

        res = cli.dispatch(session, "2")

        assert "Bob deleted" in res
        assert len(session.store) == 2

    def test_delete_ambiguous_select(self, answers, session):
        answers.extend(["n", "Alice", "1"])

        cli.dispatch(session, "2")

        assert [c.phone for c in session.store.all()] == ["111", "222"]
        assert "Multiple matches" in output()

    def test_delete_bad_selection(self, answers, session):
        answers.extend(["n", "Alice", "7"])

        res = cli.dispatch(session, "2")

        assert "Invalid index" in res
        assert len(session.store) == 3

    def test_delete_unknown_field(self, answers, session):
        answers.extend(["email", "x"])

        res = cli.dispatch(session, "2")

        assert "Unknown field" in res

    def test_delete_not_found(self, answers, session):
        answers.extend(["name", "Zed"])

        res = cli.dispatch(session, "2")

        assert "not found" in res

    def test_modify_single_field(self, answers, session):
        answers.extend(["p", "222", "4", "C9"])

        res = cli.dispatch(session, "3")

        assert "modified" in res
        assert session.store.all()[1].class_name == "C9"

    def test_modify_all_fields(self, answers, session):
        answers.extend(["p", "222", "6", "Bobby", "M", "999", "C2", "new"])

        cli.dispatch(session, "3")

        assert session.store.all()[1] == Contact("Bobby", "M", "999", "C2", "new")

    def test_modify_cancel(self, answers, session):
        answers.extend(["p", "222", "7"])

        res = cli.dispatch(session, "3")

        assert "Nothing changed" in res

    def test_modify_invalid_choice(self, answers, session):
        answers.extend(["p", "222", "0"])

        res = cli.dispatch(session, "3")

        assert "Invalid choice" in res
        assert session.store.all()[1] == Contact("Bob", "M", "222", "C2", "x")

    def test_find(self, answers, session):
        answers.extend(["name", "Alice"])

        cli.dispatch(session, "4")

        assert "444" in output()
        assert "222" not in output()

    def test_find_nothing(self, answers, session):
        answers.extend(["class", "C7"])

        res = cli.dispatch(session, "4")

        assert "not found: C7" in res

    def test_show_empty(self, answers, tmp_path):
        res = cli.dispatch(Session(Settings(data_dir=tmp_path)), "5")

        assert "empty" in res

    def test_save_and_load(self, answers, session, tmp_path):
        answers.extend(["roster"])
        cli.dispatch(session, "6")
        assert (tmp_path / "roster.csv").exists()

        session.store.replace([])
        answers.extend([""])
        res = cli.dispatch(session, "7")

        assert "Loaded 3 contacts" in res

    def test_save_empty(self, answers, tmp_path):
        answers.extend([""])

        res = cli.dispatch(Session(Settings(data_dir=tmp_path)), "6")

        assert "nothing to save" in res
        assert list(tmp_path.iterdir()) == []

    def test_load_missing(self, answers, session):
        answers.extend(["missing.csv"])

        res = cli.dispatch(session, "7")

        assert "Cannot open file" in res
        assert len(session.store) == 3

    def test_invalid_menu_choice(self, answers, session):
        assert "Invalid choice" in cli.dispatch(session, "42")


class TestExit:

    def test_exit_offers_save(self, answers, session, tmp_path):
        answers.extend(["y", "final"])

        cli.dispatch(session, "8")

        assert session.closed
        assert (tmp_path / "final.csv").exists()

    def test_exit_without_save(self, answers, session, tmp_path):
        answers.extend(["n"])

        cli.dispatch(session, "8")

        assert session.closed
        assert list(tmp_path.iterdir()) == []

    def test_run_loop(self, answers, tmp_path):
        s = Session(Settings(data_dir=tmp_path))
        answers.extend(["1", "Eve", "F", "5", "C5", "", "9", "8", "n"])

        cli.run(s)

        assert s.closed
        assert "Invalid choice" in output()


def test_main_loads_file(answers, monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    monkeypatch.setenv("ADDRESS_BOOK_DATA_DIR", str(tmp_path))
    (tmp_path / "book.csv").write_text("h\nA,F,1,C1,\n", encoding="utf-8")
    answers.extend(["5", "8"])

    assert cli.main(["--load", "book.csv"]) == 0
    assert "Loaded 1 contacts" in output()


def test_main_rejects_bad_log_level(answers):
    assert cli.main(["--log-level", "chatty"]) == 1
