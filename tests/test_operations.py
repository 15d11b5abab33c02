from __future__ import annotations

from pathlib import Path

import pytest
import tomlkit

from foget.core import operations as ops
from foget.core import runner, store
from foget.core.config import Settings
from foget.core.errors import CommandNotFound, DuplicateTag, InternalError, TagNotFound, WriteError
from foget.core.operations import Action, Request
from foget.core.registry import Registry
from foget.core.runner import run


def _reg(text: str = "") -> Registry:
    return Registry(tomlkit.parse(text))


def _data(path: Path) -> dict:
    return tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()


def test_add_creates_entry() -> None:
    reg = _reg()
    res = ops.add(reg, "ls", "list directory contents")
    assert res.tags == ["list directory contents"]
    assert reg.document.unwrap() == {"ls": {"tags": ["list directory contents"]}}


def test_add_appends_and_rejects_duplicates() -> None:
    reg = _reg('[ls]\ntags = ["a"]\n')
    ops.add(reg, "ls", "b")
    with pytest.raises(DuplicateTag):
        ops.add(reg, "ls", "a")
    assert reg.tags("ls") == ["a", "b"]


def test_add_to_entry_without_tags() -> None:
    reg = _reg('[ls]\nnote = "x"\n')
    with pytest.raises(InternalError):
        ops.add(reg, "ls", "a")


def test_modify_requires_command() -> None:
    with pytest.raises(CommandNotFound):
        ops.modify(_reg(), "ls", "a")


def test_modify_skips_duplicate_check() -> None:
    reg = _reg('[ls]\ntags = ["a"]\n')
    res = ops.modify(reg, "ls", "a")
    assert res.tags == ["a", "a"]


def test_delete_entry_and_absent_entry() -> None:
    reg = _reg('[ls]\ntags = ["a"]\n')
    assert ops.delete(reg, "ls").removed == 1
    assert ops.delete(reg, "ls").removed == 0
    assert reg.document.unwrap() == {}


def test_delete_tag_keeps_others_in_order() -> None:
    reg = _reg('[ls]\ntags = ["a", "b", "c", "b"]\n')
    res = ops.delete(reg, "ls", "b")
    assert res.removed == 2
    assert res.tags == ["a", "c"]


def test_delete_tag_errors() -> None:
    with pytest.raises(CommandNotFound):
        ops.delete(_reg(), "ls", "a")
    with pytest.raises(InternalError):
        ops.delete(_reg("[ls]\ntags = 3\n"), "ls", "a")


def test_show() -> None:
    reg = _reg('[ls]\ntags = ["a", "b"]\n')
    assert ops.show(reg, "ls").tags == ["a", "b"]
    missing = ops.show(reg, "tar")
    assert not missing.found


def test_search_is_case_sensitive_and_ordered() -> None:
    reg = _reg(
        '[tar]\ntags = ["Extract archives", "create with -c"]\n'
        '[ls]\ntags = ["list", "show hidden with -a"]\n'
        '[grep]\ntags = ["search text"]\n'
        '[odd]\ntags = [1, "extract nothing"]\n'
    )
    res = ops.search(reg, "xtract")
    assert res.commands == ["tar", "odd"]
    assert res.matches[0] == ("tar", ["Extract archives", "create with -c"])
    assert ops.search(reg, "Extract").commands == ["tar"]
    with pytest.raises(TagNotFound):
        ops.search(reg, "EXTRACT")


def test_action_mutates() -> None:
    assert {a for a in Action if a.mutates} == {Action.ADD, Action.MODIFY, Action.DELETE}


# --- full load/mutate/save cycle --------------------------------------------


def test_failed_mutations_do_not_write(db: Path) -> None:
    db.write_text('# keep me\n[ls]\ntags = ["a"]\n')
    before = db.read_bytes()
    settings = Settings()
    with pytest.raises(DuplicateTag):
        run(Request(Action.ADD, "ls", "a"), settings=settings)
    with pytest.raises(CommandNotFound):
        run(Request(Action.MODIFY, "tar", "x"), settings=settings)
    assert db.read_bytes() == before


def test_queries_do_not_write(db: Path) -> None:
    db.write_text('[ls]\ntags = ["a"]\n')
    mtime = db.stat().st_mtime_ns
    run(Request(Action.SHOW, "ls"), settings=Settings())
    run(Request(Action.SEARCH, query="a"), settings=Settings())
    assert db.stat().st_mtime_ns == mtime


@pytest.mark.parametrize("atomic", [True, False])
def test_scenario(db: Path, atomic: bool) -> None:
    settings = Settings(atomic_save=atomic)

    run(Request(Action.ADD, "ls", "list directory contents"), settings=settings)
    assert _data(db) == {"ls": {"tags": ["list directory contents"]}}

    snapshot = db.read_bytes()
    with pytest.raises(DuplicateTag):
        run(Request(Action.ADD, "ls", "list directory contents"), settings=settings)
    assert db.read_bytes() == snapshot

    run(Request(Action.ADD, "ls", "show hidden with -a"), settings=settings)
    assert _data(db) == {"ls": {"tags": ["list directory contents", "show hidden with -a"]}}

    found = run(Request(Action.SEARCH, query="hidden"), settings=settings)
    assert found.matches == [("ls", ["list directory contents", "show hidden with -a"])]

    run(Request(Action.DELETE, "ls", "show hidden with -a"), settings=settings)
    assert _data(db) == {"ls": {"tags": ["list directory contents"]}}

    run(Request(Action.DELETE, "ls"), settings=settings)
    assert _data(db) == {}
    assert not run(Request(Action.SHOW, "ls"), settings=settings).found


def test_override_path_used(tmp_path: Path) -> None:
    other = tmp_path / "other.toml"
    other.write_text("")
    run(Request(Action.ADD, "ls", "a"), settings=Settings(), descriptions=other)
    assert _data(other) == {"ls": {"tags": ["a"]}}


def test_save_failure_after_mutation_is_reraised(db: Path, monkeypatch) -> None:
    db.write_text('[ls]\ntags = ["a"]\n')
    before = db.read_bytes()
    logged: list[str] = []
    monkeypatch.setattr(runner.log, "error", lambda msg, *args: logged.append(msg % args))

    def _boom(*_args, **_kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(store.os, "replace", _boom)
    with pytest.raises(WriteError):
        run(Request(Action.ADD, "ls", "b"), settings=Settings())
    assert db.read_bytes() == before
    assert logged and "succeeded in memory" in logged[0]


def test_add_ignores_non_string_tags_for_duplicates() -> None:
    reg = _reg("[odd]\ntags = [1]\n")
    res = ops.add(reg, "odd", "1")
    assert res.tags == ["1", "1"]
    with pytest.raises(DuplicateTag):
        ops.add(reg, "odd", "1")
