"""Tests for ModStore loading and saving."""

import json

import pytest

from sti_modder.fs import LocalFileSystem
from sti_modder.models import ModRecord
from sti_modder.store import ModStore, filter_by_target


@pytest.fixture
def store(fs, game_dir):
    return ModStore(fs, game_dir / "mods")


# ── load_all ─────────────────────────────────────────────


@pytest.mark.asyncio
async def test_load_all_creates_missing_directory(fs, game_dir, store):
    assert not await fs.exists(game_dir / "mods")
    assert await store.load_all() == []
    assert await fs.is_dir(game_dir / "mods")


@pytest.mark.asyncio
async def test_load_all_returns_valid_mods_in_name_order(store, add_mod, make_mod):
    add_mod("b.json", make_mod("B", "STIPrompt.jet", [("P2", ["d2"])]))
    add_mod("a.json", make_mod("A", "STIPrompt.jet", [("P1", ["d1"])]))
    mods = await store.load_all()
    assert [m.name for m in mods] == ["A", "B"]


@pytest.mark.asyncio
async def test_single_mod_missing_name_gives_empty_set(store, add_mod, make_mod):
    data = make_mod("X", "STIPrompt.jet", [("P", [])])
    del data["name"]
    add_mod("broken.json", data)
    assert await store.load_all() == []


@pytest.mark.asyncio
async def test_bad_json_skipped_with_warning(store, add_mod, make_mod, caplog):
    add_mod("a.json", "{not json")
    add_mod("b.json", make_mod("B", "STIPrompt.jet", [("P", ["d"])]))
    mods = await store.load_all()
    assert [m.name for m in mods] == ["B"]
    assert "a.json is not a valid mod" in caplog.text


@pytest.mark.asyncio
async def test_invalid_entry_dropped_mod_kept(store, add_mod):
    add_mod("a.json", {
        "name": "A", "author": "me", "targetFile": "STIPrompt.jet",
        "promptsAdded": [{"prompt": "P1"}, {"prompt": "P2", "decoys": ["d"]}],
    })
    mods = await store.load_all()
    assert len(mods) == 1
    assert [e.prompt for e in mods[0].entries] == ["P2"]


@pytest.mark.asyncio
async def test_subdirectories_ignored(fs, game_dir, store, add_mod, make_mod):
    fs.add_dir(game_dir / "mods" / "drafts")
    add_mod("a.sti", make_mod("A", "STIPrompt.jet", []))
    assert [m.name for m in await store.load_all()] == ["A"]


# ── scan ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_scan_reports_rejected_files(store, add_mod, make_mod):
    add_mod("good.json", make_mod("G", "STIPrompt.jet", []))
    add_mod("bad.json", {"name": "B"})
    results = await store.scan()
    by_name = {r.path.name: r for r in results}
    assert by_name["good.json"].is_valid
    assert not by_name["bad.json"].is_valid
    assert {i.path for i in by_name["bad.json"].issues if i.severity == "error"} == {
        "author", "targetFile",
    }


@pytest.mark.asyncio
async def test_scan_reports_parse_error(store, add_mod):
    add_mod("bad.json", "")
    (result,) = await store.scan()
    assert not result.is_valid
    assert "Not valid JSON" in result.issues[0].message


# ── filter_by_target ─────────────────────────────────────


def _mod(name, target):
    return ModRecord(name=name, author="me", target_file=target)


def test_filter_by_target_preserves_order():
    mods = [
        _mod("A", "STIPrompt.jet"),
        _mod("B", "STIJobPrompt.jet"),
        _mod("C", "STIPrompt.jet"),
    ]
    assert [m.name for m in filter_by_target(mods, "STIPrompt.jet")] == ["A", "C"]
    assert filter_by_target(mods, "STIStorePrompt.jet") == []


# ── save ─────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_save_writes_mod_format(fs, store):
    mod = ModRecord.model_validate({
        "name": "Mine", "author": "me", "targetFile": "STIPrompt.jet",
        "promptsAdded": [{"prompt": "Q", "decoys": ["a"]}],
    })
    path = await store.save(mod, "mine.sti")
    saved = json.loads(await fs.read_text(path))
    assert saved == {
        "name": "Mine", "author": "me", "targetFile": "STIPrompt.jet",
        "promptsAdded": [{"prompt": "Q", "decoys": ["a"]}],
    }
    assert [m.name for m in await store.load_all()] == ["Mine"]


# ── Unreadable files ─────────────────────────────────────


@pytest.mark.asyncio
async def test_unreadable_file_skipped(tmp_path, make_mod):
    mods_dir = tmp_path / "mods"
    mods_dir.mkdir()
    (mods_dir / "a.json").write_text(json.dumps(make_mod("A", "STIPrompt.jet", [("P", [])])))
    (mods_dir / "b.json").symlink_to(tmp_path / "gone.json")
    store = ModStore(LocalFileSystem(), mods_dir)

    assert [m.name for m in await store.load_all()] == ["A"]

    by_name = {r.path.name: r for r in await store.scan()}
    assert not by_name["b.json"].is_valid
    assert by_name["b.json"].issues[0].message.startswith("Cannot read: ")
