import json

import pytest

from scriptmenu.settings import Settings, default_settings, default_settings_path, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "settings.json") == default_settings()


def test_partial_file_is_merged_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"path": "/opt/scripts", "log": True, "strip": "yes"}), encoding="utf-8")

    values = load_settings(path)

    assert values["path"] == "/opt/scripts"
    assert values["log"] is True
    assert values["strip"] is False  # wrong type ignored
    assert values["notify"] is True


def test_unreadable_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_settings(path) == default_settings()


def test_save_creates_parent_dirs(tmp_path):
    path = default_settings_path(tmp_path)
    save_settings(path, default_settings())

    assert path == tmp_path / ".config" / "scriptmenu" / "settings.json"
    assert json.loads(path.read_text(encoding="utf-8"))["notify"] is True


def test_set_value_persists_and_emits(tmp_path, qapp):
    path = tmp_path / "settings.json"
    settings = Settings(path)
    seen = []
    settings.changed.connect(seen.append)

    settings.set_value("path", "/srv/scripts")
    settings.set_value("path", "/srv/scripts")

    assert seen == ["path"]
    assert settings.get_string("path") == "/srv/scripts"
    assert Settings(path).get_string("path") == "/srv/scripts"


def test_unknown_key_is_rejected(tmp_path, qapp):
    with pytest.raises(KeyError):
        Settings(tmp_path / "settings.json").set_value("colour", "red")


def test_reload_announces_changed_keys(tmp_path, qapp):
    path = tmp_path / "settings.json"
    settings = Settings(path)
    seen = []
    settings.changed.connect(seen.append)

    values = default_settings()
    values.update({"strip": True, "default-icon": "system-run"})
    save_settings(path, values)
    settings.reload()

    assert sorted(seen) == ["default-icon", "strip"]
    assert settings.get_boolean("strip") is True


def test_change_written_by_another_process_is_picked_up(tmp_path, qapp, wait_until):
    path = tmp_path / "settings.json"
    settings = Settings(path)
    seen = []
    settings.changed.connect(seen.append)

    Settings(path).set_value("path", "/srv/scripts")

    assert wait_until(lambda: settings.get_string("path") == "/srv/scripts", timeout=3.0)
    assert seen == ["path"]


def test_atomic_rewrites_keep_being_watched(tmp_path, qapp, wait_until):
    path = tmp_path / "settings.json"
    save_settings(path, default_settings())
    settings = Settings(path)

    for value in ("/first", "/second"):
        values = default_settings()
        values["path"] = value
        staging = tmp_path / "settings.json.tmp"
        save_settings(staging, values)
        staging.replace(path)
        assert wait_until(lambda: settings.get_string("path") == value, timeout=3.0)


def test_half_written_file_keeps_current_values(tmp_path, qapp):
    path = tmp_path / "settings.json"
    settings = Settings(path)
    settings.set_value("path", "/srv/scripts")
    seen = []
    settings.changed.connect(seen.append)

    path.write_text('{"path": "/sr', encoding="utf-8")
    settings.reload()

    assert settings.get_string("path") == "/srv/scripts"
    assert seen == []
