import json
import os

import pytest

from settings_manager import (
    Configuration,
    ConfigurationLoadError,
    SettingsStore,
    load_configuration,
    save_configuration,
)


def test_missing_file_uses_discovery(tmp_path, make_provider):
    download = make_provider("download-default", "/home/x/Downloads")
    sims = make_provider("sims-default", None)

    configuration = load_configuration(str(tmp_path / "config.json"), download, sims)

    assert configuration.version == 1
    assert configuration.download_dir == "/home/x/Downloads"
    assert configuration.sims_dir is None
    assert download.call_count == 1
    assert sims.call_count == 1


def test_present_fields_skip_discovery(write_config, make_provider):
    path = write_config({"version": 1, "downloadDir": "/dl", "simsDir": None})
    download = make_provider("download-default", "/other")
    sims = make_provider("sims-default", "/sims")

    configuration = load_configuration(path, download, sims)

    assert configuration.download_dir == "/dl"
    assert configuration.sims_dir == "/sims"
    assert download.call_count == 0
    assert sims.call_count == 1


def test_unknown_keys_are_ignored(write_config, make_provider):
    path = write_config({"version": 1, "downloadDir": "/dl", "simsDir": "/s", "theme": "dark"})
    configuration = load_configuration(path, make_provider("d", None), make_provider("s", None))
    assert configuration == Configuration(version=1, download_dir="/dl", sims_dir="/s")


def test_wrong_types_are_treated_as_missing(write_config, make_provider):
    path = write_config({"version": "two", "downloadDir": 42, "simsDir": ""})
    configuration = load_configuration(path, make_provider("d", "/d"), make_provider("s", "/s"))
    assert configuration == Configuration(version=1, download_dir="/d", sims_dir="/s")


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", ""])
def test_malformed_file_is_fatal(write_config, make_provider, content):
    path = write_config(content)
    with pytest.raises(ConfigurationLoadError) as exc_info:
        load_configuration(path, make_provider("d", "/d"), make_provider("s", "/s"))
    assert exc_info.value.path == path
    # the user's file is left untouched
    with open(path, encoding="utf-8") as f:
        assert f.read() == content


def test_round_trip(tmp_path, make_provider):
    path = str(tmp_path / "config.json")
    original = Configuration(download_dir="C:\\Users\\X\\Downloads", sims_dir="/home/x/Électronic Arts/The Sims 4")
    save_configuration(original, path)

    loaded = load_configuration(path, make_provider("d", None), make_provider("s", None))
    save_configuration(loaded, path)
    reloaded = load_configuration(path, make_provider("d", None), make_provider("s", None))

    assert reloaded.download_dir == original.download_dir
    assert reloaded.sims_dir == original.sims_dir


def test_saved_file_layout(tmp_path):
    path = tmp_path / "config.json"
    save_configuration(Configuration(download_dir="/dl", sims_dir=None), str(path))

    text = path.read_text(encoding="utf-8")
    assert json.loads(text) == {"version": 1, "downloadDir": "/dl", "simsDir": None}
    assert "\n    " in text  # indented
    assert not os.path.exists(str(path) + ".tmp")


def test_version_never_decreases(write_config, tmp_path, make_provider):
    path = write_config({"version": 3, "downloadDir": "/d", "simsDir": "/s"})
    configuration = load_configuration(path, make_provider("d", None), make_provider("s", None))
    save_configuration(configuration, path)
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["version"] == 3

    old = Configuration(version=0, download_dir="/d", sims_dir="/s")
    save_configuration(old, path)
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["version"] == 1
    assert old.version == 1


def test_save_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "SymBLink" / "config.json"
    save_configuration(Configuration(), str(path))
    assert path.is_file()


def test_save_overwrites_existing_file(write_config):
    path = write_config({"version": 1, "downloadDir": "/old", "simsDir": "/old"})
    save_configuration(Configuration(download_dir="/new", sims_dir="/new"), path)
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["downloadDir"] == "/new"


def test_save_failure_raises_oserror(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a folder")
    with pytest.raises(OSError):
        save_configuration(Configuration(), str(blocker / "config.json"))


def _store(tmp_path, make_provider, download="/d", sims="/s"):
    return SettingsStore.open(
        str(tmp_path / "config.json"),
        make_provider("download-default", download),
        make_provider("sims-default", sims),
    )


def test_store_exposes_live_instance(tmp_path, make_provider):
    store = _store(tmp_path, make_provider)
    configuration = store.current_config
    store.set_download_dir("/new")
    assert configuration.download_dir == "/new"
    assert store.current_config is configuration


def test_setters_do_not_save(tmp_path, make_provider):
    store = _store(tmp_path, make_provider)
    store.set_sims_dir("/elsewhere")
    assert not (tmp_path / "config.json").exists()


def test_context_manager_saves_on_exit(tmp_path, make_provider):
    with _store(tmp_path, make_provider) as store:
        store.set_sims_dir("/picked")
    with open(tmp_path / "config.json", encoding="utf-8") as f:
        assert json.load(f)["simsDir"] == "/picked"


def test_context_manager_saves_on_error(tmp_path, make_provider):
    with pytest.raises(RuntimeError):
        with _store(tmp_path, make_provider) as store:
            store.set_download_dir("/before-crash")
            raise RuntimeError("boom")
    with open(tmp_path / "config.json", encoding="utf-8") as f:
        assert json.load(f)["downloadDir"] == "/before-crash"


def test_close_writes_only_once(tmp_path, make_provider):
    store = _store(tmp_path, make_provider)
    store.close()
    (tmp_path / "config.json").unlink()
    store.close()
    assert not (tmp_path / "config.json").exists()


def test_persist_failure_is_reported(tmp_path, make_provider, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    store = SettingsStore(str(blocker / "config.json"), Configuration())
    assert store.persist() is False
    assert any("Error saving configuration" in r.getMessage() for r in caplog.records)
    # the final save on close must not raise either
    store.close()


def test_unreadable_file_is_fatal(write_config, make_provider, monkeypatch):
    import settings_manager

    path = write_config({"version": 1, "downloadDir": "/d", "simsDir": "/s"})

    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(settings_manager, "open", denied, raising=False)
    with pytest.raises(ConfigurationLoadError) as exc_info:
        load_configuration(path, make_provider("d", "/other"), make_provider("s", "/other"))
    assert "unreadable" in exc_info.value.reason
    assert isinstance(exc_info.value.__cause__, PermissionError)
