import json

from finz.adapters.storage_local import StorageLocal
from finz.viewmodels.settings_vm import SettingsVM


def test_user_settings_round_trip(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    payload = {
        "export_dir": "/data/exports",
        "currency_symbol": "€",
        "window_geometry": "1200x800+10+10",
        "statistics_months": 6,
        "debug_logging": True,
    }

    storage.save_user_settings(payload)
    loaded = storage.load_user_settings()

    assert loaded == payload


def test_user_settings_missing_file_and_save(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path / "nested"))
    settings_path = tmp_path / "nested" / "user_settings.json"

    assert storage.load_user_settings() is None
    assert not settings_path.exists()

    vm = SettingsVM()
    storage.save_user_settings(vm.to_dict())

    assert settings_path.exists()
    with settings_path.open("r", encoding="utf-8") as fh:
        persisted = json.load(fh)

    assert persisted == vm.to_dict()


def test_unreadable_settings_are_ignored(tmp_path):
    (tmp_path / "user_settings.json").write_text("{not json", encoding="utf-8")
    storage = StorageLocal(root_dir=str(tmp_path))

    assert storage.load_user_settings() is None


def test_non_object_settings_are_ignored(tmp_path):
    (tmp_path / "user_settings.json").write_text("[1, 2]", encoding="utf-8")
    storage = StorageLocal(root_dir=str(tmp_path))

    assert storage.load_user_settings() is None
