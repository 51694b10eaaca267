"""Tests for atomize/infrastructure/storage/"""

import json

from atomize.config import UserSettings
from atomize.domain.project import ProjectStore
from atomize.domain.shared import Err, Ok
from atomize.domain.task import IntelState
from atomize.infrastructure.storage import JsonStorage, SettingsRepository, StoreRepository
from tests.conftest import make_project, make_task


class TestJsonStorage:
    """Tests for low-level JSON file I/O."""

    def test_round_trip(self, tmp_path):
        storage = JsonStorage()
        path = tmp_path / "nested" / "data.json"

        assert storage.save_json(path, {"a": 1}) == Ok(None)
        assert storage.load_json(path) == Ok({"a": 1})

    def test_missing_file(self, tmp_path):
        result = JsonStorage().load_json(tmp_path / "missing.json")
        assert isinstance(result, Err)
        assert "not found" in result.error

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")

        result = JsonStorage().load_json(path)
        assert isinstance(result, Err)
        assert "Invalid JSON" in result.error

    def test_non_object_rejected(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert isinstance(JsonStorage().load_json(path), Err)

    def test_unserializable_data(self, tmp_path):
        result = JsonStorage().save_json(tmp_path / "x.json", {"bad": object()})
        assert isinstance(result, Err)
        assert not (tmp_path / "x.json").exists()

    def test_keeps_emoji_readable(self, tmp_path):
        path = tmp_path / "emoji.json"
        JsonStorage().save_json(path, {"icon": "🚀"})
        assert "🚀" in path.read_text(encoding="utf-8")


class TestStoreRepository:
    """Tests for project store persistence."""

    def test_missing_file_is_empty_store(self, temp_data_dir):
        result = StoreRepository(temp_data_dir).load()
        assert result == Ok(ProjectStore())

    def test_save_and_load(self, temp_data_dir):
        repo = StoreRepository(temp_data_dir)
        store = ProjectStore().add(make_project("p1", tasks=[make_task(1, 3, done=True)]))

        assert repo.save(store) == Ok(None)
        assert repo.exists()

        loaded = repo.load()
        assert isinstance(loaded, Ok)
        assert loaded.value.find_by_id("p1").earned_points == 300

    def test_file_name(self, temp_data_dir):
        StoreRepository(temp_data_dir).save(ProjectStore())
        assert (temp_data_dir / "roadmaps.json").exists()

    def test_corrupt_file_is_err(self, temp_data_dir):
        (temp_data_dir / "roadmaps.json").write_text("garbage", encoding="utf-8")
        assert isinstance(StoreRepository(temp_data_dir).load(), Err)

    def test_invalid_shape_is_err(self, temp_data_dir):
        payload = {"projects": [{"id": "p1", "title": ""}]}
        (temp_data_dir / "roadmaps.json").write_text(json.dumps(payload), encoding="utf-8")

        result = StoreRepository(temp_data_dir).load()
        assert isinstance(result, Err)
        assert "Invalid project data" in result.error

    def test_pending_tip_reloads_as_unfetched(self, temp_data_dir):
        repo = StoreRepository(temp_data_dir)
        pending = make_task(1).model_copy(update={"intel_state": IntelState.PENDING})
        repo.save(ProjectStore().add(make_project("p1", tasks=[pending])))

        task = repo.load().value.find_by_id("p1").get_task(1)
        assert task.intel_state == IntelState.UNFETCHED

    def test_uses_atomize_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ATOMIZE_HOME", str(tmp_path / "home"))
        repo = StoreRepository()
        assert repo.path == tmp_path / "home" / "roadmaps.json"


class TestSettingsRepository:
    """Tests for user settings persistence."""

    def test_defaults_when_missing(self, temp_data_dir):
        assert SettingsRepository(temp_data_dir).load() == Ok(UserSettings())

    def test_save_and_load(self, temp_data_dir):
        repo = SettingsRepository(temp_data_dir)
        settings = UserSettings(name="Ada", sound_enabled=False, zen_mode=True)

        repo.save(settings)
        assert repo.load() == Ok(settings)

    def test_corrupt_is_err(self, temp_data_dir):
        (temp_data_dir / "settings.json").write_text("[]", encoding="utf-8")
        assert isinstance(SettingsRepository(temp_data_dir).load(), Err)
