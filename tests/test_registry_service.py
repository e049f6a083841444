import json
import logging
from pathlib import Path

import pytest

from stellaris_mod_order.models.mod import ModSource, ModStatus
from stellaris_mod_order.services.registry_service import (
    RegistryError,
    RegistryFormatError,
    RegistryNotFoundError,
    RegistryReadError,
    RegistryService,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def service():
    return RegistryService()


@pytest.fixture
def install_dir(tmp_path):
    """Copy the sample registry into a fake install directory."""
    src = FIXTURES / "sample_mods_registry.json"
    (tmp_path / "mods_registry.json").write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
    return tmp_path


def _entry(mod_id="m1", **overrides):
    entry = {
        "steamId": "1",
        "displayName": "Mod",
        "timeUpdated": 1,
        "source": "steam",
        "dirPath": "/mods/m1",
        "status": "ready_to_play",
        "id": mod_id,
        "thumbnailPath": "",
    }
    entry.update(overrides)
    return entry


class TestLoad:
    def test_loads_all_mods(self, service, install_dir):
        mods = service.load(install_dir)
        assert sorted(mods) == ["1a2b3c4d-0001", "1a2b3c4d-0002", "1a2b3c4d-0003"]

    def test_parses_fields(self, service, install_dir):
        mods = service.load(install_dir)
        mod = mods["1a2b3c4d-0003"]
        assert mod.display_name == "#Tagged Local Patch"
        assert mod.source is ModSource.LOCAL
        assert mod.status is ModStatus.INVALID_MOD
        assert mod.tags == ["Fixes"]
        assert mod.required_version is None

    def test_accepts_str_path(self, service, install_dir):
        assert len(service.load(str(install_dir))) == 3

    def test_missing_file(self, service, tmp_path):
        with pytest.raises(RegistryNotFoundError) as excinfo:
            service.load(tmp_path)
        assert "mods_registry.json" in str(excinfo.value)
        assert str(excinfo.value).startswith("failed to read mod registry")

    def test_registry_is_a_directory(self, service, tmp_path):
        (tmp_path / "mods_registry.json").mkdir()
        with pytest.raises(RegistryReadError):
            service.load(tmp_path)

    def test_not_utf8(self, service, tmp_path):
        (tmp_path / "mods_registry.json").write_bytes(b'{"\xff": 1}')
        with pytest.raises(RegistryReadError):
            service.load(tmp_path)


class TestParse:
    def test_empty_registry(self, service):
        assert service.parse("{}") == {}

    def test_invalid_json(self, service):
        with pytest.raises(RegistryFormatError) as excinfo:
            service.parse("{not json")
        assert str(excinfo.value).startswith("failed to parse mod registry file")

    def test_top_level_must_be_object(self, service):
        with pytest.raises(RegistryFormatError):
            service.parse("[]")

    @pytest.mark.parametrize(
        "field",
        ["steamId", "displayName", "timeUpdated", "source", "dirPath", "status", "id", "thumbnailPath"],
    )
    def test_missing_required_field(self, service, field):
        entry = _entry()
        del entry[field]
        with pytest.raises(RegistryFormatError) as excinfo:
            service.parse(json.dumps({"m1": entry}))
        assert field in str(excinfo.value)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"displayName": 5},
            {"timeUpdated": "yesterday"},
            {"timeUpdated": True},
            {"tags": "Graphics"},
            {"tags": [1, 2]},
            {"thumbnailUrl": 3},
            {"timeUpdated": 1.0},
            {"timeUpdated": 2**70},
            {"timeUpdated": -(2**63) - 1},
        ],
    )
    def test_wrong_types(self, service, overrides):
        with pytest.raises(RegistryFormatError):
            service.parse(json.dumps({"m1": _entry(**overrides)}))

    @pytest.mark.parametrize("overrides", [{"source": "workshop"}, {"status": "disabled"}])
    def test_invalid_enum_tag(self, service, overrides):
        with pytest.raises(RegistryFormatError):
            service.parse(json.dumps({"m1": _entry(**overrides)}))

    def test_error_names_entry_path(self, service):
        with pytest.raises(RegistryFormatError) as excinfo:
            service.parse(json.dumps({"m1": _entry(source="workshop")}))
        assert "['m1', 'source']" in str(excinfo.value)

    def test_time_updated_i64_bounds(self, service):
        for value in (2**63 - 1, -(2**63)):
            mods = service.parse(json.dumps({"m1": _entry(timeUpdated=value)}))
            assert mods["m1"].time_updated == value
            assert type(mods["m1"].time_updated) is int

    @pytest.mark.parametrize("field", ["id", "displayName"])
    def test_lone_surrogate_rejected(self, service, field):
        text = json.dumps({"m1": _entry(**{field: "PLACEHOLDER"})})
        text = text.replace('"PLACEHOLDER"', '"\\ud800"')
        with pytest.raises(RegistryFormatError):
            service.parse(text)

    def test_null_optional_fields(self, service):
        entry = _entry(tags=None, thumbnailUrl=None, archivePath=None)
        mods = service.parse(json.dumps({"m1": entry}))
        assert mods["m1"].tags is None

    def test_unknown_keys_allowed(self, service):
        mods = service.parse(json.dumps({"m1": _entry(extra={"a": 1})}))
        assert mods["m1"].id == "m1"

    def test_all_errors_share_base(self, service):
        with pytest.raises(RegistryError):
            service.parse("nope")

    def test_key_id_mismatch_warns(self, service, caplog):
        with caplog.at_level(logging.WARNING):
            mods = service.parse(json.dumps({"key1": _entry(mod_id="inner")}))
        assert mods["key1"].id == "inner"
        assert "does not match" in caplog.text
