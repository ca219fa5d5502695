"""
Loader and config tests: verify machine types are read from each fixture shape.
"""
import json
import os

import pytest

from gcemodel.errors import InvalidFieldError, MalformedUrlError
from gcemodel.models.deprecation import Status

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


# --------------------------------------------------------- Shape detection
class TestDetectShape:
    def setup_method(self):
        from gcemodel import loader
        self.loader = loader

    def test_list_response(self):
        assert self.loader.detect_shape({"kind": "compute#machineTypeList", "items": []}) == "list"

    def test_aggregated_response(self):
        assert self.loader.detect_shape({"items": {"zones/a": {}}}) == "aggregatedList"

    def test_single_resource(self):
        assert self.loader.detect_shape({"selfLink": "x"}) == "machineType"

    def test_array(self):
        assert self.loader.detect_shape([]) == "array"

    def test_unknown(self):
        assert self.loader.detect_shape({"apiVersion": "v1", "kind": "ConfigMap"}) == "unknown"
        assert self.loader.detect_shape("text") == "unknown"


# --------------------------------------------------------- Loader
class TestLoader:
    def setup_method(self):
        from gcemodel import loader
        self.loader = loader

    def test_list_fixture(self):
        machine_types = self.loader.parse_file(os.path.join(FIXTURES, "machine_types_list.json"))
        assert [mt.name for mt in machine_types] == ["n1-standard-1", "f1-micro", "n1-standard-1-d"]

    def test_list_fixture_fields(self):
        machine_types = self.loader.parse_file(os.path.join(FIXTURES, "machine_types_list.json"))
        standard = machine_types[0]
        assert standard.id == "3001"
        assert standard.cpus == 1
        assert standard.memory_mb == 3840
        assert standard.maximum_persistent_disks_size_gb == 65536
        assert standard.machine_type_id.project == "p1"
        assert standard.machine_type_id.zone == "us-central1-a"

    def test_list_fixture_deprecation(self):
        machine_types = self.loader.parse_file(os.path.join(FIXTURES, "machine_types_list.json"))
        legacy = machine_types[2]
        assert legacy.scratch_disks_size_gb == (420,)
        assert legacy.deprecation_status.status == Status.OBSOLETE
        assert legacy.deprecation_status.replacement.machine_type == "n1-standard-1"
        assert not legacy.is_usable

    def test_aggregated_yaml_fixture(self):
        machine_types = self.loader.parse_file(os.path.join(FIXTURES, "aggregated.yaml"))
        assert {mt.name for mt in machine_types} == {"n1-highmem-2", "n1-highcpu-4"}
        highcpu = next(mt for mt in machine_types if mt.name == "n1-highcpu-4")
        assert highcpu.deprecation_status.status == Status.DEPRECATED
        assert highcpu.deprecation_status.deprecated == 1456790400000

    def test_array_document(self):
        docs = [[{"selfLink": "projects/p/zones/z/machineTypes/m1"}, "ignored"]]
        machine_types = self.loader.load_documents(docs)
        assert [mt.name for mt in machine_types] == ["m1"]

    def test_list_items_that_are_not_objects_are_skipped(self):
        docs = [{"items": ["oops", 3, {"selfLink": "projects/p/zones/z/machineTypes/m1"}]}]
        machine_types = self.loader.load_documents(docs, skip_invalid=True)
        assert [mt.name for mt in machine_types] == ["m1"]

    def test_aggregated_scope_that_is_not_an_object_is_skipped(self):
        docs = [{"items": {
            "zones/a": "oops",
            "zones/z": {"machineTypes": ["bad", {"selfLink": "projects/p/zones/z/machineTypes/m2"}]},
        }}]
        assert [mt.name for mt in self.loader.load_documents(docs)] == ["m2"]

    def test_wrong_shaped_machine_type_skipped(self):
        docs = [{"items": [
            {"selfLink": "projects/p/zones/z/machineTypes/m1", "scratchDisks": [10]},
            {"selfLink": "projects/p/zones/z/machineTypes/m2", "deprecated": "OBSOLETE"},
            {"selfLink": "projects/p/zones/z/machineTypes/m3"},
        ]}]
        machine_types = self.loader.load_documents(docs, skip_invalid=True)
        assert [mt.name for mt in machine_types] == ["m3"]

    def test_wrong_shaped_machine_type_raises(self):
        docs = [{"items": [{"selfLink": "projects/p/zones/z/machineTypes/m1", "scratchDisks": [10]}]}]
        with pytest.raises(InvalidFieldError):
            self.loader.load_documents(docs)

    def test_unrecognised_document_skipped(self):
        assert self.loader.parse_file(os.path.join(FIXTURES, "not_compute.yaml")) == []

    def test_invalid_machine_type_raises(self):
        with pytest.raises(MalformedUrlError):
            self.loader.parse_file(os.path.join(FIXTURES, "broken.json"))

    def test_invalid_machine_type_skipped(self):
        machine_types = self.loader.parse_file(os.path.join(FIXTURES, "broken.json"), skip_invalid=True)
        assert [mt.name for mt in machine_types] == ["n1-standard-4"]

    def test_unreadable_file_skipped(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{ this is not json")
        assert self.loader.parse_file(str(bad)) == []

    def test_parse_directory(self, tmp_path):
        import shutil
        shutil.copy(os.path.join(FIXTURES, "machine_types_list.json"), tmp_path / "a.json")
        shutil.copy(os.path.join(FIXTURES, "aggregated.yaml"), tmp_path / "b.yaml")
        (tmp_path / "notes.txt").write_text("not wire form")
        machine_types = self.loader.parse_directory(str(tmp_path))
        assert len(machine_types) == 5

    def test_parse_fixture_directory_skipping_invalid(self):
        machine_types = self.loader.parse_directory(FIXTURES, skip_invalid=True)
        assert len(machine_types) == 6

    def test_round_trip_through_file(self, tmp_path):
        machine_types = self.loader.parse_file(os.path.join(FIXTURES, "machine_types_list.json"))
        out = tmp_path / "out.json"
        out.write_text(json.dumps({"items": [mt.to_wire() for mt in machine_types]}))
        assert self.loader.parse_file(str(out)) == machine_types


# --------------------------------------------------------- Config
class TestSettings:
    def setup_method(self):
        from gcemodel import config
        self.config = config

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = self.config.load_settings()
        assert settings.project is None
        assert settings.format == "table"
        assert settings.zone is None

    def test_reads_default_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "gcemodel.yaml").write_text("project: p1\nformat: JSON\nzone: us-central1-a\nextra: 1\n")
        settings = self.config.load_settings()
        assert settings.project == "p1"
        assert settings.format == "json"
        assert settings.zone == "us-central1-a"

    def test_explicit_path(self, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("project: other\n")
        assert self.config.load_settings(str(cfg)).project == "other"

    def test_missing_explicit_path_uses_defaults(self, tmp_path):
        assert self.config.load_settings(str(tmp_path / "nope.yaml")).project is None

    def test_unknown_format_falls_back(self, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("format: pdf\n")
        assert self.config.load_settings(str(cfg)).format == "table"

    def test_invalid_yaml_falls_back(self, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("project: [unclosed\n")
        assert self.config.load_settings(str(cfg)).project is None

    def test_non_mapping_falls_back(self, tmp_path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("- just\n- a list\n")
        assert self.config.load_settings(str(cfg)).format == "table"
