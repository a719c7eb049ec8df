import json

import pytest

from report_viewer.core.errors import MalformedInputError, ReportFileNotFoundError, ResourceNotFoundError
from report_viewer.services.report_store import ReportStore


@pytest.fixture(params=["directory", "zip"])
def store(request, report_dir, report_zip):
    root = report_dir if request.param == "directory" else report_zip
    with ReportStore(root) as opened:
        yield opened


class TestLookups:
    def test_comparison_file_name_in_either_order(self, store):
        assert store.get_comparison_file_name("alice", "bob") == "alice-bob.json"
        assert store.get_comparison_file_name("bob", "alice") == "alice-bob.json"

    def test_unknown_pair_has_no_comparison(self, store):
        assert store.get_comparison_file_name("alice", "carol") is None

    def test_reads_comparison_json(self, store):
        data = store.read_json("alice-bob.json")

        assert data["id1"] == "alice"
        assert len(data["matches"]) == 3

    def test_missing_entry(self, store):
        with pytest.raises(ReportFileNotFoundError):
            store.read_text("nope.json")

    def test_submission_file_list_is_normalized(self, store):
        assert store.get_submission_file_list("alice") == ["alice/src/Main.java", "alice/src/Util.java"]

    def test_unknown_submission(self, store):
        with pytest.raises(ResourceNotFoundError):
            store.get_submission_file_list("carol")


class TestSubmissionFiles:
    def test_files_are_loaded_once(self, store):
        store.load_submission_files("alice")
        first = store.files_of_submission("alice")
        store.load_submission_files("alice")

        assert [f.file_name for f in first] == ["alice/src/Main.java", "alice/src/Util.java"]
        assert first[1].data == "class Util {}\n"
        assert all(f.submission_id == "alice" for f in first)
        assert store.files_of_submission("alice") == first

    def test_unloaded_submission_has_no_files(self, store):
        assert store.files_of_submission("bob") == []

    def test_unknown_submission_loads_nothing(self, store):
        store.load_submission_files("carol")

        assert store.files_of_submission("carol") == []


class TestDirectoryReport:
    def test_missing_root(self, tmp_path):
        with pytest.raises(ReportFileNotFoundError):
            ReportStore(tmp_path / "missing")

    def test_invalid_json(self, report_dir):
        (report_dir / "broken.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(MalformedInputError) as exc_info:
            ReportStore(report_dir).read_json("broken.json")

        assert exc_info.value.details["source"] == "broken.json"

    def test_overview_must_be_an_object(self, report_dir):
        (report_dir / "overview.json").write_text(json.dumps([1, 2]), encoding="utf-8")

        with pytest.raises(MalformedInputError):
            ReportStore(report_dir).get_comparison_file_name("alice", "bob")

    @pytest.mark.parametrize(
        "mapping",
        [
            {"alice": "alice-bob.json"},
            {"alice": ["bob", "alice-bob.json"]},
            {"bob": {}, "alice": None},
            ["alice", "bob"],
        ],
    )
    def test_malformed_comparison_file_names(self, report_dir, mapping):
        (report_dir / "overview.json").write_text(
            json.dumps({"submission_ids_to_comparison_file_name": mapping}), encoding="utf-8"
        )

        with pytest.raises(MalformedInputError) as exc_info:
            ReportStore(report_dir).get_comparison_file_name("alice", "bob")

        assert exc_info.value.details["source"] == "overview.json"
        assert exc_info.value.details["field"] == "submission_ids_to_comparison_file_name"

    def test_partially_missing_files_are_kept(self, report_dir):
        (report_dir / "files" / "alice" / "src" / "Util.java").unlink()
        store = ReportStore(report_dir)

        store.load_submission_files("alice")

        assert [f.file_name for f in store.files_of_submission("alice")] == ["alice/src/Main.java"]

    def test_non_utf8_content_is_decoded(self, report_dir):
        (report_dir / "files" / "bob" / "Main.java").write_bytes("// caf\xe9\n".encode("latin-1"))
        store = ReportStore(report_dir)

        store.load_submission_files("bob")

        assert store.files_of_submission("bob")[0].data == "// caf\xe9\n"


class TestZipReport:
    def test_is_archive(self, report_zip):
        with ReportStore(report_zip) as store:
            assert store.is_archive

    def test_missing_archive(self, tmp_path):
        with pytest.raises(ReportFileNotFoundError):
            ReportStore(tmp_path / "missing.zip")

    def test_corrupt_archive(self, tmp_path):
        archive = tmp_path / "corrupt.zip"
        archive.write_bytes(b"not a zip")

        with pytest.raises(MalformedInputError):
            ReportStore(archive)
