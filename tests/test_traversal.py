"""Tests for SBOM file discovery."""

import logging
from pathlib import Path

import pytest

from sbomdash.traversal import (
    DEFAULT_IGNORE_DIRS,
    discover_sbom_files,
    is_supported_file,
    should_ignore_path,
    split_patterns,
)


class TestPatternsAndFileTypes:
    """Test pattern splitting and extension checks."""

    def test_split_patterns_trims_and_drops_empty(self):
        """split_patterns() splits on commas and removes blanks."""
        assert split_patterns("**/*.json, sboms/*.yml ,, ") == ["**/*.json", "sboms/*.yml"]

    def test_split_patterns_accepts_list(self):
        assert split_patterns(["a/*.json", " ", "b/*.xml "]) == ["a/*.json", "b/*.xml"]

    def test_is_supported_file(self):
        """is_supported_file() accepts JSON, YAML and XML regardless of case."""
        assert is_supported_file(Path("bom.json"))
        assert is_supported_file(Path("bom.YAML"))
        assert is_supported_file(Path("bom.yml"))
        assert is_supported_file(Path("spdx.xml"))
        assert not is_supported_file(Path("bom.txt"))
        assert not is_supported_file(Path("bom.spdx"))

    def test_should_ignore_path_checks_directories_only(self, tmp_path):
        assert should_ignore_path(tmp_path / "node_modules" / "x" / "bom.json", tmp_path, {"node_modules"})
        assert not should_ignore_path(tmp_path / "sboms" / "build", tmp_path, {"build"})

    def test_default_ignore_dirs_includes_common_patterns(self):
        assert "node_modules" in DEFAULT_IGNORE_DIRS
        assert ".git" in DEFAULT_IGNORE_DIRS
        assert "dist" in DEFAULT_IGNORE_DIRS
        assert "coverage" in DEFAULT_IGNORE_DIRS


class TestDiscovery:
    """Test discover_sbom_files()."""

    @pytest.fixture
    def repo(self, tmp_path):
        """Create a repository with SBOMs in several places."""
        # tmp_path/
        #   sbom.json
        #   reports/sbom-backend.cyclonedx.json
        #   reports/frontend.yaml
        #   reports/notes.txt            (unsupported extension)
        #   spdx/app.xml
        #   node_modules/pkg/bom.json    (ignored directory)
        #   dist/bom.json                (ignored directory)
        #   sbom-ui/parse-sboms.json     (output directory)
        (tmp_path / "reports").mkdir()
        (tmp_path / "spdx").mkdir()
        (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
        (tmp_path / "dist").mkdir()
        (tmp_path / "sbom-ui").mkdir()

        (tmp_path / "sbom.json").write_text("{}")
        (tmp_path / "reports" / "sbom-backend.cyclonedx.json").write_text("{}")
        (tmp_path / "reports" / "frontend.yaml").write_text("bomFormat: CycloneDX\n")
        (tmp_path / "reports" / "notes.txt").write_text("not an sbom")
        (tmp_path / "spdx" / "app.xml").write_text("<SpdxDocument/>")
        (tmp_path / "node_modules" / "pkg" / "bom.json").write_text("{}")
        (tmp_path / "dist" / "bom.json").write_text("{}")
        (tmp_path / "sbom-ui" / "parse-sboms.json").write_text("{}")
        return tmp_path

    def test_default_pattern_finds_json_outside_ignored_dirs(self, repo):
        files = discover_sbom_files("**/*.json", root=repo, exclude_dir=repo / "sbom-ui")
        rel = [f.relative_to(repo.resolve()).as_posix() for f in files]
        assert rel == ["reports/sbom-backend.cyclonedx.json", "sbom.json"]

    def test_multiple_patterns_are_merged_and_deduplicated(self, repo):
        files = discover_sbom_files("**/*.json, reports/*, **/*.xml, sbom.json", root=repo, exclude_dir=repo / "sbom-ui")
        names = [f.name for f in files]
        assert names.count("sbom.json") == 1
        assert "frontend.yaml" in names
        assert "app.xml" in names
        assert "notes.txt" not in names

    def test_results_are_sorted_and_absolute(self, repo):
        files = discover_sbom_files("**/*", root=repo, exclude_dir=repo / "sbom-ui")
        assert files == sorted(files)
        assert all(f.is_absolute() for f in files)

    def test_output_dir_is_excluded(self, repo):
        files = discover_sbom_files("**/*.json", root=repo, exclude_dir=repo / "sbom-ui")
        assert "parse-sboms.json" not in {f.name for f in files}

    def test_custom_ignore_dirs(self, repo):
        files = discover_sbom_files("**/*.json", root=repo, ignore_dirs=set())
        rel = {f.relative_to(repo.resolve()).as_posix() for f in files}
        assert "node_modules/pkg/bom.json" in rel
        assert "dist/bom.json" in rel

    def test_no_matches(self, repo):
        assert discover_sbom_files("**/*.spdx.json", root=repo) == []

    def test_directories_are_not_returned(self, tmp_path):
        (tmp_path / "weird.json").mkdir()
        assert discover_sbom_files("*.json", root=tmp_path) == []

    def test_absolute_pattern(self, repo):
        pattern = str(repo.resolve() / "reports" / "*.yaml")
        files = discover_sbom_files(pattern, root=Path("/"))
        assert [f.name for f in files] == ["frontend.yaml"]

    def test_logs_progress(self, repo, caplog):
        with caplog.at_level(logging.INFO):
            discover_sbom_files("**/*.json", root=repo)
        assert "Searching for SBOM files" in caplog.text
        assert "supported SBOM file(s)" in caplog.text
