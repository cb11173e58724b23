"""End-to-end matrix generation from a realistic artifacts layout."""

import json

from testmatrix.assembler import generate_matrix
from testmatrix.outputs import write_matrix


class TestGenerateMatrix:
    """Tests for generate_matrix over files on disk."""

    def test_empty_directory_gives_empty_matrix(self, descriptors_dir, tmp_path):
        """Verify no descriptors still produces a valid matrix document."""
        result = generate_matrix(descriptors_dir)
        out = tmp_path / "matrix.json"

        write_matrix(result, out)

        assert json.loads(out.read_text(encoding="utf-8")) == {"include": []}

    def test_mixed_projects(
        self, descriptors_dir, helix_dir, write_descriptor, split_project,
    ):
        """Verify regular, split and ineligible projects together."""
        write_descriptor("Aspire.Redis.Tests", "Redis")
        write_descriptor("Aspire.Windows.Tests", "Windows", supportedOSes=["windows"])
        write_descriptor("Aspire.Off.Tests", "Off", runOnGithubActions="false")
        split_project(
            "Aspire.Hosting.Tests",
            "Hosting",
            ["collection:Slow", "uncollected:*"],
            uncollectedTestsSessionTimeout="30m",
        )

        matrix = generate_matrix(
            descriptors_dir, helix_dir, requested_os="linux",
        ).to_matrix()

        shortnames = [entry["shortname"] for entry in matrix["include"]]
        assert shortnames == ["Redis", "Hosting_Slow", "Hosting_Uncollected"]
        uncollected = matrix["include"][-1]
        assert uncollected["name"] == "UncollectedTests"
        assert uncollected["collection"] == "*"
        assert uncollected["testSessionTimeout"] == "30m"
        assert uncollected["testHangTimeout"] == "10m"

    def test_helix_dir_defaults_to_descriptor_dir(self, tmp_path):
        """Verify split files are looked up next to the descriptors by default."""
        root = tmp_path / "artifacts"
        root.mkdir()
        (root / "P.testenumeration.json").write_text(
            json.dumps(
                {
                    "project": "P",
                    "shortName": "P",
                    "runOnGithubActions": "true",
                    "splitTests": "true",
                    "supportedOSes": "linux;windows",
                },
            ),
            encoding="utf-8",
        )
        (root / "P.tests.list").write_text("collection:A\n", encoding="utf-8")

        result = generate_matrix(root)

        assert [e.shortname for e in result.entries] == ["P_A"]
        assert result.entries[0].supported_oses == ["linux", "windows"]

    def test_output_is_byte_identical_across_runs(
        self, descriptors_dir, helix_dir, tmp_path, write_descriptor, split_project,
    ):
        """Verify repeated runs over the same inputs write the same bytes."""
        write_descriptor("B.Tests", "B")
        write_descriptor("A.Tests", "A", supportedOSes="linux")
        split_project("C.Tests", "C", ["collection:Z", "collection:Y", "uncollected:*"])
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"

        write_matrix(generate_matrix(descriptors_dir, helix_dir), first)
        write_matrix(generate_matrix(descriptors_dir, helix_dir), second)

        assert first.read_bytes() == second.read_bytes()
        assert first.read_text(encoding="utf-8").endswith("}\n")

    def test_legacy_short_names_appended_after_descriptors(
        self, descriptors_dir, helix_dir, write_descriptor,
    ):
        """Verify legacy names add regular entries after descriptor-backed ones."""
        write_descriptor("Aspire.Redis.Tests", "Redis")

        result = generate_matrix(
            descriptors_dir,
            helix_dir,
            legacy_short_names=["Kafka"],
        )

        assert result.regular_short_names() == ["Redis", "Kafka"]
        assert result.entries[-1].project_name == "Aspire.Kafka.Tests"
