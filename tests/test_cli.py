"""Tests for the command-line interface."""

import tarfile

import pytest
from click.testing import CliRunner

from gql_querygen.cli import main

SDL = """
type User {
    id: ID!
    name: String
    oldName: String @deprecated
}

type Query {
    me: User
    _service: String
}
"""


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(SDL)
    return path


@pytest.fixture
def runner():
    return CliRunner()


class TestGenerateCommand:
    """Tests for `gql-querygen generate`."""

    def test_generates_documents(self, runner, schema_file, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Generated 2 documents" in result.output
        assert (out / "queries" / "me.gql").is_file()
        assert (out / "__init__.py").is_file()

    def test_options_are_applied(self, runner, schema_file, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(main, [
            "generate", "-s", str(schema_file), "-o", str(out),
            "--ext", "graphql", "-C", "--header", "# Generated",
            "--exclude-prefix", "_",
        ])
        assert result.exit_code == 0, result.output
        content = (out / "queries" / "me.graphql").read_text()
        assert content.startswith("# Generated\nquery me{")
        assert "oldName" in content
        assert not (out / "queries" / "_service.graphql").exists()

    def test_depth_limit_must_be_positive(self, runner, schema_file, tmp_path):
        result = runner.invoke(main, [
            "generate", "-s", str(schema_file), "-o", str(tmp_path / "out"), "--depth-limit", "0",
        ])
        assert result.exit_code == 2

    def test_invalid_schema(self, runner, tmp_path):
        path = tmp_path / "bad.graphql"
        path.write_text("type Query {")
        result = runner.invoke(main, ["generate", "-s", str(path), "-o", str(tmp_path / "out")])
        assert result.exit_code == 1
        assert "Invalid schema" in result.output

    def test_archive_input(self, runner, schema_file, tmp_path):
        archive = tmp_path / "schema.tgz"
        with tarfile.open(archive, "w:gz") as tar:
            tar.add(schema_file, arcname="schema.graphql")
        out = tmp_path / "out"
        result = runner.invoke(main, ["generate", "-s", str(archive), "-o", str(out), "-v"])
        assert result.exit_code == 0, result.output
        assert "Extracting archive" in result.output
        assert (out / "queries" / "me.gql").is_file()

    def test_refuses_to_clean_working_directory(self, runner, schema_file, tmp_path, monkeypatch):
        (tmp_path / "important.txt").write_text("keep")
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(main, ["generate", "-s", "schema.graphql", "-o", "."])
        assert result.exit_code == 2
        assert "Refusing to remove" in result.output
        assert (tmp_path / "important.txt").exists()
        assert schema_file.exists()

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
