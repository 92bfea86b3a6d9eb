"""
Config loading tests - verify .compose.yml parsing and validation
"""

import pytest

from repo_composer.manifest import Manifest, ManifestError, SyntaxConfig


def write_config(tmp_path, text):
    path = tmp_path / ".compose.yml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoad:
    """Well-formed configs"""

    def test_all_keys(self, tmp_path):
        path = write_config(
            tmp_path,
            "entries:\n"
            "  - task-a\n"
            "  - README.md\n"
            "no_copy:\n"
            "  - solution\n"
            "no_remove:\n"
            "  - .git\n"
            "workspace_tools:\n"
            "  - tools/check\n",
        )
        manifest = Manifest.load(path)

        assert manifest.entries == ["task-a", "README.md"]
        assert manifest.no_copy == ["solution"]
        assert manifest.no_remove == [".git"]
        assert manifest.workspace_tools == ["tools/check"]
        assert manifest.syntax == SyntaxConfig()

    def test_optional_keys_default_empty(self, tmp_path):
        manifest = Manifest.load(write_config(tmp_path, "entries: [a]\n"))
        assert manifest.no_copy == []
        assert manifest.no_remove == []
        assert manifest.workspace_tools == []

    def test_null_lists(self, tmp_path):
        manifest = Manifest.load(write_config(tmp_path, "entries: [a]\nno_copy:\n"))
        assert manifest.no_copy == []

    def test_paths_normalized(self, tmp_path):
        manifest = Manifest.load(write_config(tmp_path, "entries: [task/, ./b]\n"))
        assert manifest.entries == ["task", "b"]

    def test_spare_set(self):
        manifest = Manifest(entries=["a", "b"], no_remove=[".git"])
        assert manifest.spare_set(["extra/"]) == {"a", "b", ".git", "extra"}


class TestSyntax:
    """The optional syntax section"""

    def test_defaults(self):
        syntax = SyntaxConfig()
        assert syntax.suffixes == (".rs",)
        assert syntax.comment == "//"
        assert syntax.prefix == "compose::"
        assert syntax.hint == "// TODO: your code here."
        assert syntax.unimplemented == "unimplemented!()"
        assert syntax.package_descriptor == "Cargo.toml"

    def test_override(self, tmp_path):
        path = write_config(
            tmp_path,
            "entries: [a]\n"
            "syntax:\n"
            "  suffixes: [.py, .pyi]\n"
            "  comment: '#'\n"
            "  unimplemented: raise NotImplementedError\n"
            "  package_descriptor: pyproject.toml\n",
        )
        syntax = Manifest.load(path).syntax

        assert syntax.suffixes == (".py", ".pyi")
        assert syntax.comment == "#"
        assert syntax.hint == "# TODO: your code here."
        assert syntax.unimplemented == "raise NotImplementedError"
        assert syntax.package_descriptor == "pyproject.toml"

    def test_single_suffix_string(self, tmp_path):
        path = write_config(tmp_path, "entries: [a]\nsyntax:\n  suffixes: .go\n")
        assert Manifest.load(path).syntax.suffixes == (".go",)

    def test_is_source(self):
        syntax = SyntaxConfig(suffixes=(".rs", ".toml.in"))
        assert syntax.is_source("lib.rs")
        assert syntax.is_source("Cargo.toml.in")
        assert not syntax.is_source("lib.rs.bak")
        assert not syntax.is_source("README.md")


class TestErrors:
    """Malformed configs fail"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="config file not found"):
            Manifest.load(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ManifestError, match="failed to parse"):
            Manifest.load(write_config(tmp_path, "entries: [a\n"))

    def test_empty_file(self, tmp_path):
        with pytest.raises(ManifestError, match="missing 'entries'"):
            Manifest.load(write_config(tmp_path, ""))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ManifestError, match="mapping"):
            Manifest.load(write_config(tmp_path, "- a\n- b\n"))

    def test_unknown_key(self, tmp_path):
        with pytest.raises(ManifestError, match="unknown config keys: no_cpy"):
            Manifest.load(write_config(tmp_path, "entries: [a]\nno_cpy: [b]\n"))

    def test_list_of_strings(self, tmp_path):
        with pytest.raises(ManifestError, match="'no_copy' must be a list of strings"):
            Manifest.load(write_config(tmp_path, "entries: [a]\nno_copy: solution\n"))

    def test_absolute_entry(self, tmp_path):
        with pytest.raises(ManifestError, match="relative path"):
            Manifest.load(write_config(tmp_path, "entries: [/etc]\n"))

    def test_escaping_entry(self, tmp_path):
        with pytest.raises(ManifestError, match="relative path"):
            Manifest.load(write_config(tmp_path, "entries: [../other]\n"))

    def test_unknown_syntax_key(self, tmp_path):
        with pytest.raises(ManifestError, match="unknown syntax keys: marker"):
            Manifest.load(write_config(tmp_path, "entries: [a]\nsyntax:\n  marker: '#'\n"))

    def test_empty_syntax_value(self, tmp_path):
        with pytest.raises(ManifestError, match="non-empty string"):
            Manifest.load(write_config(tmp_path, "entries: [a]\nsyntax:\n  comment: ''\n"))
