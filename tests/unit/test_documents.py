"""Bundle discovery and document loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillscan.documents import load_corpus
from skillscan.evaluator import run_scan
from skillscan.errors import LoadError
from tests.helpers.bundle_helpers import write_agent, write_manifest, write_skill


def test_fixture_bundles_are_discovered(plugins_dir):
    corpus = load_corpus(plugins_dir)

    assert [bundle.name for bundle in corpus.bundles] == ["cloud-infrastructure", "dotnet-testing"]
    assert corpus.counts() == {"agent": 2, "skill": 2}
    names = [(doc.kind, doc.name) for doc in corpus.documents]
    assert ("agent", "terraform-validator") in names
    assert ("skill", "dotnet-test-projects") in names


def test_manifest_name_becomes_bundle_name(plugins_dir):
    corpus = load_corpus(plugins_dir)
    cloud = corpus.bundles[0]
    assert cloud.manifest == {
        "name": "cloud-infrastructure",
        "version": "1.2.0",
        "description": "Terraform guidance for AWS infrastructure",
    }
    assert all(doc.bundle == "cloud-infrastructure" for doc in cloud.documents)


def test_relative_paths_are_posix_from_root(plugins_dir):
    corpus = load_corpus(plugins_dir)
    paths = {doc.relative_path for doc in corpus.documents}
    assert "cloud-infrastructure/agents/terraform-validator.md" in paths
    assert "dotnet-testing/skills/dotnet-test-projects/SKILL.md" in paths


def test_root_directory_can_be_a_bundle(bundle_dir):
    write_agent(bundle_dir, "reviewer")
    write_skill(bundle_dir, "patterns")

    corpus = load_corpus(bundle_dir)

    assert len(corpus.bundles) == 1
    assert corpus.bundles[0].name == "bundle"
    assert [doc.kind for doc in corpus.documents] == ["agent", "skill"]


def test_flat_skill_files_are_loaded(bundle_dir):
    (bundle_dir / "skills" / "quick-ref.md").write_text(
        "---\nname: quick-ref\ndescription: Quick reference\n---\nbody\n", encoding="utf-8"
    )
    corpus = load_corpus(bundle_dir)
    assert [doc.name for doc in corpus.documents] == ["quick-ref"]
    assert corpus.documents[0].expected_name == "quick-ref"


def test_single_file_path_infers_kind(bundle_dir):
    agent = write_agent(bundle_dir, "reviewer")
    skill = write_skill(bundle_dir, "patterns")

    assert load_corpus(agent).documents[0].kind == "agent"
    skill_corpus = load_corpus(skill)
    assert skill_corpus.documents[0].kind == "skill"
    assert skill_corpus.documents[0].expected_name == "patterns"


def test_loose_skill_file_is_its_own_bundle(tmp_path):
    loose = tmp_path / "loose"
    loose.mkdir()
    skill = loose / "SKILL.md"
    skill.write_text("---\nname: loose\ndescription: Loose skill\n---\nbody\n", encoding="utf-8")

    corpus = load_corpus(skill)

    assert corpus.root == loose.resolve()
    assert corpus.bundles[0].name == "loose"
    assert corpus.documents[0].relative_path == "SKILL.md"
    assert corpus.documents[0].kind == "skill"


def test_front_matter_errors_are_recorded_not_raised(bundle_dir):
    write_agent(bundle_dir, "broken", raw="# no front matter\n")
    corpus = load_corpus(bundle_dir)
    document = corpus.documents[0]
    assert document.front_matter_error == "missing front-matter block"
    assert document.metadata == {}
    assert document.body == "# no front matter\n"
    assert document.name == "broken"


def test_non_utf8_document_is_recorded(bundle_dir):
    (bundle_dir / "agents" / "binary.md").write_bytes(b"---\nname: \xff\xfe\n---\n")
    document = load_corpus(bundle_dir).documents[0]
    assert document.front_matter_error.startswith("file is not valid UTF-8")


def test_unreadable_document_is_recorded(bundle_dir, monkeypatch):
    write_agent(bundle_dir, "reviewer")
    write_agent(bundle_dir, "locked")
    original = Path.read_text

    def read_text(self, *args, **kwargs):
        if self.name == "locked.md":
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", read_text)
    corpus = load_corpus(bundle_dir)

    locked = corpus.find("locked")[0]
    assert locked.front_matter_error == "file could not be read: Permission denied"
    assert locked.front_matter_error_line == 1
    payload = run_scan(corpus)
    assert [(issue["id"], issue["document"]) for issue in payload["issues"]] == [
        ("P-DOC-001", "agents/locked.md")
    ]


def test_invalid_manifest_is_recorded(bundle_dir):
    write_agent(bundle_dir, "reviewer")
    write_manifest(bundle_dir, "{not json")
    bundle = load_corpus(bundle_dir).bundles[0]
    assert bundle.manifest is None
    assert bundle.manifest_error.startswith("unreadable plugin manifest")


def test_hidden_and_dependency_directories_are_skipped(tmp_path):
    write_agent(tmp_path / ".cache" / "bundle", "hidden")
    write_agent(tmp_path / "node_modules" / "pkg", "vendored")
    write_agent(tmp_path / "real", "visible")

    corpus = load_corpus(tmp_path)

    assert [doc.name for doc in corpus.documents] == ["visible"]


def test_find_filters_by_kind(bundle_dir):
    write_agent(bundle_dir, "shared")
    write_skill(bundle_dir, "shared")
    corpus = load_corpus(bundle_dir)
    assert len(corpus.find("shared")) == 2
    assert [doc.kind for doc in corpus.find("shared", kind="skill")] == ["skill"]
    assert corpus.find("missing") == []


def test_line_of_locates_front_matter_keys(bundle_dir):
    write_agent(bundle_dir, "reviewer", metadata={"name": "reviewer", "description": "d", "tools": "Read"})
    document = load_corpus(bundle_dir).documents[0]
    assert document.line_of("name") == 2
    assert document.line_of("tools") == 4
    assert document.line_of("absent") == 1


def test_missing_path_raises(tmp_path):
    with pytest.raises(LoadError, match="Path not found"):
        load_corpus(tmp_path / "nope")


def test_directory_without_documents_raises(tmp_path):
    (tmp_path / "notes.md").write_text("# notes\n", encoding="utf-8")
    with pytest.raises(LoadError, match="No agent or skill documents"):
        load_corpus(tmp_path)
