"""Catalog building and description matching."""

from __future__ import annotations

from skillscan.catalog import CatalogEntry, build_catalog, match_documents, tokenize
from skillscan.documents import load_corpus


def test_catalog_entries_from_fixture(plugins_dir):
    catalog = build_catalog(load_corpus(plugins_dir))

    assert [(entry.bundle, entry.kind, entry.name) for entry in catalog] == [
        ("cloud-infrastructure", "agent", "terraform-validator"),
        ("cloud-infrastructure", "skill", "aws-terraform-patterns"),
        ("dotnet-testing", "agent", "dotnet-test-runner"),
        ("dotnet-testing", "skill", "dotnet-test-projects"),
    ]
    validator = catalog[0]
    assert validator.tools == ["Read", "Grep", "Glob", "Bash"]
    assert validator.version is None
    assert catalog[1].version == "1.0.0"
    assert catalog[2].tools == ["Read", "Bash"]
    assert validator.to_dict()["path"] == "cloud-infrastructure/agents/terraform-validator.md"


def test_match_prefers_name_hits(plugins_dir):
    catalog = build_catalog(load_corpus(plugins_dir))

    matches = match_documents(catalog, "terraform aws")

    assert [match.entry.name for match in matches] == ["aws-terraform-patterns", "terraform-validator"]
    assert matches[0].score == 8  # both tokens in name and description
    assert matches[1].score == 5


def test_match_filters_kind_and_limit(plugins_dir):
    catalog = build_catalog(load_corpus(plugins_dir))

    assert [m.entry.name for m in match_documents(catalog, "dotnet test", kind="skill")] == [
        "dotnet-test-projects"
    ]
    assert len(match_documents(catalog, "test", limit=1)) == 1
    assert match_documents(catalog, "kubernetes") == []
    assert match_documents(catalog, "the and of") == []


def test_ties_break_by_name():
    catalog = [
        CatalogEntry(name="zeta", kind="skill", bundle="b", description="vpc", path="z"),
        CatalogEntry(name="alpha", kind="skill", bundle="b", description="vpc", path="a"),
    ]
    assert [m.entry.name for m in match_documents(catalog, "VPC")] == ["alpha", "zeta"]
    assert match_documents(catalog, "vpc")[0].to_dict()["score"] == 1


def test_tokenize_drops_stopwords_and_punctuation():
    assert tokenize("How to use the S3-bucket, for AWS!") == {"s3", "bucket", "aws"}
