"""Unit tests for CorpusLoader (skill directory discovery and parsing)."""

import logging

import pytest

from skillbook.corpus.exceptions import SkillNotFoundError
from skillbook.corpus.loader import CorpusLoader


def test_scan_discovers_skills_in_slug_order(skills_dir, write_skill):
    write_skill("zeta-tool")
    write_skill("alpha-tool")
    skills = CorpusLoader(skills_dir).scan()
    assert [s.slug for s in skills] == ["alpha-tool", "zeta-tool"]
    assert skills[0].description == "The alpha-tool skill."


def test_scan_reads_nested_metadata(skills_dir, write_skill):
    write_skill(
        "terraform-aws-vpc",
        "name: terraform-aws-vpc\n"
        "description: >-\n"
        "  Provision a VPC\n"
        "  with subnets.\n"
        "metadata:\n"
        "  author: infra\n"
        "  category: cloud\n"
        "  tags: [terraform, aws]\n",
    )
    skill = CorpusLoader(skills_dir).scan()[0]
    assert skill.description == "Provision a VPC with subnets."
    assert skill.category == "cloud"
    assert skill.tags == ["terraform", "aws"]
    assert skill.author == "infra"


def test_scan_folds_literal_block_description(skills_dir, write_skill):
    write_skill("lit", "name: lit\ndescription: |\n  line one\n  line two\n")
    assert CorpusLoader(skills_dir).scan()[0].description == "line one line two"


def test_scan_skips_directories_without_skill_file_and_plain_files(skills_dir, write_skill):
    write_skill("real-skill")
    (skills_dir / "empty-dir").mkdir()
    (skills_dir / "index.json").write_text("{}", encoding="utf-8")
    skills = CorpusLoader(skills_dir).scan()
    assert [s.name for s in skills] == ["real-skill"]


def test_scan_skips_invalid_frontmatter_and_missing_name(skills_dir, write_skill, caplog):
    write_skill("good")
    write_skill("broken-yaml", "name: broken-yaml\ntags: [a, b\n")
    write_skill("no-name", "description: nameless\n")
    (skills_dir / "no-frontmatter").mkdir()
    (skills_dir / "no-frontmatter" / "SKILL.md").write_text("# Just text\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="skillbook"):
        skills = CorpusLoader(skills_dir).scan()
    assert [s.name for s in skills] == ["good"]
    assert "invalid frontmatter" in caplog.text
    assert "missing name" in caplog.text


def test_scan_keeps_first_duplicate_name(skills_dir, write_skill, caplog):
    write_skill("a-dir", "name: shared\ndescription: first\n")
    write_skill("b-dir", "name: shared\ndescription: second\n")
    with caplog.at_level(logging.WARNING, logger="skillbook"):
        skills = CorpusLoader(skills_dir).scan()
    assert len(skills) == 1
    assert skills[0].description == "first"
    assert "Duplicate skill name 'shared'" in caplog.text


def test_scan_on_missing_dir_returns_empty(tmp_path):
    assert CorpusLoader(tmp_path / "nope").scan() == []


def test_loader_rejects_blank_path():
    with pytest.raises(ValueError, match="skills_dir must be a non-empty path"):
        CorpusLoader("   ")
    with pytest.raises(ValueError, match="skills_dir must be a non-empty path"):
        CorpusLoader(None)  # type: ignore[arg-type]


def test_custom_skill_filename(skills_dir):
    (skills_dir / "custom").mkdir()
    (skills_dir / "custom" / "skill.md").write_text("---\nname: custom\n---\n# Body\n", encoding="utf-8")
    assert [s.name for s in CorpusLoader(skills_dir, skill_filename="skill.md").scan()] == ["custom"]


def test_get_and_require_skill(skills_dir, write_skill):
    write_skill("wireguard-vpn")
    loader = CorpusLoader(skills_dir)
    loader.scan()
    assert loader.get_skill("  wireguard-vpn ") is not None
    assert loader.get_skill("") is None
    assert loader.get_skill(None) is None  # type: ignore[arg-type]
    assert loader.require_skill("wireguard-vpn").slug == "wireguard-vpn"
    with pytest.raises(SkillNotFoundError, match="missing"):
        loader.require_skill("missing")


def test_categories_and_filter(skills_dir, write_skill):
    write_skill("a", "name: a\ndescription: A\ncategory: Cloud\ntags: [AWS, terraform]\n")
    write_skill("b", "name: b\ndescription: B\ncategory: networking\ntags: [vpn]\n")
    write_skill("c", "name: c\ndescription: C\n")
    loader = CorpusLoader(skills_dir)
    loader.scan()
    assert loader.categories() == ["Cloud", "networking"]
    assert [s.name for s in loader.filter(category="cloud")] == ["a"]
    assert [s.name for s in loader.filter(tag="aws")] == ["a"]
    assert [s.name for s in loader.filter(category="networking", tag="aws")] == []
    assert len(loader.filter()) == 3


def test_clear_body_cache_counts_skills(skills_dir, write_skill):
    write_skill("a")
    write_skill("b")
    loader = CorpusLoader(skills_dir)
    loader.scan()
    assert loader.clear_body_cache() == 2
