"""Unit tests for SkillValidator structural checks."""

from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from skillbook.corpus.loader import CorpusLoader
from skillbook.corpus.validator import SKILL_NAME_PATTERN, SkillValidator, collect_skill_files


def _messages(errors, severity=None):
    return [f"{e.field}: {e.message}" for e in errors if severity is None or e.severity == severity]


def test_valid_skill_has_no_issues(write_skill):
    path = write_skill("docker-compose-stack")
    assert SkillValidator().validate_skill_file(path) == []


def test_missing_frontmatter_is_error(skills_dir):
    path = skills_dir / "plain" / "SKILL.md"
    path.parent.mkdir()
    path.write_text("# Plain markdown\n", encoding="utf-8")
    errors = SkillValidator().validate_skill_file(path)
    assert len(errors) == 1
    assert errors[0].field == "frontmatter"
    assert errors[0].severity == "error"


def test_invalid_yaml_is_error(write_skill):
    path = write_skill("bad-yaml", "name: bad-yaml\ndescription: [unclosed\n")
    errors = SkillValidator().validate_skill_file(path)
    assert errors[0].field == "frontmatter"
    assert "Invalid YAML" in errors[0].message


def test_missing_required_fields(write_skill):
    path = write_skill("nameless", "category: tools\n")
    errors = _messages(SkillValidator().validate_skill_file(path), "error")
    assert "name: Missing required field: name" in errors
    assert "description: Missing required field: description" in errors


def test_custom_required_fields(write_skill):
    path = write_skill("needs-author")
    errors = _messages(SkillValidator(required_fields=["name", "author"]).validate_skill_file(path), "error")
    assert errors == ["author: Missing required field: author"]


def test_name_must_be_kebab_case(write_skill):
    path = write_skill("bad-name", "name: Bad_Name\ndescription: d\ncategory: tools\n")
    errors = _messages(SkillValidator().validate_skill_file(path), "error")
    assert any("kebab-case" in e for e in errors)


def test_name_mismatching_directory_is_warning(write_skill):
    path = write_skill("some-dir", "name: other-name\ndescription: d\ncategory: tools\n")
    errors = SkillValidator().validate_skill_file(path)
    assert [(e.field, e.severity) for e in errors] == [("name", "warning")]


def test_blank_description_is_error(write_skill):
    path = write_skill("blank", "name: blank\ndescription: '   '\ncategory: tools\n")
    assert "description: Description must be a non-empty string" in _messages(
        SkillValidator().validate_skill_file(path), "error"
    )


def test_metadata_types(write_skill):
    path = write_skill(
        "typed",
        "name: typed\n"
        "description: d\n"
        "metadata: [not, a, mapping]\n"
        "category: tools\n"
        "author: [someone]\n"
        "version: 1.0\n"
        "compatibility: {os: linux}\n"
        "tags: [a, a, b]\n",
    )
    errors = SkillValidator().validate_skill_file(path)
    by_field = {(e.field, e.severity) for e in errors}
    assert ("metadata", "error") in by_field
    assert ("author", "error") in by_field
    assert ("compatibility", "error") in by_field
    assert ("version", "warning") in by_field
    assert ("tags", "warning") in by_field


def test_nested_metadata_fields_are_checked(write_skill):
    path = write_skill("nested", "name: nested\ndescription: d\nmetadata:\n  category: 7\n  tags: docker\n")
    fields = {e.field for e in SkillValidator().validate_skill_file(path) if e.severity == "error"}
    assert fields == {"metadata.category", "metadata.tags"}


@pytest.mark.parametrize("category", ["''", "'   '", "~"])
def test_blank_category_is_missing_category_warning(write_skill, category):
    path = write_skill("blank-category", f"name: blank-category\ndescription: d\ncategory: {category}\n")
    errors = SkillValidator().validate_skill_file(path)
    assert [(e.field, e.message, e.severity) for e in errors] == [("category", "Missing category", "warning")]


@pytest.mark.parametrize("field", ["name", "description"])
def test_identity_field_under_metadata_is_missing(write_skill, field):
    other = "description: d" if field == "name" else "name: nested-identity"
    path = write_skill("nested-identity", f"{other}\ncategory: tools\nmetadata:\n  {field}: nested-identity\n")
    errors = _messages(SkillValidator().validate_skill_file(path), "error")
    assert errors == [f"{field}: Missing required field: {field}"]


@pytest.mark.parametrize(
    "frontmatter",
    [
        "description: d\nmetadata:\n  name: Not_Kebab\n  category: tools\n",
        "name: nested-desc\ncategory: tools\nmetadata:\n  description: hidden\n",
        "name: '  '\ndescription: d\ncategory: tools\n",
        "name: agreed\ndescription: d\nmetadata:\n  category: tools\n",
    ],
)
def test_error_free_files_are_loaded_with_name_and_description(skills_dir, write_skill, frontmatter):
    path = write_skill("agreed", frontmatter)
    errors = [e for e in SkillValidator().validate_skill_file(path) if e.severity == "error"]
    loaded = CorpusLoader(skills_dir).scan()
    assert (not errors) == any(s.name and s.description for s in loaded)
    if not errors:
        assert [(s.name, s.description) for s in loaded] == [("agreed", "d")]


def test_tag_items_must_be_strings(write_skill):
    path = write_skill("tags", "name: tags\ndescription: d\ncategory: tools\ntags: [ok, {nested: 1}]\n")
    assert "tags: Tag items must be non-empty strings" in _messages(
        SkillValidator().validate_skill_file(path), "error"
    )


def test_missing_category_is_warning(write_skill):
    path = write_skill("uncategorised", "name: uncategorised\ndescription: d\n")
    errors = SkillValidator().validate_skill_file(path)
    assert [(e.field, e.severity) for e in errors] == [("category", "warning")]


def test_empty_body_is_error(write_skill):
    path = write_skill("empty-body", body="\n\n")
    errors = SkillValidator().validate_skill_file(path)
    assert [(e.field, e.message, e.severity) for e in errors] == [("body", "Body is empty", "error")]


def test_body_without_headings_is_warning(write_skill):
    path = write_skill("no-headings", body="Just a paragraph.\n")
    errors = SkillValidator().validate_skill_file(path)
    assert [(e.field, e.severity) for e in errors] == [("body", "warning")]


def test_missing_recommended_sections(write_skill):
    path = write_skill("partial", body="# Partial\n\n## Overview\n\n## Usage examples\n")
    warnings = _messages(SkillValidator().validate_skill_file(path), "warning")
    assert "body.sections: Missing recommended section: Instructions" in warnings
    assert "body.sections: Missing recommended section: Guidelines" in warnings
    assert not any("Overview" in w for w in warnings)


def test_recommended_sections_match_case_insensitive_prefix(write_skill):
    path = write_skill("prefix", body="## overview of the tool\n")
    validator = SkillValidator(recommended_sections=["Overview"])
    assert validator.validate_skill_file(path) == []


def test_unterminated_fence_is_error(write_skill):
    path = write_skill("fence", body="# Overview\n\n```bash\necho hi\n")
    errors = _messages(SkillValidator(recommended_sections=[]).validate_skill_file(path), "error")
    assert errors == ["body: Unterminated code fence opened at body line 3"]


def test_validate_corpus_flags_duplicate_names(write_skill):
    first = write_skill("first", "name: shared\ndescription: d\ncategory: tools\n")
    second = write_skill("second", "name: shared\ndescription: d\ncategory: tools\n")
    third = write_skill("third")
    results = SkillValidator().validate_corpus([first, second, third])
    for path in (first, second):
        assert any(e.field == "name" and e.severity == "error" and "Duplicate" in e.message for e in results[path])
    assert results[third] == []


def test_report_lists_issues_per_file(write_skill):
    path = write_skill("uncategorised", "name: uncategorised\ndescription: d\n")
    clean = write_skill("clean")
    validator = SkillValidator()
    report = validator.report(validator.validate_corpus([path, clean]))
    assert report.startswith("Validation report:")
    assert "[warning] category: Missing category" in report
    assert str(clean) not in report
    assert validator.report({clean: []}) == ""


def test_collect_skill_files_deduplicates(skills_dir, write_skill):
    a = write_skill("a")
    write_skill("b")
    (skills_dir / "README.md").write_text("# readme\n", encoding="utf-8")
    files = collect_skill_files([skills_dir, a, skills_dir / "missing"])
    assert [f.parent.name for f in files] == ["a", "b"]


def test_collect_skill_files_ignores_other_files(tmp_path: Path):
    other = tmp_path / "notes.md"
    other.write_text("x", encoding="utf-8")
    assert collect_skill_files([other]) == []


@given(st.from_regex(r"[a-z0-9]+(-[a-z0-9]+)*", fullmatch=True))
def test_kebab_case_names_are_accepted(name):
    assert SKILL_NAME_PATTERN.match(name)


@given(
    prefix=st.from_regex(r"[a-z0-9]*", fullmatch=True),
    bad=st.sampled_from(["A", "Z", " ", "_", ".", "/"]),
    suffix=st.from_regex(r"[a-z0-9]*", fullmatch=True),
)
def test_names_with_upper_case_space_underscore_or_dot_are_rejected(prefix, bad, suffix):
    assert not SKILL_NAME_PATTERN.match(f"{prefix}{bad}{suffix}")
