"""Skill corpus: loading, validation and indexing of SKILL.md documents."""

from skillbook.corpus.body import CodeBlock, Section, find_unterminated_fence, parse_code_blocks, parse_sections
from skillbook.corpus.exceptions import CorpusError, FrontmatterError, SkillNotFoundError
from skillbook.corpus.frontmatter import parse_frontmatter, split_frontmatter
from skillbook.corpus.index import build_index, index_is_current, load_index, write_index
from skillbook.corpus.loader import CorpusLoader
from skillbook.corpus.models import SkillDocument, ValidationError
from skillbook.corpus.validator import SkillValidator, collect_skill_files

__all__ = [
    "CodeBlock",
    "CorpusError",
    "CorpusLoader",
    "FrontmatterError",
    "Section",
    "SkillDocument",
    "SkillNotFoundError",
    "SkillValidator",
    "ValidationError",
    "build_index",
    "collect_skill_files",
    "find_unterminated_fence",
    "index_is_current",
    "load_index",
    "parse_code_blocks",
    "parse_frontmatter",
    "parse_sections",
    "split_frontmatter",
    "write_index",
]
