"""PyYAML loading shared by SKILL.md front-matter and skillbook.yaml."""

from __future__ import annotations

from typing import Any

import yaml  # type: ignore[import-untyped]


class YAMLMappingError(ValueError):
    """YAML text that does not parse, or whose root is not a mapping.

    ``line`` and ``column`` are 1-based positions in the enclosing file when
    the parser reported one.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


def load_mapping(text: str, line_offset: int = 0) -> dict[str, Any]:
    """Parse ``text`` with ``yaml.safe_load``; blank or null documents give ``{}``.

    Args:
        text: YAML source.
        line_offset: Lines of the enclosing file that precede ``text``, added
            to reported error positions.

    Raises:
        YAMLMappingError: on a parse error or a non-mapping root.
    """
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        if mark is None:
            raise YAMLMappingError("Invalid YAML") from exc
        line = mark.line + 1 + line_offset
        column = mark.column + 1
        raise YAMLMappingError(f"Invalid YAML at line {line}:{column}", line=line, column=column) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise YAMLMappingError(f"YAML root must be a mapping, got {type(loaded).__name__}")
    return loaded
