"""Markdown body structure: headings and fenced code blocks."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
_FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


@dataclass(frozen=True)
class Section:
    """A markdown ATX heading."""

    level: int
    title: str
    line: int


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block; language is the first word of the info string."""

    language: str
    content: str
    line: int


@dataclass
class _Fence:
    marker: str
    info: str
    line: int
    lines: list[str]


def _closes(fence: _Fence, line: str) -> bool:
    stripped = line.strip()
    if not stripped or stripped[0] != fence.marker[0]:
        return False
    if len(line) - len(line.lstrip(" ")) > 3:
        return False
    return set(stripped) == {fence.marker[0]} and len(stripped) >= len(fence.marker)


def _walk(body: str) -> Iterator[tuple[str, int, object]]:
    """Yield ("text", line_no, line), ("code", line_no, CodeBlock) and ("open", line_no, None)."""
    fence: _Fence | None = None
    for line_no, line in enumerate(body.splitlines(), start=1):
        if fence is not None:
            if _closes(fence, line):
                language = fence.info.split()[0] if fence.info.split() else ""
                yield "code", fence.line, CodeBlock(language=language, content="\n".join(fence.lines), line=fence.line)
                fence = None
            else:
                fence.lines.append(line)
            continue
        match = _FENCE_PATTERN.match(line)
        # backtick info strings may not contain backticks
        if match and not (match.group(1)[0] == "`" and "`" in match.group(2)):
            fence = _Fence(marker=match.group(1), info=match.group(2).strip(), line=line_no, lines=[])
            continue
        yield "text", line_no, line
    if fence is not None:
        yield "open", fence.line, None


def parse_sections(body: str) -> list[Section]:
    """Return ATX headings that appear outside fenced code blocks."""
    sections: list[Section] = []
    for kind, line_no, payload in _walk(body):
        if kind != "text":
            continue
        match = _HEADING_PATTERN.match(str(payload))
        if match:
            sections.append(Section(level=len(match.group(1)), title=match.group(2).strip(), line=line_no))
    return sections


def parse_code_blocks(body: str) -> list[CodeBlock]:
    """Return closed fenced code blocks in document order."""
    return [payload for kind, _line, payload in _walk(body) if kind == "code" and isinstance(payload, CodeBlock)]


def find_unterminated_fence(body: str) -> int | None:
    """Return the line of a fence that is opened but never closed."""
    for kind, line_no, _payload in _walk(body):
        if kind == "open":
            return line_no
    return None
