"""Parser for WolframAlpha LLM API answers.

The LLM API answers in plain text: paragraphs separated by a blank line.
One paragraph echoes the query as a JSON string (``Query: "..."``), an
optional ``Wolfram|Alpha website result for "...":`` paragraph links the
full result page, and the rest look like ``Title: first line`` followed by
continuation lines.

parse_answer() turns that text into a ParsedAnswer. Full answers and
simplified (maxchars-limited) answers share the same format and go
through the same function.
"""

import json
import re
from dataclasses import dataclass
from functools import reduce
from typing import Any, NamedTuple, Optional

from wolfram_llm.utils.exceptions import EmptyResultError, MissingQueryError
from wolfram_llm.utils.log import get_logger

logger = get_logger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"
QUERY_PREFIX = "Query:"
ASSUMPTION_PREFIX = "Assumption:"
WEBSITE_RESULT_PREFIX = "Wolfram|Alpha website result"

_URL_PATTERN = re.compile(r"https?://\S+")


@dataclass(frozen=True)
class Section:
    """A titled block of an answer."""

    title: str
    content: str


@dataclass(frozen=True)
class ParsedAnswer:
    """Structured form of one LLM API answer."""

    query: str
    principal_text: str
    sections: tuple[Section, ...] = ()
    url: Optional[str] = None
    interpretation: Optional[str] = None

    def get_section(self, title: str) -> Optional[Section]:
        """Find a section by its exact title.

        Args:
            title: Section title, e.g. "Result" or "Definite integral"

        Returns:
            The matching Section, or None
        """
        return next((s for s in self.sections if s.title == title), None)

    @property
    def section_titles(self) -> list[str]:
        """Section titles in answer order."""
        return [s.title for s in self.sections]

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for JSON output."""
        return {
            "query": self.query,
            "interpretation": self.interpretation,
            "result": self.principal_text,
            "sections": [{"title": s.title, "content": s.content} for s in self.sections],
            "url": self.url,
        }


class _SectionFold(NamedTuple):
    """Accumulator for building sections from paragraphs."""

    sections: tuple[Section, ...] = ()
    emitted: frozenset = frozenset()
    title: str = ""
    lines: tuple[str, ...] = ()
    url: Optional[str] = None

    def flush(self) -> "_SectionFold":
        # First occurrence of a title wins, later ones are dropped
        if not self.title or not self.lines or self.title in self.emitted:
            return self
        section = Section(self.title, "\n".join(self.lines).strip())
        return self._replace(
            sections=self.sections + (section,),
            emitted=self.emitted | {self.title},
        )


def _fold_paragraph(state: _SectionFold, paragraph: str) -> _SectionFold:
    if paragraph.startswith(WEBSITE_RESULT_PREFIX):
        if state.url is None:
            match = _URL_PATTERN.search(paragraph)
            if match:
                return state._replace(url=match.group(0))
        return state

    if not paragraph.strip():
        return state

    lines = paragraph.split("\n")
    first_line = lines[0]
    if ":" in first_line:
        title, _, remainder = first_line.partition(":")
        return state.flush()._replace(
            title=title.strip(),
            lines=(remainder.strip(), *lines[1:]),
        )

    # No colon: continuation of the current section
    return state._replace(lines=state.lines + tuple(lines))


def split_paragraphs(raw: str) -> list[str]:
    """Split raw answer text on blank lines."""
    return raw.split(PARAGRAPH_SEPARATOR)


def truncate_duplicate_content(paragraphs: list[str]) -> list[str]:
    """Drop the repeated tail the API sometimes emits.

    The LLM API has been seen to repeat the whole remaining answer starting
    at a second ``Assumption:`` paragraph. When two or more assumption
    paragraphs exist, everything from the second one on is cut. The
    website result paragraph is put back at the end if it was cut.

    Args:
        paragraphs: Answer paragraphs, without the Query: paragraph

    Returns:
        A new list with the duplicate tail removed
    """
    assumption_indexes = [
        i for i, p in enumerate(paragraphs) if p.startswith(ASSUMPTION_PREFIX)
    ]
    if len(assumption_indexes) < 2:
        return list(paragraphs)

    kept = list(paragraphs[: assumption_indexes[1]])
    website_result = next(
        (p for p in paragraphs if p.startswith(WEBSITE_RESULT_PREFIX)), None
    )
    if website_result is not None and website_result not in kept:
        kept.append(website_result)

    logger.debug(
        "Dropped %d duplicated paragraphs after second assumption",
        len(paragraphs) - assumption_indexes[1],
    )
    return kept


def _decode_query(paragraphs: list[str]) -> str:
    query_paragraph = next((p for p in paragraphs if p.startswith(QUERY_PREFIX)), None)
    if query_paragraph is None:
        raise MissingQueryError()

    payload = query_paragraph[len(QUERY_PREFIX):].strip()
    try:
        query = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MissingQueryError(
            f"Invalid response format: query is not a JSON string: {payload!r}"
        ) from e

    if not isinstance(query, str) or not query:
        raise MissingQueryError()
    return query


def _interpretation(paragraphs: list[str]) -> Optional[str]:
    for paragraph in paragraphs:
        if paragraph.startswith(ASSUMPTION_PREFIX):
            return paragraph[len(ASSUMPTION_PREFIX):].strip() or None
    return None


def parse_answer(raw: str) -> ParsedAnswer:
    """Parse a raw LLM API answer.

    Args:
        raw: Answer text as returned by the API

    Returns:
        ParsedAnswer with query, principal text, sections and result URL

    Raises:
        MissingQueryError: If there is no usable Query: paragraph
        EmptyResultError: If nothing is left besides the query
    """
    paragraphs = split_paragraphs(raw)
    query = _decode_query(paragraphs)

    candidates = [p for p in paragraphs if not p.startswith(QUERY_PREFIX)]
    kept = truncate_duplicate_content(candidates)

    principal_text = PARAGRAPH_SEPARATOR.join(kept).strip()
    if not principal_text:
        raise EmptyResultError()

    folded = reduce(_fold_paragraph, kept, _SectionFold()).flush()

    return ParsedAnswer(
        query=query,
        principal_text=principal_text,
        sections=folded.sections,
        url=folded.url,
        interpretation=_interpretation(kept),
    )
