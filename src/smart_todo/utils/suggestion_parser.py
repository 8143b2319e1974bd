"""Extract candidate todos from free-form assistant replies.

This is a substring/threshold heuristic, not a classifier:

1. Lines starting with one of ``BULLET_GLYPHS`` followed by whitespace are
   candidates; the marker is stripped and the rest trimmed.
2. Candidates shorter than ``MIN_SUGGESTION_LENGTH`` or longer than
   ``MAX_SUGGESTION_LENGTH`` characters are discarded.
3. Candidates containing a ``META_PHRASES`` entry (case-insensitive) are list
   introductions rather than items, and are discarded.
4. The first known project whose name occurs in the candidate text
   (case-insensitive) is assigned. With no match and exactly one known
   project, that project is assigned; otherwise the caller decides.

The constants are part of the behaviour and must not drift.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from smart_todo.models import Suggestion

BULLET_GLYPHS = ("•", "-", "*")
MIN_SUGGESTION_LENGTH = 5
MAX_SUGGESTION_LENGTH = 200
META_PHRASES = ("here are", "i suggest")

_BULLET_RE = re.compile(
    r"^\s*[" + "".join(re.escape(g) for g in BULLET_GLYPHS) + r"]\s+(.+)$"
)


def _known_projects(projects: Iterable[Any] | None) -> list[tuple[str, str]]:
    """Normalise projects (models or mappings) to (id, name) pairs."""
    known = []
    for project in projects or ():
        if isinstance(project, Mapping):
            project_id, name = project.get("id"), project.get("name")
        else:
            project_id = getattr(project, "id", None)
            name = getattr(project, "name", None)
        if not project_id:
            continue
        known.append((str(project_id), str(name or "")))
    return known


def _match_project(text: str, known: list[tuple[str, str]]) -> str | None:
    lowered = text.lower()
    for project_id, name in known:
        # A blank name would match every candidate
        if name.strip() and name.lower() in lowered:
            return project_id
    if len(known) == 1:
        return known[0][0]
    return None


def extract_suggestions(
    text: str | None, projects: Iterable[Any] | None = None
) -> list[Suggestion]:
    """Return candidate todos found in ``text``, in order of appearance.

    Args:
        text: Assistant reply
        projects: Known projects, each with ``id`` and ``name`` (model or mapping)

    Returns:
        Suggestions with ``added=False``; empty for malformed input
    """
    if not isinstance(text, str) or not text:
        return []

    try:
        known = _known_projects(projects)
    except TypeError:
        known = []
    suggestions = []

    for line in text.splitlines():
        match = _BULLET_RE.match(line)
        if match is None:
            continue

        candidate = match.group(1).strip()
        if not MIN_SUGGESTION_LENGTH <= len(candidate) <= MAX_SUGGESTION_LENGTH:
            continue

        lowered = candidate.lower()
        if any(phrase in lowered for phrase in META_PHRASES):
            continue

        suggestions.append(
            Suggestion(
                text=candidate,
                project_id=_match_project(candidate, known),
                added=False,
            )
        )

    return suggestions
