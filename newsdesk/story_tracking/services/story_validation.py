"""
Story Validation

Validate-then-transform step shared by the create and update paths.

    validate_story()          field constraints -> StoryInput
    prepare_story_for_save()  slug derivation + empty child-row pruning
    validate_and_prepare()    both, the only entry point StoryService uses
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from ..errors import StoryValidationError
from ..models import (
    Journalist,
    Source,
    Story,
    StoryDocument,
    StoryInput,
    TimelineEvent,
)

EMPTY_SLUG_MESSAGE = "Title must contain at least one letter or number"

# ASCII word characters only, matching the slugs already in the store
_NON_SLUG_CHARS = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE_RUNS = re.compile(r"\s+", re.ASCII)
_HYPHEN_RUNS = re.compile(r"-{2,}")


def slugify(title: str) -> str:
    """
    Derive a URL-safe slug from a story title.

    Lowercases, strips non-word characters, turns whitespace runs into
    single hyphens, collapses repeated hyphens and trims hyphens at
    both ends.

        >>> slugify("Breaking: City Hall Scandal!!")
        'breaking-city-hall-scandal'
    """
    slug = title.lower()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE_RUNS.sub("-", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """
    Flatten pydantic error dicts into {dotted.field.path: message}.

    Custom ValueError messages from model validators are returned as
    written, without pydantic's "Value error, " prefix.
    """
    details: Dict[str, str] = {}
    for error in errors:
        path = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        ctx_error = (error.get("ctx") or {}).get("error")
        if error.get("type") == "value_error" and ctx_error is not None:
            message = str(ctx_error)
        # First error per field wins
        details.setdefault(path or "body", message)
    return details


def validate_story(payload: Any) -> StoryInput:
    """
    Check a candidate story against the field constraints.

    Raises:
        StoryValidationError: with per-field details
    """
    if not isinstance(payload, dict):
        raise StoryValidationError({"body": "Expected a JSON object"})
    try:
        return StoryInput.model_validate(payload)
    except ValidationError as e:
        raise StoryValidationError(format_validation_errors(e.errors())) from e


def prune_journalists(journalists: Iterable[Journalist]) -> List[Journalist]:
    return [j for j in journalists if j.name and j.email]


def prune_sources(sources: Iterable[Source]) -> List[Source]:
    return [s for s in sources if s.name]


def prune_timeline(timeline: Iterable[TimelineEvent]) -> List[TimelineEvent]:
    return [t for t in timeline if t.event and t.date]


def prepare_story_for_save(
    story: StoryInput,
    current_title: Optional[str] = None,
    current_slug: Optional[str] = None,
) -> StoryDocument:
    """
    Apply the pre-save transform to a validated story.

    The slug is re-derived when there is no current slug (create) or the
    title changed; otherwise the stored slug is kept. Child rows missing
    their required fields are dropped.

    Raises:
        StoryValidationError: if the title yields an empty slug
    """
    if current_slug is None or story.title != current_title:
        slug = slugify(story.title)
    else:
        slug = current_slug

    if not slug:
        raise StoryValidationError({"slug": EMPTY_SLUG_MESSAGE})

    fields = story.model_dump(exclude={"journalists", "sources", "timeline", "attachments"})
    return StoryDocument(
        **fields,
        slug=slug,
        journalists=prune_journalists(story.journalists),
        sources=prune_sources(story.sources),
        timeline=prune_timeline(story.timeline),
        attachments=list(story.attachments),
    )


def validate_and_prepare(payload: Any, current: Optional[Story] = None) -> StoryDocument:
    """Validate a submitted aggregate and transform it for writing.

    `current` is the stored story when replacing one, None when creating.
    """
    story = validate_story(payload)
    if current is None:
        return prepare_story_for_save(story)
    return prepare_story_for_save(
        story, current_title=current.title, current_slug=current.slug
    )
