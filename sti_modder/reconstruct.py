"""Rebuild mod records from existing content documents.

Used to snapshot the game's shipped prompts as ordinary mods before an
install replaces them. The conversion is lossy: ids and prefixes are
dropped, so re-installing the snapshot gives the same prompt and decoy
text under fresh ids.

The snapshot's name and author are rendered from Handlebars templates
(see `config.Settings`), with `file` and `timestamp` in scope:

    "Content backup of {{{file}}} as of {{{timestamp}}}"

Use triple braces: `{{file}}` HTML-escapes characters such as `&` and `<`.
"""

from __future__ import annotations

from collections.abc import Callable

import pybars
from pydantic import ValidationError

from sti_modder.models import ContentDocument, ModEntry, ModRecord

DEFAULT_NAME_TEMPLATE = "Content backup of {{{file}}} as of {{{timestamp}}}"
DEFAULT_AUTHOR = "Jackbox games"

_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}


class DocumentError(ValueError):
    """Raised when a content file cannot be read as a content document."""


class LabelError(Exception):
    """Raised when a name/author template fails to compile or render."""


def parse_document(text: str, source: str = "<document>") -> ContentDocument:
    """Parse a content file. Keys the game adds beyond ours are ignored."""
    try:
        return ContentDocument.model_validate_json(text)
    except ValidationError as e:
        raise DocumentError(f"{source} is not a valid content document: {e}") from e


def from_document(
    document: ContentDocument, target_file: str, name: str, author: str
) -> ModRecord:
    # Game files can hold entries that fail ModEntry checks (empty prompt
    # text); they are copied unchecked.
    entries = [
        ModEntry.model_construct(
            prompt=entry.prompt.text, decoys=[d.text for d in entry.decoys]
        )
        for entry in document.entries
    ]
    return ModRecord(name=name, author=author, target_file=target_file, entries=entries)


def render_label(template: str, **context: str) -> str:
    """Render a Handlebars label template. Compiled templates are cached."""
    try:
        compiled = _cache.get(template)
        if compiled is None:
            compiled = _compiler.compile(template)
            _cache[template] = compiled
        return str(compiled(context))
    except Exception as e:
        raise LabelError(f"Cannot render label template {template!r}: {e}") from e
