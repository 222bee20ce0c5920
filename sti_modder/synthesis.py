"""Content synthesis: many mods in, one content document out.

Each target file is rebuilt from scratch on every install. Mods are
concatenated in the order the store returned them, entries in the order
each mod declares them, and every entry gets the next id from the run's
allocator. There is no conflict resolution; two mods adding the same
prompt both appear.
"""

from __future__ import annotations

import logging

from sti_modder.episodes import episode_for
from sti_modder.ids import IdentifierAllocator
from sti_modder.models import ContentDocument, ContentEntry, ModEntry, ModRecord, Text
from sti_modder.store import filter_by_target

logger = logging.getLogger(__name__)


def to_content_entry(entry: ModEntry, entry_id: int) -> ContentEntry:
    return ContentEntry(
        id=entry_id,
        prefix=Text(text=""),
        prompt=Text(text=entry.prompt),
        decoys=[Text(text=d) for d in entry.decoys],
    )


def build_document(
    target_file: str,
    mods: list[ModRecord],
    allocator: IdentifierAllocator | None = None,
) -> ContentDocument:
    """Merge every mod targeting `target_file` into a single document.

    Mods for other targets are ignored, so the full mod list can be passed
    for each target. Pass a shared allocator to keep ids unique across
    several documents built in the same run; by default each call starts
    at 0.
    """
    allocator = allocator or IdentifierAllocator()

    episode_id = episode_for(target_file)
    if episode_id is None:
        logger.warning("No episode id known for %s; writing it without one", target_file)

    entries: list[ContentEntry] = []
    for mod in filter_by_target(mods, target_file):
        for entry in mod.entries:
            entries.append(to_content_entry(entry, allocator.next()))
        logger.debug("%s: %d prompt(s) from '%s'", target_file, len(mod.entries), mod.name)

    return ContentDocument(episode_id=episode_id, entries=entries)


def render_document(document: ContentDocument) -> str:
    """Serialize for the game. `episodeid` is left out when unknown."""
    return document.model_dump_json(by_alias=True, exclude_none=True, indent=4)
