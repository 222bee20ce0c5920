"""Episode routing table: which episode tag each content file carries."""

from __future__ import annotations

EPISODE_IDS: dict[str, int] = {
    "STIJobPrompt.jet": 1322,
    "STIPrompt.jet": 1311,
    "STIStorePrompt.jet": 1314,
}

# Install order for the content files a mod can target.
TARGET_FILES: tuple[str, ...] = tuple(EPISODE_IDS)


def episode_for(target_file: str) -> int | None:
    return EPISODE_IDS.get(target_file)


def is_supported(target_file: str) -> bool:
    return target_file in EPISODE_IDS
