"""Core domain models.

Field names are Pythonic; aliases carry the on-disk spelling so that
`model_validate` reads the files as written and
`model_dump(by_alias=True)` writes them back the same way.

Mod file (one per mod, human-authored):

    {"name": ..., "author": ..., "targetFile": "STIPrompt.jet",
     "promptsAdded": [{"prompt": ..., "decoys": [...]}]}

Content document (one per target file, read by the game):

    {"episodeid": 1311,
     "content": [{"id": 0, "prefix": {"text": ""},
                  "prompt": {"text": ...}, "decoys": [{"text": ...}]}]}
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModEntry(BaseModel):
    """One prompt and its decoys, as a mod author writes it."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(min_length=1)
    decoys: list[str]


class ModRecord(BaseModel):
    """A mod file after validation. Never mutated once loaded."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    author: str = Field(min_length=1)
    target_file: str = Field(alias="targetFile", min_length=1)
    entries: list[ModEntry] = Field(default_factory=list, alias="promptsAdded")


class Text(BaseModel):
    """The `{"text": ...}` wrapper the game uses for every string."""

    text: str


class ContentEntry(BaseModel):
    """One prompt as stored in a content document."""

    id: int = Field(ge=0)
    prefix: Text = Field(default_factory=lambda: Text(text=""))
    prompt: Text
    decoys: list[Text] = Field(default_factory=list)


class ContentDocument(BaseModel):
    """A whole content file. `episode_id` is None for unmapped targets."""

    model_config = ConfigDict(populate_by_name=True)

    episode_id: int | None = Field(default=None, alias="episodeid")
    entries: list[ContentEntry] = Field(default_factory=list, alias="content")
