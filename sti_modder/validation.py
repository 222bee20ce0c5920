"""Schema checks for mod files.

A mod file either yields a ModRecord or is rejected as a whole. Rejection
happens only on the top-level fields (`name`, `author`, `targetFile`) or
on a `promptsAdded` that is not a list. A broken entry inside
`promptsAdded` is dropped on its own and reported as a warning; the rest
of the mod survives.

Usage:

    result = validate_mod(json.loads(text))
    if result.is_valid:
        mods.append(result.mod)
    for issue in result.issues:
        print(issue)
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from sti_modder.episodes import is_supported
from sti_modder.models import ModEntry, ModRecord

Severity = Literal["error", "warning"]

REQUIRED_FIELDS = ("name", "author", "targetFile")


class Issue(BaseModel):
    """A single problem found in a mod file."""

    path: str  # e.g. "targetFile" or "promptsAdded[2].decoys"
    message: str
    severity: Severity = "error"

    def __str__(self) -> str:
        return f"[{self.severity.upper()}] {self.path}: {self.message}"


class ModValidation(BaseModel):
    """Outcome of validating one parsed mod file."""

    mod: ModRecord | None = None
    issues: list[Issue] = Field(default_factory=list)
    dropped_entries: int = 0

    @property
    def is_valid(self) -> bool:
        return self.mod is not None

    @property
    def errors(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[Issue]:
        return [i for i in self.issues if i.severity == "warning"]


def _format_loc(prefix: str, loc: tuple[int | str, ...]) -> str:
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "<root>"


def _issues_from(
    exc: ValidationError, prefix: str = "", severity: Severity = "error"
) -> list[Issue]:
    return [
        Issue(path=_format_loc(prefix, tuple(err["loc"])), message=err["msg"], severity=severity)
        for err in exc.errors()
    ]


def validate_entry(data: Any, index: int) -> tuple[ModEntry | None, list[Issue]]:
    """Validate one element of `promptsAdded`. Problems are warnings."""
    path = f"promptsAdded[{index}]"
    if not isinstance(data, dict):
        return None, [Issue(
            path=path,
            message=f"Must be an object, got {type(data).__name__}",
            severity="warning",
        )]
    try:
        return ModEntry.model_validate(data), []
    except ValidationError as e:
        return None, _issues_from(e, prefix=path, severity="warning")


def validate_mod(data: Any) -> ModValidation:
    """Validate a parsed mod file and build its ModRecord if it passes."""
    result = ModValidation()

    if not isinstance(data, dict):
        result.issues.append(Issue(
            path="<root>", message=f"Must be an object, got {type(data).__name__}",
        ))
        return result

    raw_entries = data.get("promptsAdded")
    entries: list[ModEntry] = []
    if raw_entries is None:
        result.issues.append(Issue(
            path="promptsAdded",
            message="Missing, the mod adds no prompts",
            severity="warning",
        ))
    elif not isinstance(raw_entries, list):
        result.issues.append(Issue(
            path="promptsAdded",
            message=f"Must be a list, got {type(raw_entries).__name__}",
        ))
    else:
        for index, raw in enumerate(raw_entries):
            entry, problems = validate_entry(raw, index)
            result.issues.extend(problems)
            if entry is None:
                result.dropped_entries += 1
            else:
                entries.append(entry)

    try:
        header = {k: data[k] for k in REQUIRED_FIELDS if k in data}
        mod = ModRecord.model_validate({**header, "promptsAdded": entries})
    except ValidationError as e:
        result.issues.extend(_issues_from(e))
        return result

    if result.errors:
        return result

    if not is_supported(mod.target_file):
        result.issues.append(Issue(
            path="targetFile",
            message=f"'{mod.target_file}' is not a supported content file",
            severity="warning",
        ))
    result.mod = mod
    return result
