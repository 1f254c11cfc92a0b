"""Substitution files: hand-editable `AutoName->ChosenName` overrides for shared type names.

A run without a substitution file writes two listings in the same format:

    shared_types_names.txt    every shared name mapped to itself; copy it and edit
                              the right-hand sides to pick better names.
    shared_types_mapping.txt  every original struct name and the shared name it
                              was folded into.

Both are sorted so that successive runs produce small diffs.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from constants import (
    SUBSTITUTION_MAPPING_FILENAME,
    SUBSTITUTION_NAMES_FILENAME,
    SUBSTITUTION_SEPARATOR,
)
from xj_types import RenameMap, SubstitutionMap, TypeName


@dataclass
class SubstitutionFile:
    substitutions: SubstitutionMap = field(default_factory=dict)
    # (line number, text) of non-blank lines that were not `name->name`
    ignored_lines: list[tuple[int, str]] = field(default_factory=list)


def parse_substitution_file(text: str) -> SubstitutionFile:
    """Lines without a separator, or with an empty side, are ignored."""
    parsed = SubstitutionFile()
    for lineno, line in enumerate(text.splitlines(), start=1):
        original, sep, override = line.partition(SUBSTITUTION_SEPARATOR)
        original, override = original.strip(), override.strip()
        if not sep or not original or not override:
            if line.strip():
                parsed.ignored_lines.append((lineno, line))
            continue
        parsed.substitutions[original] = override
    return parsed


def parse_substitutions(text: str) -> SubstitutionMap:
    return parse_substitution_file(text).substitutions


def read_substitutions(path: Path) -> SubstitutionFile:
    return parse_substitution_file(path.read_text(encoding="utf-8"))


def format_substitution_lines(pairs: Iterable[tuple[TypeName, TypeName]]) -> str:
    return "".join(f"{lhs}{SUBSTITUTION_SEPARATOR}{rhs}\n" for lhs, rhs in pairs)


def shared_names_listing(rename_map: RenameMap) -> str:
    return format_substitution_lines((name, name) for name in sorted(set(rename_map.values())))


def rename_mapping_listing(rename_map: RenameMap) -> str:
    by_shared_name = sorted(rename_map.items(), key=lambda kv: (kv[1], kv[0]))
    return format_substitution_lines(by_shared_name)


def substitution_artifacts(rename_map: RenameMap) -> dict[str, str]:
    """File name -> contents for the listings persisted after a run."""
    return {
        SUBSTITUTION_NAMES_FILENAME: shared_names_listing(rename_map),
        SUBSTITUTION_MAPPING_FILENAME: rename_mapping_listing(rename_map),
    }
