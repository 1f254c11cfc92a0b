"""
Syntax tree for the parts of a generated Rust module that deduplication cares about.

Only `struct` items are modelled in detail; every other top-level item is kept
as an `OpaqueItem` holding its exact source text. All nodes are frozen, so
whole field lists can be compared and hashed when grouping structs, and
transformations build new nodes with `dataclasses.replace` instead of
mutating shared ones.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Iterator, TypeAlias

from xj_types import ModuleName, TypeName


@dataclass(frozen=True)
class Decoration:
    """An outer attribute (`#[serde(default)]`) or an outer doc comment (`/// ...`)."""

    text: str
    is_doc: bool = False


@dataclass(frozen=True)
class OtherType:
    """Any type that is not a plain path: references, tuples, arrays, fn pointers, lifetimes..."""

    text: str  # whitespace-normalized source text


@dataclass(frozen=True)
class PathSegment:
    name: str
    # None for a bare name; `Option<String>` has args == (PathType(String),)
    args: tuple[TypeExpr, ...] | None = None

    def is_direct(self) -> bool:
        return not self.args


@dataclass(frozen=True)
class PathType:
    segments: tuple[PathSegment, ...]

    @staticmethod
    def named(name: str, *args: TypeExpr) -> PathType:
        """`PathType.named("Vec", PathType.named("String"))` is `Vec<String>`."""
        return PathType((PathSegment(name, tuple(args) if args else None),))


TypeExpr: TypeAlias = PathType | OtherType


@dataclass(frozen=True)
class Field:
    name: str | None  # None for tuple struct fields
    ty: TypeExpr
    visibility: str = ""
    decorations: tuple[Decoration, ...] = ()


class StructShape(enum.Enum):
    NAMED = "named"
    TUPLE = "tuple"
    UNIT = "unit"


FieldLayout: TypeAlias = tuple[StructShape, tuple[Field, ...]]


@dataclass(frozen=True)
class StructDecl:
    name: TypeName
    fields: tuple[Field, ...]
    shape: StructShape = StructShape.NAMED
    visibility: str = ""
    generics: str = ""
    where_clause: str = ""
    decorations: tuple[Decoration, ...] = ()

    def field_layout(self) -> FieldLayout:
        return (self.shape, self.fields)

    def without_docs(self) -> StructDecl:
        """A copy with doc comments removed from the struct and from each of its fields."""
        return replace(
            self,
            decorations=undocumented(self.decorations),
            fields=tuple(
                replace(f, decorations=undocumented(f.decorations)) for f in self.fields
            ),
        )


@dataclass(frozen=True)
class OpaqueItem:
    text: str


Item: TypeAlias = StructDecl | OpaqueItem


@dataclass(frozen=True)
class SourceModule:
    name: ModuleName
    items: tuple[Item, ...]

    def struct_decls(self) -> Iterator[StructDecl]:
        for item in self.items:
            if isinstance(item, StructDecl):
                yield item


def undocumented(decorations: tuple[Decoration, ...]) -> tuple[Decoration, ...]:
    return tuple(d for d in decorations if not d.is_doc)
