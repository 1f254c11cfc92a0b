"""Retarget field types at shared structs, then drop the structs they replace.

Both passes are pure: they return a new module plus whether anything changed.

Rewriting looks at direct names and at the direct-name arguments of a generic
(`Vec<Foo>` becomes `Vec<SharedFoo>`), but not deeper: `Option<Vec<Foo>>` is
left as it is, even though eligibility checking recurses all the way down.
"""

from dataclasses import replace
from typing import Iterable

from rust_syntax import Field, PathSegment, PathType, SourceModule, StructDecl, TypeExpr
from xj_types import RenameMap


def rename_direct_segment(segment: PathSegment, rename_map: RenameMap) -> PathSegment:
    if not segment.is_direct():
        return segment
    new_name = rename_map.get(segment.name)
    if new_name is None:
        return segment
    return replace(segment, name=new_name)


def rewrite_argument(arg: TypeExpr, rename_map: RenameMap) -> TypeExpr:
    if not isinstance(arg, PathType):
        return arg
    return PathType(tuple(rename_direct_segment(s, rename_map) for s in arg.segments))


def rewrite_segment(segment: PathSegment, rename_map: RenameMap) -> PathSegment:
    if segment.is_direct():
        return rename_direct_segment(segment, rename_map)
    assert segment.args is not None
    return replace(segment, args=tuple(rewrite_argument(a, rename_map) for a in segment.args))


def rewrite_type(ty: TypeExpr, rename_map: RenameMap) -> TypeExpr:
    if not isinstance(ty, PathType):
        return ty
    return PathType(tuple(rewrite_segment(s, rename_map) for s in ty.segments))


def rewrite_struct(decl: StructDecl, rename_map: RenameMap) -> StructDecl:
    fields: list[Field] = [replace(f, ty=rewrite_type(f.ty, rename_map)) for f in decl.fields]
    return replace(decl, fields=tuple(fields))


def rewrite_module(module: SourceModule, rename_map: RenameMap) -> tuple[SourceModule, bool]:
    """Point every field that names a renamed struct at its shared replacement."""
    changed = False
    items = []
    for item in module.items:
        if isinstance(item, StructDecl):
            rewritten = rewrite_struct(item, rename_map)
            changed = changed or rewritten != item
            item = rewritten
        items.append(item)
    return replace(module, items=tuple(items)), changed


def delete_superseded_decls(
    module: SourceModule, rename_map: RenameMap
) -> tuple[SourceModule, bool]:
    """Remove structs that now live in the shared module."""
    kept = tuple(
        item
        for item in module.items
        if not (isinstance(item, StructDecl) and item.name in rename_map)
    )
    return replace(module, items=kept), len(kept) != len(module.items)


def apply_rename_map(
    modules: Iterable[SourceModule], rename_map: RenameMap
) -> list[tuple[SourceModule, bool]]:
    results = []
    for module in modules:
        # Deletion must see the same rename keys as rewriting, so it runs second.
        rewritten, fields_changed = rewrite_module(module, rename_map)
        pruned, decls_deleted = delete_superseded_decls(rewritten, rename_map)
        results.append((pruned, fields_changed or decls_deleted))
    return results
