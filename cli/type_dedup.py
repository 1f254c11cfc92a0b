"""
Generated CRD bindings (e.g. kopium output for Gateway API `HTTPRoute` and
`GRPCRoute`) contain many small structs that differ only in name:

    pub struct HTTPRouteRulesFiltersRequestHeaderModifierAdd {
        pub name: String,
        pub value: String,
    }

    pub struct GRPCRouteRulesFiltersRequestHeaderModifierAdd {
        pub name: String,
        pub value: String,
    }

We replace each such family with a single struct living in a shared module.

Only "simple leaves" are candidates: structs whose every field type is
`String` or `i32`, possibly wrapped in generic containers (`Option<String>`,
`Vec<BTreeMap<String, i32>>`, ...) at any depth. The container names
themselves are not checked, only the arguments.

Candidates are bucketed by their exact field list (names, types, order,
visibility and attributes, doc comments included). A bucket becomes a
shared type only if its members carry at least two distinct names; a
struct that is merely repeated under the same name is left alone.

The shared name is `Shared` followed by the words common to every member's
name, in lexicographic order:

    HTTPRouteRulesFiltersRequestHeaderModifierAdd
    GRPCRouteRulesFiltersRequestHeaderModifierAdd
        -> SharedAddFiltersHeaderModifierRequestRouteRules

A substitution file can override any auto-generated name.

The first member of a bucket (modules in name order, then items in source
order) is the template for the shared struct; its doc comments, and those
of its fields, are dropped because they describe one particular origin.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from constants import DEFAULT_SHARED_TYPE_PREFIX, SIMPLE_FIELD_TYPE_NAMES
from rust_syntax import FieldLayout, PathSegment, PathType, SourceModule, StructDecl, TypeExpr
from word_segmentation import break_into_words, common_words
from xj_types import ModuleName, RenameMap, SubstitutionMap, TypeName


def is_simple_type(ty: TypeExpr) -> bool:
    if not isinstance(ty, PathType):
        return False
    return all(is_simple_segment(segment) for segment in ty.segments)


def is_simple_segment(segment: PathSegment) -> bool:
    if segment.is_direct():
        return segment.name in SIMPLE_FIELD_TYPE_NAMES
    assert segment.args is not None
    return all(is_simple_type(arg) for arg in segment.args)


def is_simple_leaf(decl: StructDecl) -> bool:
    return all(is_simple_type(f.ty) for f in decl.fields)


@dataclass(frozen=True)
class BucketMember:
    module_name: ModuleName
    decl: StructDecl


def collect_simple_leaves(modules: Iterable[SourceModule]) -> list[BucketMember]:
    return [
        BucketMember(module.name, decl)
        for module in modules
        for decl in module.struct_decls()
        if is_simple_leaf(decl)
    ]


def group_by_field_layout(
    members: Iterable[BucketMember],
) -> dict[FieldLayout, list[BucketMember]]:
    """Bucket structs by exact field list. Buckets and their members keep first-seen order."""
    buckets: dict[FieldLayout, list[BucketMember]] = {}
    for member in members:
        buckets.setdefault(member.decl.field_layout(), []).append(member)
    return buckets


def distinct_names(members: Iterable[BucketMember]) -> list[TypeName]:
    return list(dict.fromkeys(m.decl.name for m in members))


def auto_shared_name(original_names: Sequence[TypeName], prefix: str) -> TypeName:
    words = common_words([break_into_words(name) for name in original_names])
    return prefix + "".join(words)


@dataclass(frozen=True)
class SharedType:
    auto_name: TypeName
    decl: StructDecl
    members: tuple[BucketMember, ...]

    @property
    def name(self) -> TypeName:
        return self.decl.name

    def original_names(self) -> list[TypeName]:
        return distinct_names(self.members)


def name_bucket(
    members: Sequence[BucketMember],
    substitutions: SubstitutionMap,
    prefix: str = DEFAULT_SHARED_TYPE_PREFIX,
) -> SharedType | None:
    """Build the shared struct for a bucket, or None if its members all share one name."""
    original_names = distinct_names(members)
    if len(original_names) < 2:
        return None

    auto_name = auto_shared_name(original_names, prefix)
    final_name = substitutions.get(auto_name, auto_name)
    template = members[0].decl
    return SharedType(
        auto_name=auto_name,
        decl=replace(template.without_docs(), name=final_name),
        members=tuple(members),
    )


@dataclass
class DedupPlan:
    shared_types: list[SharedType] = field(default_factory=list)
    rename_map: RenameMap = field(default_factory=dict)
    # Original names claimed by more than one shared type; the last one wins.
    conflicting_originals: list[TypeName] = field(default_factory=list)

    def colliding_shared_names(self) -> list[TypeName]:
        """Shared names produced by more than one bucket."""
        seen: set[TypeName] = set()
        collisions: list[TypeName] = []
        for shared in self.shared_types:
            if shared.name in seen and shared.name not in collisions:
                collisions.append(shared.name)
            seen.add(shared.name)
        return collisions


def plan_shared_types(
    modules: Sequence[SourceModule],
    substitutions: SubstitutionMap | None = None,
    prefix: str = DEFAULT_SHARED_TYPE_PREFIX,
) -> DedupPlan:
    """Find duplicated simple-leaf structs across `modules` and decide their shared names.

    The returned plan is complete before any module is rewritten."""
    plan = DedupPlan()
    buckets = group_by_field_layout(collect_simple_leaves(modules))

    for members in buckets.values():
        if len(members) < 2:
            continue
        shared = name_bucket(members, substitutions or {}, prefix)
        if shared is None:
            continue

        plan.shared_types.append(shared)
        for original in shared.original_names():
            if original in plan.rename_map:
                plan.conflicting_originals.append(original)
            plan.rename_map[original] = shared.name

    return plan
