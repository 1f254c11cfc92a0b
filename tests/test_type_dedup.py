from rust_parsing import parse_rust_module
from rust_syntax import Decoration, Field, OtherType, PathType, SourceModule, StructDecl
from type_dedup import (
    collect_simple_leaves,
    group_by_field_layout,
    is_simple_leaf,
    is_simple_type,
    plan_shared_types,
)

STRING = PathType.named("String")
I32 = PathType.named("i32")
SERDE_DEFAULT = Decoration("#[serde(default)]")


def header_fields(doc: str = "/// Name of the header.") -> tuple[Field, ...]:
    return (
        Field("name", STRING, "pub", (Decoration(doc, is_doc=True),)),
        Field("value", PathType.named("Option", STRING), "pub", (SERDE_DEFAULT,)),
    )


def struct(name: str, fields: tuple[Field, ...], doc: str | None = None) -> StructDecl:
    decorations = (Decoration("#[derive(Clone, Debug)]"),)
    if doc is not None:
        decorations = (Decoration(doc, is_doc=True), *decorations)
    return StructDecl(name, fields, visibility="pub", decorations=decorations)


def module(name: str, *decls: StructDecl) -> SourceModule:
    return SourceModule(name, tuple(decls))


def test_simple_types():
    assert is_simple_type(STRING)
    assert is_simple_type(I32)
    assert is_simple_type(PathType.named("Option", STRING))
    # Container names aren't checked, and nesting depth is unlimited.
    assert is_simple_type(
        PathType.named("Vec", PathType.named("Option", PathType.named("BTreeMap", STRING, I32)))
    )


def test_non_simple_types():
    assert not is_simple_type(PathType.named("u64"))
    assert not is_simple_type(PathType.named("HeaderAdd"))
    assert not is_simple_type(PathType.named("Option", PathType.named("u64")))
    assert not is_simple_type(PathType.named("Vec", STRING, OtherType("'a")))
    assert not is_simple_type(OtherType("&str"))
    assert not is_simple_type(OtherType("(String, i32)"))


def test_simple_leaf():
    assert is_simple_leaf(struct("HeaderAdd", header_fields()))
    assert is_simple_leaf(StructDecl("Marker", ()))
    assert not is_simple_leaf(
        struct("Header", (Field("add", PathType.named("Vec", PathType.named("HeaderAdd"))),))
    )


def test_only_simple_leaves_are_collected():
    collected = collect_simple_leaves([
        module(
            "routes",
            struct("HeaderAdd", header_fields()),
            struct("Port", (Field("port", PathType.named("u16")),)),
        )
    ])
    assert [(m.module_name, m.decl.name) for m in collected] == [("routes", "HeaderAdd")]


def test_grouping_is_exact():
    fields = header_fields()
    swapped_fields = (fields[1], fields[0])
    two_attrs = (Decoration("#[serde(default)]"), Decoration('#[serde(rename = "v")]'))
    attrs_a = (Field("value", STRING, "pub", two_attrs),)
    attrs_b = (Field("value", STRING, "pub", tuple(reversed(two_attrs))),)

    members = collect_simple_leaves([
        module(
            "routes",
            struct("A", fields),
            struct("B", swapped_fields),
            struct("C", attrs_a),
            struct("D", attrs_b),
            struct("E", header_fields(doc="/// Another doc.")),
            struct("F", fields),
        )
    ])
    buckets = group_by_field_layout(members)
    assert [[m.decl.name for m in bucket] for bucket in buckets.values()] == [
        ["A", "F"],
        ["B"],
        ["C"],
        ["D"],
        ["E"],
    ]


def test_plan_shared_types():
    modules = [
        module(
            "grpcroutes",
            struct(
                "GRPCRouteRulesFiltersRequestHeaderModifierAdd",
                header_fields(),
                doc="/// gRPC header.",
            ),
        ),
        module(
            "httproutes",
            struct(
                "HTTPRouteRulesFiltersRequestHeaderModifierAdd",
                header_fields(),
                doc="/// HTTP header.",
            ),
        ),
    ]
    plan = plan_shared_types(modules)

    shared_name = "SharedAddFiltersHeaderModifierRequestRouteRules"
    assert plan.rename_map == {
        "GRPCRouteRulesFiltersRequestHeaderModifierAdd": shared_name,
        "HTTPRouteRulesFiltersRequestHeaderModifierAdd": shared_name,
    }
    (shared,) = plan.shared_types
    assert shared.auto_name == shared_name
    assert [m.module_name for m in shared.members] == ["grpcroutes", "httproutes"]
    # Doc comments are dropped from the struct and its fields; other attributes stay.
    assert shared.decl == StructDecl(
        shared_name,
        (
            Field("name", STRING, "pub"),
            Field("value", PathType.named("Option", STRING), "pub", (SERDE_DEFAULT,)),
        ),
        visibility="pub",
        decorations=(Decoration("#[derive(Clone, Debug)]"),),
    )


def test_same_name_duplicates_are_not_shared():
    modules = [
        module("a", struct("FooRequest", header_fields())),
        module("b", struct("FooRequest", header_fields())),
    ]
    plan = plan_shared_types(modules)
    assert plan.shared_types == []
    assert plan.rename_map == {}


def test_sole_simple_leaf_is_not_shared():
    plan = plan_shared_types([module("a", struct("HeaderAdd", header_fields()))])
    assert plan.shared_types == []
    assert plan.rename_map == {}


def test_custom_prefix_and_substitution():
    modules = [
        module("a", struct("HttpFooRequest", header_fields())),
        module("b", struct("GrpcFooRequest", header_fields())),
    ]
    assert plan_shared_types(modules, prefix="Common").rename_map == {
        "HttpFooRequest": "CommonFooRequest",
        "GrpcFooRequest": "CommonFooRequest",
    }

    plan = plan_shared_types(modules, substitutions={"SharedFooRequest": "FooRequest"})
    (shared,) = plan.shared_types
    assert shared.auto_name == "SharedFooRequest"
    assert shared.name == "FooRequest"
    assert set(plan.rename_map.values()) == {"FooRequest"}


def test_colliding_shared_names_are_reported():
    other_fields = (Field("port", I32, "pub"),)
    modules = [
        module("a", struct("HttpFooRequest", header_fields()), struct("HttpFoo", other_fields)),
        module("b", struct("GrpcFooRequest", header_fields()), struct("GrpcFoo", other_fields)),
    ]
    plan = plan_shared_types(modules)
    assert [s.name for s in plan.shared_types] == ["SharedFooRequest", "SharedFoo"]
    assert plan.colliding_shared_names() == []

    plan = plan_shared_types(
        modules, substitutions={"SharedFooRequest": "Foo", "SharedFoo": "Foo"}
    )
    assert plan.colliding_shared_names() == ["Foo"]


def test_conflicting_originals_last_bucket_wins():
    other_fields = (Field("port", I32, "pub"),)
    modules = [
        module("a", struct("HttpFoo", header_fields()), struct("HttpBar", other_fields)),
        module("b", struct("GrpcFoo", header_fields()), struct("HttpFoo", other_fields)),
    ]
    plan = plan_shared_types(modules)
    assert plan.conflicting_originals == ["HttpFoo"]
    assert plan.rename_map["HttpFoo"] == plan.shared_types[-1].name


def test_attribute_literal_spacing_splits_buckets():
    source = """pub struct HttpRename {
    #[serde(rename = "x  y")]
    pub a: String,
}

pub struct GrpcRename {
    #[serde(rename = "x y")]
    pub a: String,
}
"""
    members = collect_simple_leaves([parse_rust_module("renames", source)])
    buckets = group_by_field_layout(members)
    assert [[m.decl.name for m in bucket] for bucket in buckets.values()] == [
        ["HttpRename"],
        ["GrpcRename"],
    ]
