import re

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from rust_syntax import (
    Decoration,
    Field,
    Item,
    OpaqueItem,
    OtherType,
    PathSegment,
    PathType,
    SourceModule,
    StructDecl,
    StructShape,
    TypeExpr,
)
from xj_types import ModuleName

RUST_LANGUAGE = Language(tree_sitter_rust.language())

COMMENT_NODE_TYPES = ("line_comment", "block_comment")

DOC_ATTRIBUTE_RE = re.compile(r"#\[\s*doc\b")

# A string literal (plain, byte or raw) or a run of whitespace outside one.
ATTRIBUTE_TOKEN_RE = re.compile(
    r'(?P<literal>(?<!\w)b?r(?P<hashes>#*)".*?"(?P=hashes)|b?"(?:\\.|[^"\\])*")|\s+',
    re.DOTALL,
)


class RustParseError(ValueError):
    pass


def parse_rust_module(name: ModuleName, source: str) -> SourceModule:
    """Parse the text of a Rust module. Raises RustParseError if the text has syntax errors."""
    src = source.encode("utf-8")
    tree = Parser(RUST_LANGUAGE).parse(src)
    if tree.root_node.has_error:
        raise RustParseError(f"syntax errors in module {name}")
    return SourceModule(name=name, items=tuple(top_level_items(tree.root_node, src)))


def node_text(node: Node, src: bytes) -> str:
    return src[node.start_byte : node.end_byte].decode("utf-8")


def normalized_text(node: Node, src: bytes) -> str:
    return " ".join(node_text(node, src).split())


def attribute_text(node: Node, src: bytes) -> str:
    """Attribute source on one line. String literals are kept byte for byte."""
    collapsed = ATTRIBUTE_TOKEN_RE.sub(
        lambda m: m.group("literal") or " ", node_text(node, src)
    )
    return collapsed.strip()


def is_outer_doc_comment(text: str) -> bool:
    if text.startswith("///"):
        return not text.startswith("////")
    if text.startswith("/**"):
        return not text.startswith("/***") and text != "/**/"
    return False


def is_outer_decoration(node: Node, src: bytes) -> bool:
    if node.type == "attribute_item":
        return True
    return node.type in COMMENT_NODE_TYPES and is_outer_doc_comment(node_text(node, src))


def decoration_from_node(node: Node, src: bytes) -> Decoration:
    if node.type == "attribute_item":
        text = attribute_text(node, src)
        return Decoration(text, is_doc=DOC_ATTRIBUTE_RE.match(text) is not None)
    # Depending on the grammar version, line comments may include their newline.
    return Decoration(node_text(node, src).rstrip(), is_doc=True)


def top_level_items(root: Node, src: bytes) -> list[Item]:
    items: list[Item] = []
    # Attributes and doc comments are siblings of the item they decorate.
    pending: list[Node] = []
    # Last line of the most recent top-level comment, if it is the last item so far.
    comment_last_row: int | None = None

    for child in root.named_children:
        if is_outer_decoration(child, src):
            pending.append(child)
            continue

        if child.type in COMMENT_NODE_TYPES:
            text = node_text(child, src).rstrip()
            start_row = child.start_point[0]
            if comment_last_row is not None and start_row == comment_last_row + 1:
                # Consecutive comment lines stay one block.
                previous = items.pop()
                assert isinstance(previous, OpaqueItem)
                items.append(OpaqueItem(previous.text + "\n" + text))
            else:
                items.append(OpaqueItem(text))
            comment_last_row = start_row + text.count("\n")
            continue

        comment_last_row = None

        if child.type == "struct_item":
            decorations = tuple(decoration_from_node(n, src) for n in pending)
            items.append(struct_from_node(child, src, decorations))
        else:
            start = pending[0].start_byte if pending else child.start_byte
            items.append(OpaqueItem(src[start : child.end_byte].decode("utf-8").rstrip()))
        pending = []

    if pending:
        # Dangling attributes at the end of the file; keep them as they were.
        items.append(
            OpaqueItem(src[pending[0].start_byte : pending[-1].end_byte].decode("utf-8").rstrip())
        )

    return items


def struct_from_node(node: Node, src: bytes, decorations: tuple[Decoration, ...]) -> StructDecl:
    name_node = node.child_by_field_name("name")
    assert name_node is not None, "struct items always have a name"

    visibility = ""
    where_clause = ""
    for child in node.named_children:
        match child.type:
            case "visibility_modifier":
                visibility = normalized_text(child, src)
            case "where_clause":
                where_clause = normalized_text(child, src)

    type_parameters = node.child_by_field_name("type_parameters")
    generics = normalized_text(type_parameters, src) if type_parameters is not None else ""

    body = node.child_by_field_name("body")
    if body is None:
        shape, fields = StructShape.UNIT, []
    elif body.type == "field_declaration_list":
        shape, fields = StructShape.NAMED, named_fields(body, src)
    else:
        shape, fields = StructShape.TUPLE, tuple_fields(body, src)

    return StructDecl(
        name=node_text(name_node, src),
        fields=tuple(fields),
        shape=shape,
        visibility=visibility,
        generics=generics,
        where_clause=where_clause,
        decorations=decorations,
    )


def named_fields(body: Node, src: bytes) -> list[Field]:
    fields = []
    pending: list[Decoration] = []
    for child in body.named_children:
        if is_outer_decoration(child, src):
            pending.append(decoration_from_node(child, src))
        elif child.type == "field_declaration":
            name_node = child.child_by_field_name("name")
            type_node = child.child_by_field_name("type")
            assert name_node is not None and type_node is not None
            visibility = ""
            for part in child.named_children:
                if part.type == "visibility_modifier":
                    visibility = normalized_text(part, src)
            fields.append(
                Field(
                    name=node_text(name_node, src),
                    ty=type_from_node(type_node, src),
                    visibility=visibility,
                    decorations=tuple(pending),
                )
            )
            pending = []
        # Plain comments between fields are not part of the struct.
    return fields


def tuple_fields(body: Node, src: bytes) -> list[Field]:
    fields = []
    pending: list[Decoration] = []
    visibility = ""
    for child in body.named_children:
        if is_outer_decoration(child, src):
            pending.append(decoration_from_node(child, src))
        elif child.type == "visibility_modifier":
            visibility = normalized_text(child, src)
        elif child.type not in COMMENT_NODE_TYPES:
            fields.append(
                Field(
                    name=None,
                    ty=type_from_node(child, src),
                    visibility=visibility,
                    decorations=tuple(pending),
                )
            )
            pending = []
            visibility = ""
    return fields


def type_from_node(node: Node, src: bytes) -> TypeExpr:
    match node.type:
        case "type_identifier" | "primitive_type":
            return PathType((PathSegment(node_text(node, src)),))

        case "scoped_type_identifier":
            segments = scoped_path_segments(node, src)
            if segments is None:
                return OtherType(normalized_text(node, src))
            return PathType(segments)

        case "generic_type":
            type_node = node.child_by_field_name("type")
            args_node = node.child_by_field_name("type_arguments")
            base = type_from_node(type_node, src) if type_node is not None else None
            if not isinstance(base, PathType) or args_node is None:
                return OtherType(normalized_text(node, src))
            args = tuple(
                type_from_node(arg, src)
                for arg in args_node.named_children
                if arg.type not in COMMENT_NODE_TYPES
            )
            last = PathSegment(base.segments[-1].name, args)
            return PathType(base.segments[:-1] + (last,))

        case _:
            return OtherType(normalized_text(node, src))


def scoped_path_segments(node: Node, src: bytes) -> tuple[PathSegment, ...] | None:
    """Segments of `a::b::C`, or None for paths we don't model (`::C`, `<T as X>::C`, ...)."""
    path_node = node.child_by_field_name("path")
    name_node = node.child_by_field_name("name")
    if path_node is None or name_node is None:
        return None

    parts = [part.strip() for part in node_text(path_node, src).split("::")]
    if not all(part.isidentifier() for part in parts):
        return None

    return tuple(PathSegment(part) for part in [*parts, node_text(name_node, src)])
