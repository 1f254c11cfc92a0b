from typing import Iterable

from rust_syntax import (
    Decoration,
    Field,
    Item,
    OpaqueItem,
    OtherType,
    PathSegment,
    PathType,
    StructDecl,
    StructShape,
    TypeExpr,
)

INDENT = "    "


def render_type(ty: TypeExpr) -> str:
    match ty:
        case PathType(segments=segments):
            return "::".join(render_segment(s) for s in segments)
        case OtherType(text=text):
            return text
    raise ValueError(f"Unexpected type expression: {ty!r}")


def render_segment(segment: PathSegment) -> str:
    if segment.args is None:
        return segment.name
    return f"{segment.name}<{', '.join(render_type(arg) for arg in segment.args)}>"


def render_decorations(decorations: Iterable[Decoration], indent: str) -> list[str]:
    return [indent + d.text for d in decorations]


def render_field(field: Field) -> list[str]:
    lines = render_decorations(field.decorations, INDENT)
    declared = render_type(field.ty)
    if field.name is not None:
        declared = f"{field.name}: {declared}"
    if field.visibility:
        declared = f"{field.visibility} {declared}"
    lines.append(f"{INDENT}{declared},")
    return lines


def render_struct(decl: StructDecl) -> str:
    """Render a struct the way rustfmt lays out generated code."""
    lines = render_decorations(decl.decorations, "")

    head = f"struct {decl.name}{decl.generics}"
    if decl.visibility:
        head = f"{decl.visibility} {head}"
    where = f" {decl.where_clause}" if decl.where_clause else ""

    match decl.shape:
        case StructShape.UNIT:
            lines.append(f"{head}{where};")

        case StructShape.TUPLE:
            if any(f.decorations for f in decl.fields):
                lines.append(f"{head}(")
                for field in decl.fields:
                    lines.extend(render_field(field))
                lines.append(f"){where};")
            else:
                elements = ", ".join(
                    f"{f.visibility} {render_type(f.ty)}" if f.visibility else render_type(f.ty)
                    for f in decl.fields
                )
                lines.append(f"{head}({elements}){where};")

        case StructShape.NAMED:
            if not decl.fields:
                lines.append(f"{head}{where} {{}}")
            else:
                lines.append(f"{head}{where} {{")
                for field in decl.fields:
                    lines.extend(render_field(field))
                lines.append("}")

    return "\n".join(lines)


def render_item(item: Item) -> str:
    match item:
        case StructDecl():
            return render_struct(item)
        case OpaqueItem(text=text):
            return text
    raise ValueError(f"Unexpected item: {item!r}")


def render_items(items: Iterable[Item]) -> str:
    """Render top-level items separated by blank lines, with a trailing newline."""
    rendered = [render_item(item) for item in items]
    if not rendered:
        return ""
    return "\n\n".join(rendered) + "\n"
