from pathlib import Path
from typing import Sequence

from constants import (
    GENERATED_BANNER,
    INDEX_MODULE_FILENAME,
    RUST_SOURCE_SUFFIX,
    SHARED_TYPES_FILE_PREAMBLE,
    SHARED_TYPES_MODULE_NAME,
)
import rust_printing
from rust_syntax import SourceModule
import substitutions
from type_dedup import DedupPlan


class OutputBatch:
    """
    Context manager collecting the files of one run before writing any of them.
    Files are only written if the `with` block completes; a failure while
    rendering leaves the output directory untouched. A failure while writing
    propagates and leaves already-written files in place.
    """

    def __init__(self, output_dir: Path):
        if not output_dir.is_dir():
            raise NotADirectoryError(f"Output path {output_dir} must be an existing directory")
        self.output_dir = output_dir
        self.contents: dict[str, str] = {}
        self.written: list[Path] = []

    def add_file(self, filename: str, text: str):
        self.contents[filename] = text

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            return False  # propagate exception

        self.write_files()

    def write_files(self):
        for filename, text in self.contents.items():
            path = self.output_dir / filename
            path.write_text(text, encoding="utf-8")
            self.written.append(path)


def render_source_module(module: SourceModule, shared_import: str) -> str:
    return (
        f"{GENERATED_BANNER}\n"
        f"use {shared_import}::*;\n\n"
        + rust_printing.render_items(module.items)
    )


def render_shared_types_module(plan: DedupPlan) -> str:
    decls = [shared.decl for shared in plan.shared_types]
    return (
        f"{GENERATED_BANNER}\n"
        f"{SHARED_TYPES_FILE_PREAMBLE}\n\n\n"
        + rust_printing.render_items(decls)
    )


def render_index_module(module_names: Sequence[str]) -> str:
    lines = [GENERATED_BANNER]
    lines.extend(f"pub mod {name};" for name in module_names)
    lines.append(f"pub mod {SHARED_TYPES_MODULE_NAME};")
    return "\n".join(lines) + "\n"


def add_outputs(
    batch: OutputBatch,
    rewritten: Sequence[tuple[SourceModule, bool]],
    plan: DedupPlan,
    shared_import: str,
    persist_names: bool,
):
    """Queue every output of a run. Unchanged modules are not rewritten."""
    for module, changed in rewritten:
        if changed:
            batch.add_file(
                module.name + RUST_SOURCE_SUFFIX, render_source_module(module, shared_import)
            )

    batch.add_file(
        SHARED_TYPES_MODULE_NAME + RUST_SOURCE_SUFFIX, render_shared_types_module(plan)
    )
    batch.add_file(INDEX_MODULE_FILENAME, render_index_module([m.name for m, _ in rewritten]))

    if persist_names:
        for filename, text in substitutions.substitution_artifacts(plan.rename_map).items():
            batch.add_file(filename, text)
