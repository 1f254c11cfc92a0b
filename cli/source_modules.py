from dataclasses import dataclass, field
from pathlib import Path

import click

from constants import (
    INDEX_MODULE_FILENAME,
    LOG_PREFIX,
    RUST_SOURCE_SUFFIX,
    SHARED_TYPES_MODULE_NAME,
)
from dedup_report import SkippedModuleRecord
import rust_parsing
from rust_syntax import SourceModule


def enumerate_source_files(input_dir: Path) -> list[Path]:
    """Rust files directly inside `input_dir`, in name order.

    The index module and a shared module left by an earlier run are not inputs."""
    excluded = {INDEX_MODULE_FILENAME, SHARED_TYPES_MODULE_NAME + RUST_SOURCE_SUFFIX}
    return sorted(
        p
        for p in input_dir.glob("*" + RUST_SOURCE_SUFFIX)
        if p.is_file() and p.name not in excluded
    )


@dataclass
class LoadedModules:
    modules: list[SourceModule] = field(default_factory=list)
    skipped: list[SkippedModuleRecord] = field(default_factory=list)


def load_source_modules(input_dir: Path) -> LoadedModules:
    """Read and parse every source module. Files that can't be read or parsed are skipped."""
    loaded = LoadedModules()
    for path in enumerate_source_files(input_dir):
        try:
            source = path.read_text(encoding="utf-8")
            loaded.modules.append(rust_parsing.parse_rust_module(path.stem, source))
        except (OSError, UnicodeDecodeError, rust_parsing.RustParseError) as e:
            click.echo(f"{LOG_PREFIX} skipping {path.name}: {e}", err=True)
            loaded.skipped.append(SkippedModuleRecord(path=path.as_posix(), reason=str(e)))
    return loaded
