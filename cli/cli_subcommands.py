import pprint
from pathlib import Path

import click

from constants import LOG_PREFIX
from dedup_report import DedupReport, build_report
import module_emitter
import source_modules
import substitutions
import type_dedup
import type_rewriting
from word_segmentation import break_into_words


def do_split_words(identifiers: list[str]):
    for identifier in identifiers:
        click.echo(" ".join(break_into_words(identifier)))


def echo_classification(modules):
    for module in modules:
        for decl in module.struct_decls():
            simple = type_dedup.is_simple_leaf(decl)
            click.echo(f"{LOG_PREFIX} {module.name}::{decl.name} simple leaf: {simple}", err=True)


def do_dedupe(
    input_dir: Path,
    output_dir: Path,
    substitutions_path: Path | None,
    prefix: str,
    shared_import: str,
    report_path: Path | None = None,
    verbose: bool = False,
) -> DedupReport:
    """Fold duplicated simple structs from the modules in `input_dir` into a shared module
    written to `output_dir`, along with every module that had to change."""
    # Opening a fresh batch checks the output directory before we do any work.
    batch = module_emitter.OutputBatch(output_dir)

    loaded = source_modules.load_source_modules(input_dir)
    if verbose:
        echo_classification(loaded.modules)

    subs = None
    if substitutions_path is not None:
        substitution_file = substitutions.read_substitutions(substitutions_path)
        subs = substitution_file.substitutions
        if verbose:
            for lineno, line in substitution_file.ignored_lines:
                click.echo(
                    f"{LOG_PREFIX} ignoring {substitutions_path.name}:{lineno}: {line!r}",
                    err=True,
                )

    plan = type_dedup.plan_shared_types(loaded.modules, subs, prefix)
    if verbose:
        click.echo(f"{LOG_PREFIX} rename map:\n{pprint.pformat(plan.rename_map)}", err=True)
    for name in plan.colliding_shared_names():
        click.echo(
            f"{LOG_PREFIX} WARNING: several unrelated structs would be named {name};"
            " add a substitution to tell them apart",
            err=True,
        )
    for name in plan.conflicting_originals:
        click.echo(
            f"{LOG_PREFIX} WARNING: {name} is declared with different fields in several"
            f" modules; using {plan.rename_map[name]}",
            err=True,
        )

    rewritten = type_rewriting.apply_rename_map(loaded.modules, plan.rename_map)

    with batch:
        module_emitter.add_outputs(
            batch,
            rewritten,
            plan,
            shared_import,
            persist_names=substitutions_path is None,
        )

    report = build_report(plan, loaded.skipped, [p.name for p in batch.written])
    if report_path is not None:
        report_path.write_text(report.to_json(indent=2), encoding="utf-8")

    changed_count = sum(1 for _, changed in rewritten if changed)
    click.echo(
        f"{LOG_PREFIX} {len(plan.shared_types)} shared types replace"
        f" {len(plan.rename_map)} structs; rewrote {changed_count} of"
        f" {len(rewritten)} modules",
        err=True,
    )
    return report
