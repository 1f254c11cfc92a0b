from dataclasses import dataclass

from dataclasses_json import dataclass_json, DataClassJsonMixin

from type_dedup import DedupPlan


@dataclass_json
@dataclass
class SharedTypeMember:
    module: str
    original_name: str


@dataclass_json
@dataclass
class SharedTypeRecord:
    name: str
    auto_name: str  # differs from `name` when a substitution file renamed it
    members: list[SharedTypeMember]


@dataclass_json
@dataclass
class SkippedModuleRecord:
    path: str
    reason: str


@dataclass
class DedupReport(DataClassJsonMixin):  # mixin for better type inference
    shared_types: list[SharedTypeRecord]
    rename_map: dict[str, str]
    skipped_modules: list[SkippedModuleRecord]
    written_files: list[str]


def build_report(
    plan: DedupPlan, skipped: list[SkippedModuleRecord], written_files: list[str]
) -> DedupReport:
    return DedupReport(
        shared_types=[
            SharedTypeRecord(
                name=shared.name,
                auto_name=shared.auto_name,
                members=[
                    SharedTypeMember(module=m.module_name, original_name=m.decl.name)
                    for m in shared.members
                ],
            )
            for shared in plan.shared_types
        ],
        rename_map=dict(sorted(plan.rename_map.items())),
        skipped_modules=skipped,
        written_files=written_files,
    )
