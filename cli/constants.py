# Fixed names of the artifacts produced in the output directory.
RUST_SOURCE_SUFFIX = ".rs"
INDEX_MODULE_FILENAME = "mod.rs"
SHARED_TYPES_MODULE_NAME = "shared_types"
SUBSTITUTION_NAMES_FILENAME = "shared_types_names.txt"
SUBSTITUTION_MAPPING_FILENAME = "shared_types_mapping.txt"

DEFAULT_SHARED_TYPE_PREFIX = "Shared"
DEFAULT_SHARED_IMPORT_PATH = "super::shared_types"

# Field types (bare, or as generic arguments at any depth) allowed in a deduplicable struct.
SIMPLE_FIELD_TYPE_NAMES = frozenset({"String", "i32"})

# Separator used by substitution files, one `name->name` pair per line.
SUBSTITUTION_SEPARATOR = "->"

LOG_PREFIX = "XJ-SHARED-TYPES:"

GENERATED_BANNER = (
    "// WARNING: generated by xj-shared-types - manual changes will be overwritten"
)

# The shared module is not generated by kopium, so it has to bring in by itself
# everything the derives and field types of the copied structs refer to.
SHARED_TYPES_FILE_PREAMBLE = """#[allow(unused_imports)]
mod prelude {
    pub use k8s_openapi::apimachinery::pkg::apis::meta::v1::Condition;
    pub use kube::CustomResource;
    pub use schemars::JsonSchema;
    pub use serde::{Deserialize, Serialize};
    pub use std::collections::BTreeMap;
}
use self::prelude::*;"""
