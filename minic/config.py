"""
Compiler configuration for MiniC.

Everything the pipeline treats as a closed-world assumption lives here so
that the CLI (or an embedding host) can override it without touching the
stages themselves.

Author: xwest
"""

from dataclasses import dataclass, replace
from typing import Iterable, Tuple


# Functions the semantic analyzer accepts as defined
DEFAULT_KNOWN_FUNCTIONS: Tuple[str, ...] = ("main", "add", "sub")

# (source type name, IR storage type) pairs
DEFAULT_STORAGE_TYPES: Tuple[Tuple[str, str], ...] = (
    ("int", "i32"),
    ("float", "float"),
    ("char", "i8"),
)

FOLD_BANNER = "; Optimized IR"


@dataclass(frozen=True)
class CompilerConfig:
    """Tunable knobs for one pipeline run."""
    known_functions: Tuple[str, ...] = DEFAULT_KNOWN_FUNCTIONS
    watch_variable: str = "c"   # reported from the reference interpreter
    fold_banner: str = FOLD_BANNER
    storage_types: Tuple[Tuple[str, str], ...] = DEFAULT_STORAGE_TYPES
    default_storage_type: str = "i32"

    def with_known_functions(self, extra: Iterable[str]) -> "CompilerConfig":
        """Return a copy whose whitelist also contains `extra`."""
        names = list(self.known_functions)
        for name in extra:
            if name not in names:
                names.append(name)
        return replace(self, known_functions=tuple(names))

    def storage_type(self, source_type: str) -> str:
        return dict(self.storage_types).get(source_type, self.default_storage_type)


DEFAULT_CONFIG = CompilerConfig()
