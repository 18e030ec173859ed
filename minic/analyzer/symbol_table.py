"""
Flat symbol table for MiniC semantic analysis.

There is exactly one scope. Names are unique: the first declaration wins
and a later one is reported by the analyzer instead of replacing it.

Author: xwest
"""

from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass

from ..lexer.tokens import SourceLocation


UNKNOWN_TYPE = "unknown"


@dataclass
class Symbol:
    """A declared variable."""
    name: str
    type_name: str
    location: Optional[SourceLocation] = None

    def __str__(self) -> str:
        return f"{self.name}: {self.type_name}"


class SymbolTable:
    """Single global scope mapping names to declared type names."""

    def __init__(self):
        self._symbols: Dict[str, Symbol] = {}

    def declare(self, name: str, type_name: str,
                location: Optional[SourceLocation] = None) -> bool:
        """
        Record a declaration.

        Returns:
            False if the name was already declared (the table is unchanged)
        """
        if name in self._symbols:
            return False
        self._symbols[name] = Symbol(name, type_name, location)
        return True

    def lookup(self, name: str) -> Optional[str]:
        """Declared type of `name`, or None."""
        symbol = self._symbols.get(name)
        return symbol.type_name if symbol else None

    def lookup_symbol(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def type_of(self, name: str) -> str:
        """Declared type of `name`, or "unknown"."""
        return self.lookup(name) or UNKNOWN_TYPE

    def clear(self):
        self._symbols.clear()

    def names(self) -> List[str]:
        return list(self._symbols)

    def items(self) -> Iterator[Tuple[str, str]]:
        for name, symbol in self._symbols.items():
            yield name, symbol.type_name

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __str__(self) -> str:
        entries = ", ".join(str(s) for s in self._symbols.values())
        return f"SymbolTable({entries})"
