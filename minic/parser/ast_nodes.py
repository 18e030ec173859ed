"""
Abstract Syntax Tree node definitions for MiniC.

Every node owns an ordered list of children and nothing else points back
at it, so dropping the root releases the whole tree. Each variant is a
thin subclass that gives names to the positional children.

Author: xwest
"""

from abc import ABC
from typing import List, Optional, Any
from enum import Enum

from ..lexer.tokens import TokenType


class ASTNodeType(Enum):
    """Enumeration of all AST node kinds (the value is the printed name)."""

    PROGRAM = "Program"
    FUNCTION = "Function"
    RETURN_TYPE = "ReturnType"
    BLOCK = "Block"

    VAR_DECL = "VarDecl"
    TYPE = "Type"
    NAME = "Name"
    ASSIGNMENT = "Assignment"
    RETURN = "Return"

    BINARY_OP = "BinaryOp"
    CALL = "Call"
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"


class ASTVisitor(ABC):
    """
    Visitor base with per-kind dispatch.

    Subclasses implement `visit_<Kind>` methods (e.g. `visit_VarDecl`);
    kinds without a handler go to `generic_visit`, which visits children.
    """

    def visit(self, node: "ASTNode") -> Any:
        method = getattr(self, f"visit_{node.node_type.value}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: "ASTNode") -> Any:
        for child in node.children:
            self.visit(child)
        return None


class ASTNode:
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, value: Optional[str] = None,
                 children: Optional[List["ASTNode"]] = None):
        self.node_type = node_type
        self.value = value
        self.children: List[ASTNode] = list(children) if children else []

        # Filled in by the semantic analyzer only
        self.inferred_type: Optional[str] = None
        self.is_declared = False

    @property
    def kind(self) -> str:
        return self.node_type.value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit(self)

    def walk(self):
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __str__(self) -> str:
        if self.value:
            return f"{self.kind}: {self.value}"
        return self.kind

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value!r}, children={len(self.children)})"


# ============================================================================
# Top-level nodes
# ============================================================================

class Program(ASTNode):
    """Root node: functions and top-level statements in source order."""

    def __init__(self, items: Optional[List[ASTNode]] = None):
        super().__init__(ASTNodeType.PROGRAM, None, items)

    @property
    def items(self) -> List[ASTNode]:
        return self.children

    def functions(self) -> List["Function"]:
        return [item for item in self.children if isinstance(item, Function)]


class ReturnType(ASTNode):
    def __init__(self, name: str):
        super().__init__(ASTNodeType.RETURN_TYPE, name)


class Block(ASTNode):
    def __init__(self, statements: Optional[List[ASTNode]] = None):
        super().__init__(ASTNodeType.BLOCK, None, statements)

    @property
    def statements(self) -> List[ASTNode]:
        return self.children


class Function(ASTNode):
    """Function definition: children are [ReturnType, Block]."""

    def __init__(self, name: str, return_type: ReturnType, body: Optional[Block]):
        children: List[ASTNode] = [return_type]
        if body is not None:
            children.append(body)
        super().__init__(ASTNodeType.FUNCTION, name, children)

    @property
    def name(self) -> str:
        return self.value

    @property
    def body(self) -> Optional[Block]:
        for child in self.children:
            if isinstance(child, Block):
                return child
        return None


# ============================================================================
# Statements
# ============================================================================

class TypeName(ASTNode):
    """Declared type keyword of a VarDecl (printed as `Type`)."""

    def __init__(self, name: str):
        super().__init__(ASTNodeType.TYPE, name)


class Name(ASTNode):
    """Declared variable name of a VarDecl."""

    def __init__(self, name: str):
        super().__init__(ASTNodeType.NAME, name)


class VarDecl(ASTNode):
    """Variable declaration: children are [Type, Name, initializer?]."""

    def __init__(self, type_name: str, name: str, initializer: Optional["ASTNode"] = None):
        children: List[ASTNode] = [TypeName(type_name), Name(name)]
        if initializer is not None:
            children.append(initializer)
        super().__init__(ASTNodeType.VAR_DECL, None, children)

    @property
    def declared_type(self) -> str:
        return self.children[0].value

    @property
    def name(self) -> str:
        return self.children[1].value

    @property
    def initializer(self) -> Optional[ASTNode]:
        return self.children[2] if len(self.children) > 2 else None


class Assignment(ASTNode):
    """`name = expr;` - the target name is the node value."""

    def __init__(self, name: str, expression: ASTNode):
        super().__init__(ASTNodeType.ASSIGNMENT, name, [expression])

    @property
    def name(self) -> str:
        return self.value

    @property
    def expression(self) -> ASTNode:
        return self.children[0]


class Return(ASTNode):
    def __init__(self, expression: Optional[ASTNode] = None):
        super().__init__(ASTNodeType.RETURN, None, [expression] if expression is not None else None)

    @property
    def expression(self) -> Optional[ASTNode]:
        return self.children[0] if self.children else None


# ============================================================================
# Expressions
# ============================================================================

class BinaryOp(ASTNode):
    """One arithmetic operator; the operator symbol is the node value."""

    def __init__(self, operator: str, left: ASTNode, right: ASTNode):
        super().__init__(ASTNodeType.BINARY_OP, operator, [left, right])

    @property
    def operator(self) -> str:
        return self.value

    @property
    def left(self) -> ASTNode:
        return self.children[0]

    @property
    def right(self) -> ASTNode:
        return self.children[1]


class Call(ASTNode):
    """Call of a named function with operand arguments."""

    def __init__(self, name: str, args: Optional[List[ASTNode]] = None):
        super().__init__(ASTNodeType.CALL, name, args)

    @property
    def name(self) -> str:
        return self.value

    @property
    def args(self) -> List[ASTNode]:
        return self.children


class Identifier(ASTNode):
    def __init__(self, name: str):
        super().__init__(ASTNodeType.IDENTIFIER, name)

    @property
    def name(self) -> str:
        return self.value


class Literal(ASTNode):
    """
    Literal operand. The value is the raw lexeme, so a character literal
    keeps its quotes (`'a'`).
    """

    def __init__(self, text: str, literal_type: TokenType = TokenType.INTEGER):
        super().__init__(ASTNodeType.LITERAL, text)
        self.literal_type = literal_type

    @property
    def text(self) -> str:
        return self.value


def format_ast(node: Optional[ASTNode], indent: int = 0) -> str:
    """Indented tree printout: `• <kind>[: <value>]`, two spaces per level."""
    if node is None:
        return ""

    lines = [" " * (indent * 2) + "• " + str(node) + "\n"]
    for child in node.children:
        lines.append(format_ast(child, indent + 1))
    return "".join(lines)


# Alias for the main AST type
AST = Program
