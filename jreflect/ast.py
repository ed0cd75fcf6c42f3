"""
Immutable AST for Java method declarations.
All nodes are frozen dataclasses for immutability.
"""

from dataclasses import dataclass
from typing import Optional
from abc import ABC
import json


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def to_dict(self) -> dict:
        """Convert node to dictionary for JSON serialization."""
        result = {"_type": self.__class__.__name__}
        for key, value in self.__dict__.items():
            if key.startswith("_"):
                continue
            result[key] = _serialize_value(value)
        return result

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def _serialize_value(value):
    """Helper to serialize a value for JSON."""
    if value is None:
        return None
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, str)):
        return value
    return str(value)


@dataclass(frozen=True)
class Annotation(ASTNode):
    """Marker annotation: @Name"""
    name: str


@dataclass(frozen=True)
class Modifier(ASTNode):
    """A modifier keyword or annotation."""
    keyword: Optional[str]
    annotation: Optional[Annotation]


@dataclass(frozen=True)
class TypeParameter(ASTNode):
    """Type parameter: T or T extends Bound"""
    name: str
    bounds: tuple["Type", ...]


class Type(ASTNode):
    """Base class for types."""
    pass


@dataclass(frozen=True)
class PrimitiveType(Type):
    """Primitive type, including void for method results."""
    name: str


@dataclass(frozen=True)
class ClassType(Type):
    """Class or interface type, possibly parameterized."""
    name: str
    type_arguments: tuple["TypeArgument", ...]


@dataclass(frozen=True)
class ArrayType(Type):
    element_type: Type
    dimensions: int


@dataclass(frozen=True)
class TypeArgument(ASTNode):
    """A type argument: a type or a wildcard."""
    type: Optional[Type]
    wildcard: Optional[str]  # None, "?", "extends", "super"


@dataclass(frozen=True)
class MethodDeclaration(ASTNode):
    """Method declaration."""
    modifiers: tuple[Modifier, ...]
    type_parameters: tuple[TypeParameter, ...]
    return_type: Type
    name: str
    parameters: tuple["FormalParameter", ...]
    throws: tuple[Type, ...]
    body: Optional["Block"]
    context: Optional[str] = None  # owning class the method was created for

    @property
    def keywords(self) -> tuple[str, ...]:
        return tuple(m.keyword for m in self.modifiers if m.keyword)

    @property
    def is_static(self) -> bool:
        return "static" in self.keywords

    @property
    def is_public(self) -> bool:
        return "public" in self.keywords


@dataclass(frozen=True)
class VariableDeclarator(ASTNode):
    name: str
    dimensions: int
    initializer: Optional["Expression"]


@dataclass(frozen=True)
class FormalParameter(ASTNode):
    modifiers: tuple[Modifier, ...]
    type: Type
    varargs: bool
    name: str


# ==================== STATEMENTS ====================

class Statement(ASTNode):
    """Base class for statements."""
    pass


@dataclass(frozen=True)
class Block(Statement):
    statements: tuple[Statement, ...]


@dataclass(frozen=True)
class LocalVariableDeclaration(Statement):
    modifiers: tuple[Modifier, ...]
    type: Type
    declarators: tuple[VariableDeclarator, ...]


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: "Expression"


@dataclass(frozen=True)
class IfStatement(Statement):
    condition: "Expression"
    then_branch: Statement
    else_branch: Optional[Statement]


@dataclass(frozen=True)
class WhileStatement(Statement):
    condition: "Expression"
    body: Statement


@dataclass(frozen=True)
class ReturnStatement(Statement):
    expression: Optional["Expression"]


@dataclass(frozen=True)
class ThrowStatement(Statement):
    expression: "Expression"


@dataclass(frozen=True)
class TryStatement(Statement):
    body: Block
    catches: tuple["CatchClause", ...]
    finally_block: Optional[Block]


@dataclass(frozen=True)
class CatchClause(ASTNode):
    modifiers: tuple[Modifier, ...]
    types: tuple[Type, ...]  # multi-catch: catch (A | B e)
    name: str
    body: Block


@dataclass(frozen=True)
class EmptyStatement(Statement):
    pass


# ==================== EXPRESSIONS ====================

class Expression(ASTNode):
    """Base class for expressions."""
    pass


@dataclass(frozen=True)
class Literal(Expression):
    value: str
    kind: str  # "int", "long", "float", "double", "char", "string", "boolean", "null"


@dataclass(frozen=True)
class Identifier(Expression):
    name: str


@dataclass(frozen=True)
class ThisExpression(Expression):
    pass


@dataclass(frozen=True)
class ClassLiteral(Expression):
    type: Type


@dataclass(frozen=True)
class FieldAccess(Expression):
    target: Expression
    field: str


@dataclass(frozen=True)
class ArrayAccess(Expression):
    array: Expression
    index: Expression


@dataclass(frozen=True)
class MethodInvocation(Expression):
    target: Optional[Expression]
    method: str
    arguments: tuple[Expression, ...]


@dataclass(frozen=True)
class NewInstance(Expression):
    type: Type
    arguments: tuple[Expression, ...]


@dataclass(frozen=True)
class Assignment(Expression):
    target: Expression
    operator: str
    value: Expression


@dataclass(frozen=True)
class BinaryExpression(Expression):
    left: Expression
    operator: str
    right: Expression


@dataclass(frozen=True)
class UnaryExpression(Expression):
    operator: str
    operand: Expression


@dataclass(frozen=True)
class CastExpression(Expression):
    type: Type
    expression: Expression


@dataclass(frozen=True)
class InstanceOfExpression(Expression):
    expression: Expression
    type: Type


@dataclass(frozen=True)
class ConditionalExpression(Expression):
    condition: Expression
    then_expr: Expression
    else_expr: Expression
