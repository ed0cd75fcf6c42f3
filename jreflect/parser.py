"""
Java method declaration parser using Lark.
"""

import re
from pathlib import Path
from lark import Lark, Transformer, Token
from lark.exceptions import UnexpectedInput
from . import ast
from .types import MethodParseError


GRAMMAR_FILE = Path(__file__).parent / "java_method.lark"

# An escape is only live when preceded by an even number of backslashes.
_UNICODE_ESCAPE = re.compile(r"(?<!\\)((?:\\\\)*)\\u+([0-9a-fA-F]{4})")


def preprocess_unicode_escapes(source: str) -> str:
    r"""
    Preprocess Unicode escapes in Java source code.
    Java requires \\uXXXX escapes to be processed before lexical analysis.
    """
    return _UNICODE_ESCAPE.sub(lambda m: m.group(1) + chr(int(m.group(2), 16)), source)


class MethodTransformer(Transformer):
    """Transforms Lark parse tree to AST nodes."""

    def _token_value(self, items, token_type: str):
        for item in items:
            if isinstance(item, Token) and item.type == token_type:
                return str(item)
        return None

    # ==================== DECLARATIONS ====================

    def start(self, items):
        return items[0]

    def method_declaration(self, items):
        modifiers = []
        type_params = ()
        return_type = None
        name = None
        params = ()
        throws = ()
        body = None

        for item in items:
            if isinstance(item, ast.Modifier):
                modifiers.append(item)
            elif isinstance(item, tuple) and item and isinstance(item[0], ast.TypeParameter):
                type_params = item
            elif isinstance(item, ast.Type) and return_type is None:
                return_type = item
            elif isinstance(item, Token) and item.type == "IDENTIFIER":
                name = str(item)
            elif isinstance(item, tuple) and (not item or isinstance(item[0], ast.FormalParameter)):
                params = item
            elif isinstance(item, tuple) and item and isinstance(item[0], ast.Type):
                throws = item
            elif isinstance(item, ast.Block):
                body = item

        return ast.MethodDeclaration(
            modifiers=tuple(modifiers),
            type_parameters=type_params,
            return_type=return_type or ast.PrimitiveType(name="void"),
            name=name or "",
            parameters=params,
            throws=throws,
            body=body,
        )

    def modifier_keyword(self, items):
        return ast.Modifier(keyword=str(items[0]), annotation=None)

    def final_modifier(self, items):
        return ast.Modifier(keyword="final", annotation=None)

    def annotation(self, items):
        return ast.Modifier(keyword=None, annotation=ast.Annotation(name=str(items[0])))

    def qualified_name(self, items):
        return ".".join(str(item) for item in items)

    def result(self, items):
        for item in items:
            if isinstance(item, ast.Type):
                return item
        return ast.PrimitiveType(name="void")

    def formal_parameters(self, items):
        return tuple(item for item in items if isinstance(item, ast.FormalParameter))

    def formal_parameter(self, items):
        modifiers = []
        param_type = None
        varargs = False

        for item in items:
            if isinstance(item, ast.Modifier):
                modifiers.append(item)
            elif isinstance(item, ast.Type):
                param_type = item
            elif isinstance(item, Token) and item.type == "ELLIPSIS":
                varargs = True

        return ast.FormalParameter(
            modifiers=tuple(modifiers),
            type=param_type,
            varargs=varargs,
            name=self._token_value(items, "IDENTIFIER") or "",
        )

    def throws_clause(self, items):
        return tuple(item for item in items if isinstance(item, ast.Type))

    def method_body(self, items):
        for item in items:
            if isinstance(item, ast.Block):
                return item
        return None

    # ==================== TYPES ====================

    def type(self, items):
        element_type = items[0]
        if len(items) > 1 and isinstance(items[1], int):
            return ast.ArrayType(element_type=element_type, dimensions=items[1])
        return element_type

    def primitive_type(self, items):
        return ast.PrimitiveType(name=str(items[0]))

    def class_type(self, items):
        names = []
        type_args = ()
        for name, args in items:
            names.append(name)
            if args:
                type_args = args
        return ast.ClassType(name=".".join(names), type_arguments=type_args)

    def class_type_part(self, items):
        args = ()
        for item in items:
            if isinstance(item, tuple):
                args = item
        return (self._token_value(items, "IDENTIFIER"), args)

    def type_arguments(self, items):
        return tuple(item for item in items if isinstance(item, ast.TypeArgument))

    def type_argument(self, items):
        item = items[0]
        if isinstance(item, ast.TypeArgument):
            return item
        return ast.TypeArgument(type=item, wildcard=None)

    def wildcard(self, items):
        if not items:
            return ast.TypeArgument(type=None, wildcard="?")
        kind, bound = items[0]
        return ast.TypeArgument(type=bound, wildcard=kind)

    def wildcard_bound(self, items):
        return (str(items[0]), items[1])

    def type_parameters(self, items):
        return tuple(item for item in items if isinstance(item, ast.TypeParameter))

    def type_parameter(self, items):
        bounds = ()
        for item in items:
            if isinstance(item, tuple):
                bounds = item
        return ast.TypeParameter(name=self._token_value(items, "IDENTIFIER"), bounds=bounds)

    def type_bound(self, items):
        return tuple(item for item in items if isinstance(item, ast.Type))

    def dims(self, items):
        return sum(items)

    def dim(self, items):
        return 1

    # ==================== STATEMENTS ====================

    def block(self, items):
        return ast.Block(statements=tuple(item for item in items if isinstance(item, ast.Statement)))

    def local_variable_declaration(self, items):
        modifiers = []
        var_type = None
        declarators = []

        for item in items:
            if isinstance(item, ast.Modifier):
                modifiers.append(item)
            elif isinstance(item, ast.Type):
                var_type = item
            elif isinstance(item, ast.VariableDeclarator):
                declarators.append(item)

        return ast.LocalVariableDeclaration(
            modifiers=tuple(modifiers),
            type=var_type,
            declarators=tuple(declarators),
        )

    def variable_declarator(self, items):
        dims = 0
        initializer = None
        for item in items:
            if isinstance(item, int) and not isinstance(item, bool):
                dims = item
            elif isinstance(item, ast.Expression):
                initializer = item
        return ast.VariableDeclarator(
            name=self._token_value(items, "IDENTIFIER"),
            dimensions=dims,
            initializer=initializer,
        )

    def if_statement(self, items):
        return ast.IfStatement(
            condition=items[0],
            then_branch=items[1],
            else_branch=items[2] if len(items) > 2 else None,
        )

    def while_statement(self, items):
        return ast.WhileStatement(condition=items[0], body=items[1])

    def try_statement(self, items):
        body = None
        catches = []
        finally_block = None

        for item in items:
            if isinstance(item, ast.Block) and body is None:
                body = item
            elif isinstance(item, ast.CatchClause):
                catches.append(item)
            elif isinstance(item, ast.Block):
                finally_block = item

        return ast.TryStatement(body=body, catches=tuple(catches), finally_block=finally_block)

    def catch_clause(self, items):
        modifiers = []
        types = ()
        body = None

        for item in items:
            if isinstance(item, ast.Modifier):
                modifiers.append(item)
            elif isinstance(item, tuple):
                types = item
            elif isinstance(item, ast.Block):
                body = item

        return ast.CatchClause(
            modifiers=tuple(modifiers),
            types=types,
            name=self._token_value(items, "IDENTIFIER"),
            body=body,
        )

    def catch_type(self, items):
        return tuple(item for item in items if isinstance(item, ast.Type))

    def finally_clause(self, items):
        return items[0]

    def return_statement(self, items):
        return ast.ReturnStatement(expression=items[0] if items else None)

    def throw_statement(self, items):
        return ast.ThrowStatement(expression=items[0])

    def expression_statement(self, items):
        return ast.ExpressionStatement(expression=items[0])

    def empty_statement(self, items):
        return ast.EmptyStatement()

    # ==================== EXPRESSIONS ====================

    def assignment(self, items):
        return ast.Assignment(target=items[0], operator="=", value=items[1])

    def ternary(self, items):
        return ast.ConditionalExpression(condition=items[0], then_expr=items[1], else_expr=items[2])

    def binary_expression(self, items):
        left, operator, right = items
        return ast.BinaryExpression(left=left, operator=operator, right=right)

    def _operator(self, items):
        return str(items[0])

    or_op = and_op = equality_op = relational_op = additive_op = multiplicative_op = _operator

    def instanceof_expression(self, items):
        return ast.InstanceOfExpression(expression=items[0], type=items[1])

    def prefix_expression(self, items):
        return ast.UnaryExpression(operator=items[0], operand=items[1])

    def not_expression(self, items):
        return ast.UnaryExpression(operator="!", operand=items[0])

    def cast_expression(self, items):
        cast_type = items[0]
        if isinstance(items[1], int):
            cast_type = ast.ArrayType(element_type=cast_type, dimensions=items[1])
        return ast.CastExpression(type=cast_type, expression=items[-1])

    def method_invocation(self, items):
        target = None
        if isinstance(items[0], ast.Expression):
            target = items[0]
        return ast.MethodInvocation(
            target=target,
            method=self._token_value(items, "IDENTIFIER"),
            arguments=items[-1],
        )

    def field_access(self, items):
        return ast.FieldAccess(target=items[0], field=str(items[1]))

    def array_access(self, items):
        return ast.ArrayAccess(array=items[0], index=items[1])

    def name(self, items):
        return ast.Identifier(name=str(items[0]))

    def this_expression(self, items):
        return ast.ThisExpression()

    def class_literal(self, items):
        return ast.ClassLiteral(type=items[0])

    def class_instance_creation(self, items):
        return ast.NewInstance(type=items[0], arguments=items[1])

    def arguments(self, items):
        return tuple(items)

    def literal(self, items):
        token = items[0]
        value = str(token)
        if token.type == "INTEGER_LITERAL":
            kind = "long" if value[-1] in "lL" else "int"
        elif token.type == "FLOATING_POINT_LITERAL":
            kind = "float" if value[-1] in "fF" else "double"
        elif token.type in ("TRUE", "FALSE"):
            kind = "boolean"
        elif token.type == "CHARACTER_LITERAL":
            kind = "char"
        elif token.type == "STRING_LITERAL":
            kind = "string"
        else:
            kind = "null"
        return ast.Literal(value=value, kind=kind)


class MethodParser:
    """Parser for a single Java method declaration."""

    def __init__(self):
        with open(GRAMMAR_FILE, "r") as f:
            grammar = f.read()

        self._parser = Lark(
            grammar,
            parser="earley",
            lexer="basic",
            propagate_positions=True,
            maybe_placeholders=False,
        )
        self._transformer = MethodTransformer()

    def parse(self, source: str) -> ast.MethodDeclaration:
        """Parse Java method source code and return AST."""
        preprocessed = preprocess_unicode_escapes(source)
        try:
            tree = self._parser.parse(preprocessed)
        except UnexpectedInput as e:
            raise MethodParseError(f"Invalid method text: {e}", text=source) from e
        return self._transformer.transform(tree)

    def parse_file(self, path: str) -> ast.MethodDeclaration:
        """Parse a Java file holding one method declaration."""
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            source = f.read()
        return self.parse(source)
