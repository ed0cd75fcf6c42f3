"""
Builder for public methods that reach inaccessible members through reflection.

An AccessorDraft is configured fluently, then built exactly once:

    method = (AccessorDraft("access$field")
              .set_return_type("int")
              .add_parameter("com.example.Widget", "object")
              .target_field("com.example.Widget", "count")
              .build(ParsingNodeFactory()))

The lookup of the member happens in the generated code, at run time: the
generator never inspects the class hierarchy itself.
"""

import logging
import textwrap
from dataclasses import dataclass
from typing import Iterable, Optional

from . import ast
from .accessors import (
    MemberAccessor,
    FieldAccessor,
    FieldAccessType,
    MethodAccessor,
    ConstructorAccessor,
    local_names,
)
from .factory import InsertionContext, NodeFactory
from .types import (
    ConfigurationError,
    ParameterInfo,
    SourceParameter,
    to_source_name,
    UNCHECKED_EXCEPTION,
    VOID,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessorSpec:
    """Immutable description of one accessor method."""
    name: str
    is_static: bool
    return_type: str
    parameters: tuple[ParameterInfo, ...]
    target: MemberAccessor


@dataclass(frozen=True)
class GeneratedMethod:
    text: str
    node: ast.MethodDeclaration


class AccessorDraft:
    """Mutable configuration of an accessor; consumed by freeze() or build()."""

    def __init__(self, name: str):
        self._name = name
        self._is_static = False
        self._return_type = VOID
        self._parameters: list[ParameterInfo] = []
        self._target: Optional[MemberAccessor] = None
        self._consumed = False

    def _check_open(self):
        if self._consumed:
            raise ConfigurationError(f"Accessor {self._name} has already been built")

    def set_name(self, name: str) -> "AccessorDraft":
        self._check_open()
        self._name = name
        return self

    def set_static(self, is_static: bool) -> "AccessorDraft":
        self._check_open()
        self._is_static = is_static
        return self

    def set_return_type(self, return_type: str) -> "AccessorDraft":
        self._check_open()
        self._return_type = return_type
        return self

    def add_parameter(self, jvm_type: str, name: str) -> "AccessorDraft":
        self._check_open()
        self._parameters.append(ParameterInfo(type=to_source_name(jvm_type), name=name, jvm_type_name=jvm_type))
        return self

    def add_parameters(self, parameters: Iterable[SourceParameter]) -> "AccessorDraft":
        """Append the parameters of an existing member, naming unnamed ones argN."""
        self._check_open()
        for i, parameter in enumerate(parameters):
            self._parameters.append(ParameterInfo(
                type=parameter.type,
                name=parameter.name or f"arg{i}",
                jvm_type_name=parameter.jvm_type_name,
            ))
        return self

    def _set_target(self, target: MemberAccessor) -> "AccessorDraft":
        self._check_open()
        self._target = target
        return self

    def target_field(self, jvm_class_name: str, field_name: str) -> "AccessorDraft":
        return self._set_target(FieldAccessor(jvm_class_name, field_name, FieldAccessType.GET))

    def target_field_for_write(self, jvm_class_name: str, field_name: str) -> "AccessorDraft":
        return self._set_target(FieldAccessor(jvm_class_name, field_name, FieldAccessType.SET))

    def target_method(self, jvm_class_name: str, method_name: str) -> "AccessorDraft":
        return self._set_target(MethodAccessor(jvm_class_name, method_name))

    def target_constructor(self, jvm_class_name: str) -> "AccessorDraft":
        return self._set_target(ConstructorAccessor(jvm_class_name))

    def freeze(self) -> AccessorSpec:
        """Validate the draft and turn it into an AccessorSpec. The draft cannot be used afterwards."""
        self._check_open()
        if not self._name or not self._name.strip():
            raise ConfigurationError("Accessor method name must not be empty")
        if self._target is None:
            raise ConfigurationError(f"No member to access configured for accessor {self._name}")
        parameters = tuple(self._parameters)
        self._target.check(parameters)
        self._consumed = True
        return AccessorSpec(
            name=self._name,
            is_static=self._is_static,
            return_type=self._return_type,
            parameters=parameters,
            target=self._target,
        )

    def build(self, factory: NodeFactory, context: Optional[InsertionContext] = None,
              assembler: Optional["Assembler"] = None) -> GeneratedMethod:
        return (assembler or Assembler()).build(self.freeze(), factory, context)


class Assembler:
    """Renders an AccessorSpec as Java method text."""

    def __init__(self, indent: str = "    ", unchecked_exception: str = UNCHECKED_EXCEPTION):
        self.indent = indent
        self.unchecked_exception = unchecked_exception

    def _catch_blocks(self, exceptions: Iterable[str], error: str) -> list[str]:
        return [f"catch ({x} {error}) {{ throw new {self.unchecked_exception}({error}); }}" for x in exceptions]

    def assemble(self, spec: AccessorSpec) -> str:
        target = spec.target
        names = local_names(spec.parameters)
        parameters = "(" + ", ".join(f"{p.type} {p.name}" for p in spec.parameters) + ")"

        access = target.access_expression(spec.parameters)
        if spec.return_type == VOID:
            access_line = f"{access};"
        else:
            access_line = f"return ({spec.return_type}) {access};"

        body = "\n".join([
            f"java.lang.Class<?> {names.klass} = {target.class_lookup_expression(spec.parameters)};",
            f"{target.member_type} {names.member} = null;",
            target.member_lookup_block(spec.parameters),
            access_line,
        ])

        exceptions = target.possible_exceptions
        if exceptions:
            body = "\n".join(["try {", textwrap.indent(body, self.indent), "}"]
                             + self._catch_blocks(exceptions, names.error))

        modifiers = "public static" if spec.is_static else "public"
        return (f"{modifiers} {spec.return_type} {spec.name}{parameters} {{\n"
                f"{textwrap.indent(body, self.indent)}\n"
                "}\n")

    def build(self, spec: AccessorSpec, factory: NodeFactory,
              context: Optional[InsertionContext] = None) -> GeneratedMethod:
        logger.debug("Generating %s accessor %s (%d parameters)",
                     type(spec.target).__name__, spec.name, len(spec.parameters))
        text = self.assemble(spec)
        return GeneratedMethod(text=text, node=factory.create_method_from_text(text, context))
