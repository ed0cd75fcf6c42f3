"""jreflect - generates Java methods that access inaccessible members through reflection."""

from .accessors import (
    MemberAccessor,
    FieldAccessor,
    FieldAccessType,
    MethodAccessor,
    ConstructorAccessor,
    LocalNames,
    local_names,
)
from .builder import AccessorDraft, AccessorSpec, Assembler, GeneratedMethod
from .factory import InsertionContext, NodeFactory, ParsingNodeFactory
from .parser import MethodParser
from .types import (
    JReflectError,
    ConfigurationError,
    MethodParseError,
    ParameterInfo,
    SourceParameter,
)

__version__ = "0.1.0"
__all__ = [
    "AccessorDraft",
    "AccessorSpec",
    "Assembler",
    "GeneratedMethod",
    "MemberAccessor",
    "FieldAccessor",
    "FieldAccessType",
    "MethodAccessor",
    "ConstructorAccessor",
    "LocalNames",
    "local_names",
    "InsertionContext",
    "NodeFactory",
    "ParsingNodeFactory",
    "MethodParser",
    "JReflectError",
    "ConfigurationError",
    "MethodParseError",
    "ParameterInfo",
    "SourceParameter",
]
