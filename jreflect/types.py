"""
Dataclasses, constants and Java type-name helpers for the accessor builder.
"""

import re
from dataclasses import dataclass
from typing import Optional


class JReflectError(Exception):
    """Base class for accessor generation errors."""
    pass


class ConfigurationError(JReflectError):
    """The accessor builder was asked to build from an incomplete or consumed draft."""
    pass


class MethodParseError(JReflectError):
    """Generated or supplied method text could not be parsed."""

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


# JVM descriptors for the primitive types, used for array class names.
PRIMITIVE_DESCRIPTORS = {
    "boolean": "Z",
    "byte": "B",
    "char": "C",
    "short": "S",
    "int": "I",
    "long": "J",
    "float": "F",
    "double": "D",
}

VOID = "void"

UNCHECKED_EXCEPTION = "java.lang.RuntimeException"

NO_SUCH_FIELD = "java.lang.NoSuchFieldException"
NO_SUCH_METHOD = "java.lang.NoSuchMethodException"
ILLEGAL_ACCESS = "java.lang.IllegalAccessException"
CLASS_NOT_FOUND = "java.lang.ClassNotFoundException"
INVOCATION_TARGET = "java.lang.reflect.InvocationTargetException"
INSTANTIATION = "java.lang.InstantiationException"

_GENERIC_ARGUMENTS = re.compile(r"<.*>")


def is_primitive(type_name: str) -> bool:
    return type_name in PRIMITIVE_DESCRIPTORS or type_name == VOID


def to_source_name(jvm_name: str) -> str:
    """Binary name to source form: nested class separators become dots."""
    return jvm_name.replace("$", ".")


def erase(type_name: str) -> str:
    """Drop generic arguments: java.util.Map<K, V>[] -> java.util.Map[]"""
    return _GENERIC_ARGUMENTS.sub("", type_name).strip()


def loadable_name(type_name: str) -> str:
    """
    Name accepted by Class.forName for a (possibly array) type.
    Arrays use descriptor form: int[] -> [I, java.lang.String[] -> [Ljava.lang.String;
    """
    name = erase(type_name)
    dims = 0
    if name.endswith("..."):
        name = name[:-3].rstrip()
        dims += 1
    while name.endswith("[]"):
        name = name[:-2].rstrip()
        dims += 1
    if dims == 0:
        return name
    element = PRIMITIVE_DESCRIPTORS.get(name)
    if element is None:
        element = f"L{name};"
    return "[" * dims + element


def quote(value: str) -> str:
    """Java string literal for value."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def class_for_name(type_name: str) -> str:
    """Java expression evaluating to the Class object of type_name."""
    if is_primitive(type_name):
        return f"{type_name}.class"
    return f"java.lang.Class.forName({quote(loadable_name(type_name))})"


@dataclass(frozen=True)
class ParameterInfo:
    """A parameter of the generated accessor."""
    type: str  # canonical source-level type
    name: str
    jvm_type_name: str  # binary name used to load the class


@dataclass(frozen=True)
class SourceParameter:
    """
    A parameter of an existing member, as reported by the program model.
    binary_name is None when the declared type could not be resolved to a class.
    """
    type: str
    name: Optional[str] = None
    binary_name: Optional[str] = None

    @property
    def jvm_type_name(self) -> str:
        return self.binary_name or self.type
