"""
Emission strategies for reflective member access.

Each strategy supplies the Java fragments an accessor body is built from:
the expression resolving the lookup class, the block locating the member
(walking up the superclass chain at run time), the access expression and
the checked exceptions those may throw.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .types import (
    ConfigurationError,
    ParameterInfo,
    class_for_name,
    quote,
    NO_SUCH_FIELD,
    NO_SUCH_METHOD,
    ILLEGAL_ACCESS,
    CLASS_NOT_FOUND,
    INVOCATION_TARGET,
    INSTANTIATION,
)


class FieldAccessType(Enum):
    GET = "get"
    SET = "set"


@dataclass(frozen=True)
class LocalNames:
    """Names of the locals declared in an accessor body."""
    klass: str = "klass"
    member: str = "member"
    error: str = "e"


def local_names(parameters: Sequence[ParameterInfo]) -> LocalNames:
    """Pick local names that do not collide with any parameter name."""
    taken = {p.name for p in parameters}

    def free(base: str) -> str:
        name, suffix = base, 0
        while name in taken:
            suffix += 1
            name = f"{base}{suffix}"
        return name

    defaults = LocalNames()
    return LocalNames(klass=free(defaults.klass), member=free(defaults.member), error=free(defaults.error))


def _walk_superclasses(names: LocalNames, lookup_call: str, not_found: str) -> str:
    """Retry lookup_call on each superclass, rethrowing once the chain runs out."""
    klass, member, e = names.klass, names.member, names.error
    return (
        f"while ({member} == null) {{\n"
        "    try {\n"
        f"        {member} = {klass}.{lookup_call};\n"
        "    }\n"
        f"    catch ({not_found} {e}) {{\n"
        f"        {klass} = {klass}.getSuperclass();\n"
        f"        if ({klass} == null) throw {e};\n"
        "    }\n"
        "}\n"
        f"{member}.setAccessible(true);"
    )


def _receiver_lookup(receiver: Optional[str], class_name: str) -> str:
    # A null receiver selects static access on the named class.
    if receiver is None:
        return class_for_name(class_name)
    return f"{receiver} == null ? {class_for_name(class_name)} : {receiver}.getClass()"


def _join_call(prefix: str, arguments: Sequence[str]) -> str:
    return f"{prefix}({', '.join(arguments)})"


class MemberAccessor(ABC):
    """Fragment provider for one kind of class member."""

    member_type: str = ""
    possible_exceptions: tuple[str, ...] = ()

    def check(self, parameters: Sequence[ParameterInfo]) -> None:
        """Raise ConfigurationError if parameters cannot drive this accessor."""
        pass

    @abstractmethod
    def class_lookup_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        pass

    @abstractmethod
    def member_lookup_block(self, parameters: Sequence[ParameterInfo]) -> str:
        pass

    @abstractmethod
    def access_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        pass


@dataclass(frozen=True)
class FieldAccessor(MemberAccessor):
    """
    Reads or writes a declared field.

    The first parameter is the receiver. A write takes its value from the
    last parameter, so a write with a single parameter is a static write.
    With no receiver parameter the access goes through null, which only
    works for a static field: reading an instance field that way throws
    NullPointerException when the accessor runs.
    """
    class_name: str
    field_name: str
    access_type: FieldAccessType = FieldAccessType.GET

    member_type = "java.lang.reflect.Field"
    possible_exceptions = (NO_SUCH_FIELD, ILLEGAL_ACCESS, CLASS_NOT_FOUND)

    def _receiver(self, parameters: Sequence[ParameterInfo]) -> Optional[str]:
        if self.access_type is FieldAccessType.SET and len(parameters) < 2:
            return None
        return parameters[0].name if parameters else None

    def check(self, parameters: Sequence[ParameterInfo]) -> None:
        if self.access_type is FieldAccessType.SET and not parameters:
            raise ConfigurationError(
                f"Write accessor for field {self.class_name}.{self.field_name} has no value parameter"
            )

    def class_lookup_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        return _receiver_lookup(self._receiver(parameters), self.class_name)

    def member_lookup_block(self, parameters: Sequence[ParameterInfo]) -> str:
        lookup = f"getDeclaredField({quote(self.field_name)})"
        return _walk_superclasses(local_names(parameters), lookup, NO_SUCH_FIELD)

    def access_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        member = local_names(parameters).member
        receiver = self._receiver(parameters) or "null"
        if self.access_type is FieldAccessType.GET:
            return f"{member}.get({receiver})"
        return f"{member}.set({receiver}, {parameters[-1].name})"


@dataclass(frozen=True)
class MethodAccessor(MemberAccessor):
    """Invokes a declared method; the first parameter is the receiver."""
    class_name: str
    method_name: str

    member_type = "java.lang.reflect.Method"
    possible_exceptions = (NO_SUCH_METHOD, ILLEGAL_ACCESS, CLASS_NOT_FOUND, INVOCATION_TARGET)

    def class_lookup_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        receiver = parameters[0].name if parameters else None
        return _receiver_lookup(receiver, self.class_name)

    def member_lookup_block(self, parameters: Sequence[ParameterInfo]) -> str:
        arguments = [quote(self.method_name)]
        arguments.extend(class_for_name(p.jvm_type_name) for p in parameters[1:])
        return _walk_superclasses(local_names(parameters), _join_call("getDeclaredMethod", arguments),
                                  NO_SUCH_METHOD)

    def access_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        member = local_names(parameters).member
        if not parameters:
            return f"{member}.invoke(null)"
        return _join_call(f"{member}.invoke", [p.name for p in parameters])


@dataclass(frozen=True)
class ConstructorAccessor(MemberAccessor):
    """Instantiates the class; every parameter is a constructor argument."""
    class_name: str

    member_type = "java.lang.reflect.Constructor<?>"
    possible_exceptions = (
        NO_SUCH_METHOD,
        ILLEGAL_ACCESS,
        CLASS_NOT_FOUND,
        INVOCATION_TARGET,
        INSTANTIATION,
    )

    def class_lookup_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        return class_for_name(self.class_name)

    def member_lookup_block(self, parameters: Sequence[ParameterInfo]) -> str:
        arguments = [class_for_name(p.jvm_type_name) for p in parameters]
        return _walk_superclasses(local_names(parameters), _join_call("getDeclaredConstructor", arguments),
                                  NO_SUCH_METHOD)

    def access_expression(self, parameters: Sequence[ParameterInfo]) -> str:
        return _join_call(f"{local_names(parameters).member}.newInstance", [p.name for p in parameters])
