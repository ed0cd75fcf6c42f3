"""
Turning method text into method nodes.
"""

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from . import ast
from .parser import MethodParser


@dataclass(frozen=True)
class InsertionContext:
    """The class a generated method is meant to be inserted into."""
    class_name: str


class NodeFactory(ABC):
    """Creates method nodes from source text."""

    @abstractmethod
    def create_method_from_text(self, text: str,
                                context: Optional[InsertionContext] = None) -> ast.MethodDeclaration:
        pass


class ParsingNodeFactory(NodeFactory):
    """Node factory backed by the Java method grammar."""

    def __init__(self, parser: Optional[MethodParser] = None):
        self._parser = parser or MethodParser()

    def create_method_from_text(self, text: str,
                                context: Optional[InsertionContext] = None) -> ast.MethodDeclaration:
        method = self._parser.parse(text)
        if context is not None:
            method = dataclasses.replace(method, context=context.class_name)
        return method
