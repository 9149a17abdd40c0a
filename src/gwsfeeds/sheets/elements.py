"""
The gs: count elements of a worksheet entry, <gs:rowCount> and <gs:colCount>.
Both are a single non negative integer as element text.
"""
import xml.etree.ElementTree as ET
from typing import Self

from ..atom import AtomWriter, ExtensionElement
from . import (GSpreadsheetsNamespace, GSpreadsheetsPrefix,
               XmlColCountElement, XmlRowCountElement)

class CountElementBase(ExtensionElement):
    """Common base for the integer valued gs: elements"""
    namespace = GSpreadsheetsNamespace
    prefix = GSpreadsheetsPrefix

    def __init__(self, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"{self.name} must be an int, got {type(count).__name__}")
        if count < 0:
            raise ValueError(f"{self.name} must not be negative: {count}")
        self._count = count

    @property
    def count(self) -> int:
        return self._count

    def __int__(self) -> int:
        return self._count

    def __eq__(self, value) -> bool:
        return type(value) is type(self) and value.count == self.count

    def __hash__(self) -> int:
        return hash((self.name, self._count))

    def __str__(self) -> str:
        return str(self._count)

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @classmethod
    def parse(cls, node: ET.Element) -> Self:
        """
        Build from a parsed node.  Only plain ASCII decimal digits are a
        count, anything else (signs, '_' separators, other scripts' digits)
        is a ValueError for the caller.
        """
        text = (node.text or "").strip()
        if not (text.isascii() and text.isdigit()):
            raise ValueError(f"Invalid {cls.name} value: {text!r}")
        return cls(int(text))

    def write(self, writer: AtomWriter, parent: ET.Element) -> None:
        # no-op when the entry already declared it
        writer.declare_namespace(self.prefix, self.namespace)
        writer.add_element(parent, self.namespace, self.name, text=str(self._count))

class ColCountElement(CountElementBase):
    """<gs:colCount>, number of columns in a worksheet"""
    name = XmlColCountElement

class RowCountElement(CountElementBase):
    """<gs:rowCount>, number of rows in a worksheet"""
    name = XmlRowCountElement
