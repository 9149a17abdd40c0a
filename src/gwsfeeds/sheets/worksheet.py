"""
Entry type for a worksheets feed.  In Google Sheets parlance a worksheet
is one tab of a spreadsheet; in the feed it is an Atom entry tagged with
the worksheet kind category and carrying the grid size as <gs:rowCount>
and <gs:colCount>.
"""
import logging
import xml.etree.ElementTree as ET
from typing import Self, TYPE_CHECKING

from ..atom import (GDATA_KIND_SCHEME, AtomCategory, AtomEntry, AtomWriter,
                    ExtensionElement, XmlAttribute, split_tag)
from . import (GSpreadsheetsNamespace, GSpreadsheetsPrefix, GSpreadsheetsWorksheetKind,
               XmlColCountElement, XmlRowCountElement)
from .elements import ColCountElement, RowCountElement
from .resources import GridProperties, SheetProperties

if TYPE_CHECKING:
    from ..parser import AtomFeedParser

logger = logging.getLogger(__name__)

# shared by every worksheet entry, it is frozen so nobody can change it under them
WORKSHEET_CATEGORY = AtomCategory(GSpreadsheetsWorksheetKind, GDATA_KIND_SCHEME)

class WorksheetEntry(AtomEntry):
    """
    A worksheet entry.  The row and column counts live in their own slots,
    extension_elements is derived from them, so each count shows up at
    most once no matter how often it is set.
    """
    WORKSHEET_CATEGORY = WORKSHEET_CATEGORY

    def __init__(self, id: str = "", title: str = "", updated: str = "") -> None:
        super().__init__(id, title, updated)
        self._col_count: ColCountElement|None = None
        self._row_count: RowCountElement|None = None
        self.add_category(WORKSHEET_CATEGORY)

    def __str__(self) -> str:
        val = super().__str__()
        if self._row_count is not None or self._col_count is not None:
            val += f"({self.row_count}Rx{self.col_count}C)"
        return val

    @property
    def col_count(self) -> int|None:
        return None if self._col_count is None else self._col_count.count

    @col_count.setter
    def col_count(self, value: int|None) -> None:
        self.col_count_element = None if value is None else ColCountElement(value)

    @property
    def row_count(self) -> int|None:
        return None if self._row_count is None else self._row_count.count

    @row_count.setter
    def row_count(self, value: int|None) -> None:
        self.row_count_element = None if value is None else RowCountElement(value)

    @property
    def col_count_element(self) -> ColCountElement|None:
        """The <gs:colCount> element in this entry"""
        return self._col_count

    @col_count_element.setter
    def col_count_element(self, value: ColCountElement|None) -> None:
        if value is not None and not isinstance(value, ColCountElement):
            raise TypeError(f"Expected ColCountElement, got {type(value).__name__}")
        self._col_count = value

    @property
    def row_count_element(self) -> RowCountElement|None:
        """The <gs:rowCount> element in this entry"""
        return self._row_count

    @row_count_element.setter
    def row_count_element(self, value: RowCountElement|None) -> None:
        if value is not None and not isinstance(value, RowCountElement):
            raise TypeError(f"Expected RowCountElement, got {type(value).__name__}")
        self._row_count = value

    def _owned_elements(self) -> list[ExtensionElement]:
        return [e for e in (self._col_count, self._row_count) if e is not None]

    def add_other_namespaces(self, writer: AtomWriter) -> None:
        super().add_other_namespaces(writer)
        writer.declare_namespace(GSpreadsheetsPrefix, GSpreadsheetsNamespace)

    def skip_node(self, node: XmlAttribute) -> bool:
        """
        On top of the base checks, drop any declaration of the spreadsheets
        namespace, add_other_namespaces() has written that one already.
        """
        if super().skip_node(node):
            return True
        return node.name.startswith("xmlns") and node.value == GSpreadsheetsNamespace

    def parse_worksheet(self, node: ET.Element, parser: "AtomFeedParser") -> bool:
        """
        Take a gs:colCount or gs:rowCount node.  Anything else is left
        alone and False returned.  Namespace compare is case insensitive,
        the element name compare is not.
        """
        uri, local = split_tag(node.tag)
        if uri.lower() != GSpreadsheetsNamespace.lower():
            return False
        if local == XmlColCountElement:
            self.col_count_element = ColCountElement.parse(node)
        elif local == XmlRowCountElement:
            self.row_count_element = RowCountElement.parse(node)
        else:
            logger.debug("ignoring spreadsheet element %s in worksheet entry", local)
            return False
        return True

    def parse_extension(self, node: ET.Element, parser: "AtomFeedParser") -> bool:
        if self.parse_worksheet(node, parser):
            return True
        return super().parse_extension(node, parser)

    def to_sheet_properties(self, sheet_id: int = -1, index: int = -1) -> SheetProperties:
        """
        The Sheets v4 view of this worksheet.  Counts that were never set
        come out as -1 like any unset GridProperties field.
        """
        grid = GridProperties(rowCount=-1 if self.row_count is None else self.row_count,
                              columnCount=-1 if self.col_count is None else self.col_count)
        return SheetProperties(sheetId=sheet_id, title=self.title, index=index,
                               gridProperties=grid)

    @classmethod
    def from_sheet_properties(cls, props: SheetProperties|dict) -> Self:
        """New entry from Sheets v4 sheet properties, negative counts mean unset"""
        props = props if isinstance(props, SheetProperties) else SheetProperties(**dict(props))
        entry = cls(title=props.title)
        if props.gridProperties.rowCount >= 0:
            entry.row_count = props.gridProperties.rowCount
        if props.gridProperties.columnCount >= 0:
            entry.col_count = props.gridProperties.columnCount
        return entry
