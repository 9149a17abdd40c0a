from ..atom import AtomFeed
from .resources import SheetProperties
from .worksheet import WorksheetEntry

class WorksheetFeed(AtomFeed):
    """
    The worksheets feed of one spreadsheet, one WorksheetEntry per tab.
    """
    entry_class = WorksheetEntry

    def to_sheet_properties(self) -> list[SheetProperties]:
        """Sheets v4 properties for every worksheet, index is the feed position"""
        return [e.to_sheet_properties(index=i) for i,e in enumerate(self.entries)]
