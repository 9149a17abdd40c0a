"""
Sheets v4 JSON shapes a worksheet entry maps onto.  Only the parts the
worksheet feed carries are modelled: sheet title and grid dimensions.
Same deal as any v4 resource, asdict() gives what the request client wants.
"""
from dataclasses import dataclass, field, asdict

from ..resources import FeedResourceBase

@dataclass
class GridProperties(FeedResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#gridproperties"""
    rowCount: int = field(default=-1)
    columnCount: int = field(default=-1)
    frozenRowCount: int = field(default=0)
    frozenColumnCount: int = field(default=0)

    def __bool__(self) -> bool:
        return self.rowCount >= 0 and self.columnCount >= 0

@dataclass
class SheetProperties(FeedResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties"""
    sheetId: int = field(default=-1)
    title: str = field(default="")
    index: int = field(default=-1)
    sheetType: str = field(default="GRID")
    gridProperties: GridProperties|dict = field(default_factory=dict)
    hidden: bool = field(default=False)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.gridProperties = self.gridProperties if isinstance(self.gridProperties,GridProperties) else GridProperties(**dict(self.gridProperties))

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['gridProperties'] = self.gridProperties.to_base()
        return b

    def __bool__(self) -> bool:
        """Needs a title, the worksheet feed has no notion of sheet ids"""
        return bool(self.title)

    def __str__(self) -> str:
        if not self:
            return "<invalid sheet>"
        val = f"{str(self.title)}({str(self.sheetId)}[{str(self.index)}]):{str(self.sheetType)}"
        if self.is_grid() and self.gridProperties:
            val += f"({self.gridProperties.rowCount}Rx{self.gridProperties.columnCount}C)"
        return val

    def is_grid(self) -> bool:
        """
        A GRID sheet is the traditional range of cells, the only kind a
        worksheet feed knows about.
        """
        return self.sheetType == 'GRID'
