"""
Spreadsheet feed types and the names they share
"""

# namespace for all the gs: spreadsheet elements
GSpreadsheetsNamespace = "http://schemas.google.com/spreadsheets/2006"
GSpreadsheetsPrefix = "gs"
# term of the gd kind category marking an entry as a worksheet
GSpreadsheetsWorksheetKind = GSpreadsheetsNamespace + "#worksheet"

XmlColCountElement = "colCount"
XmlRowCountElement = "rowCount"
