import pytest
import xml.etree.ElementTree as ET

from gwsfeeds.atom import ATOM_NAMESPACE, AtomFeed
from gwsfeeds.sheets import GSpreadsheetsNamespace
from gwsfeeds.sheets.feed import WorksheetFeed
from gwsfeeds.sheets.worksheet import WORKSHEET_CATEGORY, WorksheetEntry

FEED = f"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="{ATOM_NAMESPACE}"
      xmlns:openSearch="http://a9.com/-/spec/opensearchrss/1.0/"
      xmlns:gs="{GSpreadsheetsNamespace}">
  <id>https://spreadsheets.google.com/feeds/worksheets/key/private/full</id>
  <updated>2006-11-17T18:23:45.173Z</updated>
  <title type="text">Groceries R Us</title>
  <openSearch:totalResults>2</openSearch:totalResults>
  <entry>
    <id>https://spreadsheets.google.com/feeds/worksheets/key/private/full/od6</id>
    <updated>2006-11-17T18:23:45.173Z</updated>
    <category scheme="{WORKSHEET_CATEGORY.scheme}" term="{WORKSHEET_CATEGORY.term}"/>
    <title type="text">Sheet1</title>
    <gs:rowCount>100</gs:rowCount>
    <gs:colCount>20</gs:colCount>
  </entry>
  <entry>
    <id>https://spreadsheets.google.com/feeds/worksheets/key/private/full/od7</id>
    <updated>2006-11-17T18:23:45.173Z</updated>
    <category scheme="{WORKSHEET_CATEGORY.scheme}" term="{WORKSHEET_CATEGORY.term}"/>
    <title type="text">Totals</title>
    <gs:rowCount>5</gs:rowCount>
  </entry>
</feed>
"""

def test_parse_feed():
    feed = WorksheetFeed.from_string(FEED.encode("utf-8"))
    assert(feed.title == "Groceries R Us")
    assert(len(feed) == 2)
    assert(all(isinstance(e, WorksheetEntry) for e in feed))
    first, second = feed.entries
    assert(first.title == "Sheet1")
    assert(first.row_count == 100)
    assert(first.col_count == 20)
    assert(first.categories == [WORKSHEET_CATEGORY])
    assert(second.row_count == 5)
    assert(second.col_count is None)
    assert(str(feed) == "Groceries R Us[2]")

def test_feed_sheet_properties():
    feed = WorksheetFeed.from_string(FEED)
    props = feed.to_sheet_properties()
    assert([p.title for p in props] == ["Sheet1", "Totals"])
    assert([p.index for p in props] == [0, 1])
    assert(props[0].gridProperties.columnCount == 20)
    assert(props[1].gridProperties.columnCount == -1)
    assert(str(props[0]) == "Sheet1(-1[0]):GRID(100Rx20C)")

def test_feed_to_string():
    feed = WorksheetFeed(title="Budget")
    for title, rows, cols in [("Jan", 10, 3), ("Feb", 12, 4)]:
        e = WorksheetEntry(title=title)
        e.row_count = rows
        e.col_count = cols
        feed.entries.append(e)
    s = feed.to_string()
    assert(s.count(f'"{GSpreadsheetsNamespace}"') == 1)
    root = ET.fromstring(s)
    entries = root.findall("{" + ATOM_NAMESPACE + "}entry")
    assert(len(entries) == 2)
    assert(entries[1].find("{" + GSpreadsheetsNamespace + "}colCount").text == "4")

    back = WorksheetFeed.from_string(s)
    assert([(e.title, e.row_count, e.col_count) for e in back] == [("Jan", 10, 3), ("Feb", 12, 4)])

def test_plain_feed_is_not_worksheets():
    feed = AtomFeed.from_string(FEED)
    assert(len(feed) == 2)
    assert(not any(isinstance(e, WorksheetEntry) for e in feed))

def test_parse_feed_bad_count():
    bad = FEED.replace("<gs:rowCount>5</gs:rowCount>", "<gs:rowCount>five</gs:rowCount>")
    with pytest.raises(ValueError):
        WorksheetFeed.from_string(bad)

def test_parse_feed_wrong_root():
    with pytest.raises(ValueError):
        WorksheetFeed.from_string(f'<entry xmlns="{ATOM_NAMESPACE}"/>')
