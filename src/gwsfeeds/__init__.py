"""
Client side object model for the Google Spreadsheets Atom (GData) feeds.
The goal is to get worksheet entries in and out of their XML form without
dragging in a whole GData client: a minimal Atom entry/feed model plus
the spreadsheet specific entry types built on top of it.

There is no transport or authentication here, feeds come in and go out
as strings.  Conversions to the Sheets v4 JSON shapes are done with
dataclasses so they can go straight into a v4 request body.
"""
