"""
Generic parse loop for Atom entries and feeds.

The parser only knows Atom.  Every child of an <entry> outside the Atom
namespace is handed to the entry's parse_extension() so the entry class
decides what it understands.  Errors raised there are not caught.
"""
import logging
import xml.etree.ElementTree as ET

from .atom import (ATOM_NAMESPACE, AtomCategory, AtomEntry, AtomFeed,
                   AtomLink, XmlAttribute, split_tag)

logger = logging.getLogger(__name__)

class AtomFeedParser():
    """
    Turns Atom XML into AtomEntry/AtomFeed objects (or subclasses).

    Configuration can be given as keyword arguments or pushed in as a
    dict through the config property:
        preserve_unknown:               keep extension elements no entry class
                                        recognised, re-emitted verbatim on output
        keep_namespace_declarations:    capture the xmlns declarations on each
                                        <entry> into entry.attributes
    """
    _DEFAULT_CONFIG = {
        'preserve_unknown': False,
        'keep_namespace_declarations': True,
    }

    def __init__(self, **config) -> None:
        self.reset()
        if config:
            self.config = config

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self.config)}"

    def reset(self) -> None:
        """Back to default configuration"""
        self.preserve_unknown = self._DEFAULT_CONFIG['preserve_unknown']
        self.keep_namespace_declarations = self._DEFAULT_CONFIG['keep_namespace_declarations']

    @property
    def config(self) -> dict:
        """
        Get all configuration state as a dict.
        Convenience for pushing into a json, toml, ini, etc, file.
        """
        return {
            'preserve_unknown': self.preserve_unknown,
            'keep_namespace_declarations': self.keep_namespace_declarations
        }

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration from a dict, unknown keys are an error so typos
        don't silently fall back to defaults.
        """
        unknown = set(config) - set(self._DEFAULT_CONFIG)
        if unknown:
            raise ValueError(f"Unknown parser configuration: {', '.join(sorted(unknown))}")
        v = config.get('preserve_unknown', None)
        if v is not None:
            self.preserve_unknown = bool(v)
        v = config.get('keep_namespace_declarations', None)
        if v is not None:
            self.keep_namespace_declarations = bool(v)

    def parse_entry(self, source: str|bytes, entry_class: type[AtomEntry] = AtomEntry) -> AtomEntry:
        root, declarations = self._read(source)
        self._expect(root, "entry")
        return self._build_entry(root, declarations, entry_class)

    def parse_feed(self, source: str|bytes, feed_class: type[AtomFeed] = AtomFeed) -> AtomFeed:
        root, declarations = self._read(source)
        self._expect(root, "feed")
        feed = feed_class()
        for child in root:
            uri, local = split_tag(child.tag)
            if uri != ATOM_NAMESPACE:
                logger.debug("ignoring feed element %s", child.tag)
                continue
            if local == "entry":
                feed.entries.append(self._build_entry(child, declarations, feed.entry_class))
            elif local in ("id", "title", "updated"):
                setattr(feed, local, (child.text or "").strip())
        logger.debug("parsed feed %r with %d entries", feed.title, len(feed))
        return feed

    def _read(self, source: str|bytes) -> tuple[ET.Element, dict[ET.Element,list[XmlAttribute]]]:
        """
        Parse the document keeping track of which namespace declarations
        sit on which element.  ElementTree resolves and drops them otherwise.
        """
        pull = ET.XMLPullParser(events=("start-ns", "start"))
        pull.feed(source)
        pull.close()
        root = None
        pending: list[XmlAttribute] = []
        declarations: dict[ET.Element,list[XmlAttribute]] = {}
        for event, value in pull.read_events():
            if event == "start-ns":
                prefix, uri = value
                pending.append(XmlAttribute(f"xmlns:{prefix}" if prefix else "xmlns", uri))
            else:
                if root is None:
                    root = value
                if pending:
                    declarations[value] = pending
                    pending = []
        if root is None:
            raise ValueError("No document element found")
        return root, declarations

    @staticmethod
    def _expect(root: ET.Element, name: str) -> None:
        uri, local = split_tag(root.tag)
        if uri != ATOM_NAMESPACE or local != name:
            raise ValueError(f"Expected an Atom <{name}> element, got {root.tag}")

    def _build_entry(self, element: ET.Element,
                     declarations: dict[ET.Element,list[XmlAttribute]],
                     entry_class: type[AtomEntry]) -> AtomEntry:
        entry = entry_class()
        if self.keep_namespace_declarations:
            entry.attributes.extend(declarations.get(element, []))
        entry.attributes.extend(XmlAttribute(k, v) for k,v in element.attrib.items())
        for child in element:
            uri, local = split_tag(child.tag)
            if uri == ATOM_NAMESPACE and self._parse_atom(entry, local, child):
                continue
            entry.parse_extension(child, self)
        return entry

    @staticmethod
    def _parse_atom(entry: AtomEntry, local: str, node: ET.Element) -> bool:
        """Base Atom elements.  Returns False for Atom elements we don't model."""
        if local in ("id", "title", "updated"):
            setattr(entry, local, (node.text or "").strip())
        elif local == "category":
            entry.add_category(AtomCategory(node.get('term', ""),
                                            node.get('scheme', ""),
                                            node.get('label', "")))
        elif local == "link":
            entry.links.append(AtomLink(node.get('rel', ""),
                                        node.get('href', ""),
                                        node.get('type', "")))
        else:
            return False
        return True
