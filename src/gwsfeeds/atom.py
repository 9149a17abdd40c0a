"""
Minimal Atom entry/feed object model for the GData feed format.
Only as much of Atom as the spreadsheet feeds need: ids, titles,
categories, links and vendor extension elements.

Output is built with ElementTree using literal prefixed names so the
namespace declarations written are exactly the ones we ask for.  The
writer keeps track of what has been declared, subclasses get two hooks
to influence that: add_other_namespaces() and skip_node().
"""
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Self, TYPE_CHECKING

if TYPE_CHECKING:
    from .parser import AtomFeedParser

logger = logging.getLogger(__name__)

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
GDATA_NAMESPACE = "http://schemas.google.com/g/2005"
GDATA_KIND_SCHEME = GDATA_NAMESPACE + "#kind"

def split_tag(tag: str) -> tuple[str,str]:
    """ElementTree '{uri}local' to (uri, local).  No namespace gives an empty uri."""
    if tag[:1] == "{":
        uri, _, local = tag[1:].partition("}")
        return uri, local
    return "", tag

@dataclass(frozen=True)
class AtomCategory():
    """<atom:category>, a typed tag telling what kind of resource an entry is."""
    term: str
    scheme: str = field(default="")
    label: str = field(default="")

    def write(self, writer: "AtomWriter", parent: ET.Element) -> None:
        attrib = {'term': self.term}
        if self.scheme:
            attrib['scheme'] = self.scheme
        if self.label:
            attrib['label'] = self.label
        writer.add_element(parent, ATOM_NAMESPACE, "category", attrib)

@dataclass(frozen=True)
class AtomLink():
    """<atom:link>"""
    rel: str
    href: str
    type: str = field(default="")

    def write(self, writer: "AtomWriter", parent: ET.Element) -> None:
        attrib = {'rel': self.rel, 'href': self.href}
        if self.type:
            attrib['type'] = self.type
        writer.add_element(parent, ATOM_NAMESPACE, "link", attrib)

@dataclass(frozen=True)
class XmlAttribute():
    """
    An attribute node captured while parsing.  Namespace declarations
    are kept as attributes too, named 'xmlns' or 'xmlns:<prefix>', so
    they can be copied back out on serialization.
    """
    name: str
    value: str

    @property
    def is_namespace_declaration(self) -> bool:
        return self.name == "xmlns" or self.name.startswith("xmlns:")

    @property
    def prefix(self) -> str:
        """Declared prefix, empty for the default namespace or a plain attribute"""
        if self.name.startswith("xmlns:"):
            return self.name[len("xmlns:"):]
        return ""

class ExtensionElement():
    """
    Base for any vendor element living inside an Atom entry but outside
    the Atom schema.  Subclasses set the class level namespace/prefix/name
    and implement write().
    """
    namespace: str = ""
    prefix: str = ""
    name: str = ""

    def write(self, writer: "AtomWriter", parent: ET.Element) -> None:
        raise NotImplementedError(f"{self.__class__.__name__} does not implement write()")

class XmlExtension(ExtensionElement):
    """An extension element nobody recognised, kept as the raw parsed node"""
    def __init__(self, element: ET.Element) -> None:
        self.element = element
        self.namespace, self.name = split_tag(element.tag)

    def write(self, writer: "AtomWriter", parent: ET.Element) -> None:
        writer.import_element(parent, self.element)

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{{{self.namespace}}}{self.name}"

class AtomWriter():
    """
    Assembles one output document.  All namespace declarations are put on
    the root element.  Atom is always the default namespace.
    """
    _KNOWN_PREFIXES = {
        GDATA_NAMESPACE: "gd",
        XML_NAMESPACE: "xml",
    }

    def __init__(self, root_name: str = "entry") -> None:
        self._namespaces: dict[str,str] = {XML_NAMESPACE: "xml"}
        self.root = ET.Element(root_name)
        self.declare_namespace("", ATOM_NAMESPACE)

    def has_namespace(self, uri: str) -> bool:
        return uri in self._namespaces

    def declare_namespace(self, prefix: str, uri: str) -> bool:
        """
        Declare uri on the root.  Nothing is written if the uri is already
        declared or the prefix is already bound to something else.
        """
        if uri in self._namespaces:
            return False
        attr = f"xmlns:{prefix}" if prefix else "xmlns"
        if attr in self.root.attrib:
            logger.debug("prefix %r already bound, not declaring %s", prefix, uri)
            return False
        self.root.set(attr, uri)
        self._namespaces[uri] = prefix
        return True

    def write_attribute(self, target: ET.Element, attribute: XmlAttribute) -> bool:
        """
        Copy a captured attribute verbatim.  Declarations land on the root.
        Existing attributes are never overwritten.
        """
        if attribute.is_namespace_declaration:
            if attribute.name in self.root.attrib:
                return False
            self.root.set(attribute.name, attribute.value)
            self._namespaces.setdefault(attribute.value, attribute.prefix)
            return True
        name = self._attribute_name(attribute.name)
        if name in target.attrib:
            return False
        target.set(name, attribute.value)
        return True

    def qname(self, uri: str, local: str) -> str:
        """Prefixed output name, declaring uri on the fly when needed"""
        if not uri:
            return local
        if uri not in self._namespaces:
            prefix = self._KNOWN_PREFIXES.get(uri, "")
            n = 0
            while not prefix or f"xmlns:{prefix}" in self.root.attrib:
                prefix = f"ns{n}"
                n += 1
            self.declare_namespace(prefix, uri)
        prefix = self._namespaces[uri]
        return f"{prefix}:{local}" if prefix else local

    def _attribute_name(self, name: str) -> str:
        uri, local = split_tag(name)
        return self.qname(uri, local) if uri else local

    def add_element(self, parent: ET.Element, namespace: str, name: str,
                    attrib: dict[str,str]|None = None,
                    text: str|None = None) -> ET.Element:
        e = ET.SubElement(parent, self.qname(namespace, name),
                          {self._attribute_name(k): v for k,v in (attrib or {}).items()})
        if not namespace and self.root.get("xmlns"):
            # unqualified element, must not land in the default (Atom) namespace
            e.set("xmlns", "")
        if text is not None:
            e.text = text
        return e

    def import_element(self, parent: ET.Element, element: ET.Element) -> ET.Element:
        """Recursively copy a parsed '{uri}local' element under parent"""
        uri, local = split_tag(element.tag)
        e = self.add_element(parent, uri, local, dict(element.attrib), element.text)
        for child in element:
            self.import_element(e, child)
        e.tail = element.tail
        return e

    def tostring(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

class AtomEntry():
    """
    One <entry> of an Atom feed.  Vendor specific entries subclass this
    and override the hooks:
        add_other_namespaces(writer)    declare extra namespaces on output
        skip_node(node)                 veto copying a captured attribute
        parse_extension(node, parser)   consume a non Atom child element
        _owned_elements()               extension elements held in slots
    """
    def __init__(self, id: str = "", title: str = "", updated: str = "") -> None:
        self.id = id
        self.title = title
        self.updated = updated
        self.categories: list[AtomCategory] = []
        self.links: list[AtomLink] = []
        self.attributes: list[XmlAttribute] = []
        self._extension_elements: list[ExtensionElement] = []

    def __str__(self) -> str:
        return self.title or self.id or "<untitled>"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @property
    def extension_elements(self) -> list[ExtensionElement]:
        """
        Everything that gets serialized as an extension, the generic list
        followed by whatever subclasses hold in their own slots.
        This is a copy, use add_extension()/remove_extension() to change it.
        """
        return list(self._extension_elements) + self._owned_elements()

    def _owned_elements(self) -> list[ExtensionElement]:
        return []

    def add_extension(self, element: ExtensionElement) -> None:
        self._extension_elements.append(element)

    def remove_extension(self, element: ExtensionElement) -> None:
        self._extension_elements.remove(element)

    def add_category(self, category: AtomCategory) -> None:
        if category not in self.categories:
            self.categories.append(category)

    def add_other_namespaces(self, writer: AtomWriter) -> None:
        """Base entries need nothing past the Atom default namespace"""
        pass

    def skip_node(self, node: XmlAttribute) -> bool:
        """
        Should this captured attribute be left out of the output?
        The writer always declares Atom as the default namespace itself.
        """
        if not node.is_namespace_declaration:
            return False
        return node.name == "xmlns" or node.value == ATOM_NAMESPACE

    def parse_extension(self, node: ET.Element, parser: "AtomFeedParser") -> bool:
        """
        Called by the parser for every child that is not an Atom element.
        Unknown elements are only kept if the parser says so.
        """
        if parser.preserve_unknown:
            self.add_extension(XmlExtension(node))
            logger.debug("preserving unknown element %s", node.tag)
            return True
        logger.debug("dropping unknown element %s", node.tag)
        return False

    def write(self, writer: AtomWriter, parent: ET.Element|None = None) -> ET.Element:
        """
        Write the entry.  Without a parent the entry is the document root,
        otherwise it is nested (inside a <feed>).
        """
        target = writer.root if parent is None else writer.add_element(parent, ATOM_NAMESPACE, "entry")
        self.add_other_namespaces(writer)
        for a in self.attributes:
            if self.skip_node(a):
                logger.debug("skipping attribute %s=%r", a.name, a.value)
                continue
            writer.write_attribute(target, a)
        if self.id:
            writer.add_element(target, ATOM_NAMESPACE, "id", text=self.id)
        if self.updated:
            writer.add_element(target, ATOM_NAMESPACE, "updated", text=self.updated)
        for c in self.categories:
            c.write(writer, target)
        if self.title:
            writer.add_element(target, ATOM_NAMESPACE, "title", {'type': 'text'}, self.title)
        for l in self.links:
            l.write(writer, target)
        for e in self.extension_elements:
            e.write(writer, target)
        return target

    def to_string(self) -> str:
        writer = AtomWriter("entry")
        self.write(writer)
        return writer.tostring()

    @classmethod
    def from_string(cls, xml: str|bytes, parser: "AtomFeedParser|None" = None) -> Self:
        if parser is None:
            from .parser import AtomFeedParser
            parser = AtomFeedParser()
        return parser.parse_entry(xml, cls)

class AtomFeed():
    """
    An Atom <feed>, mostly a list of entries.  Subclasses set entry_class
    so the parser builds the right kind of entry.
    """
    entry_class: type[AtomEntry] = AtomEntry

    def __init__(self, id: str = "", title: str = "", updated: str = "",
                 entries: list[AtomEntry]|None = None) -> None:
        self.id = id
        self.title = title
        self.updated = updated
        self.entries: list[AtomEntry] = list(entries) if entries else []

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __str__(self) -> str:
        return f"{self.title or self.id or '<untitled>'}[{len(self)}]"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    def write(self, writer: AtomWriter) -> ET.Element:
        if self.id:
            writer.add_element(writer.root, ATOM_NAMESPACE, "id", text=self.id)
        if self.updated:
            writer.add_element(writer.root, ATOM_NAMESPACE, "updated", text=self.updated)
        if self.title:
            writer.add_element(writer.root, ATOM_NAMESPACE, "title", {'type': 'text'}, self.title)
        for e in self.entries:
            e.write(writer, writer.root)
        return writer.root

    def to_string(self) -> str:
        writer = AtomWriter("feed")
        self.write(writer)
        return writer.tostring()

    @classmethod
    def from_string(cls, xml: str|bytes, parser: "AtomFeedParser|None" = None) -> Self:
        if parser is None:
            from .parser import AtomFeedParser
            parser = AtomFeedParser()
        return parser.parse_feed(xml, cls)
