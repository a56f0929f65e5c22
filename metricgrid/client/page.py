"""
Page model for the metrics grid.

A small element tree with just enough of the DOM contract for the grid:
selector lookup, element creation, child replacement, text content and
HTML serialisation. The UI server renders it to browsers and the headless
runner writes it to disk.
"""

from typing import Dict, Iterator, List, Optional

from markupsafe import escape

# Elements rendered without a closing tag
VOID_ELEMENTS = {"img", "br", "hr", "meta", "link", "input"}

FRAGMENT_TAG = "#fragment"
TEXT_TAG = "#text"


class Element:
    """A single node of the page tree."""

    def __init__(self, tag: str, attrs: Optional[Dict[str, str]] = None, text: str = ""):
        self.tag = tag
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.children: List["Element"] = []
        self.parent: Optional["Element"] = None
        self._text = text

    def __repr__(self):
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident}>"

    # ---------------- attributes ----------------

    @property
    def id(self) -> str:
        return self.attrs.get("id", "")

    @id.setter
    def id(self, value: str):
        self.attrs["id"] = value

    @property
    def class_name(self) -> str:
        return self.attrs.get("class", "")

    @class_name.setter
    def class_name(self, value: str):
        self.attrs["class"] = value

    @property
    def classes(self) -> List[str]:
        return self.class_name.split()

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    def set_attribute(self, name: str, value) -> None:
        self.attrs[name] = str(value)

    # ---------------- tree mutation ----------------

    def append_child(self, child: "Element") -> "Element":
        """Append a child; a fragment is unpacked into its children in one step."""
        if child.tag == FRAGMENT_TAG:
            moved = list(child.children)
            child.children = []
            for node in moved:
                node.parent = self
            self.children.extend(moved)
            return child

        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: "Element") -> "Element":
        self.children.remove(child)
        child.parent = None
        return child

    def replace_children(self, *nodes: "Element") -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        for node in nodes:
            self.append_child(node)

    @property
    def text_content(self) -> str:
        if self.tag == TEXT_TAG:
            return self._text
        return "".join(child.text_content for child in self.children)

    @text_content.setter
    def text_content(self, value: str):
        self.replace_children(Element(TEXT_TAG, text=value))

    # ---------------- lookup ----------------

    def iter(self) -> Iterator["Element"]:
        """Depth-first walk over descendants (self excluded)."""
        for child in self.children:
            yield child
            yield from child.iter()

    def contains(self, node: "Element") -> bool:
        current = node
        while current is not None:
            if current is self:
                return True
            current = current.parent
        return False

    def matches(self, selector: str) -> bool:
        """Match a simple selector: `tag`, `.class`, `#id` or `tag.class`."""
        if self.tag in (TEXT_TAG, FRAGMENT_TAG):
            return False
        if selector.startswith("#"):
            return self.id == selector[1:]
        tag, _, cls = selector.partition(".")
        if tag and tag != self.tag:
            return False
        if cls and cls not in self.classes:
            return False
        return bool(tag or cls)

    def query_selector(self, selector: str) -> Optional["Element"]:
        for node in self.iter():
            if node.matches(selector):
                return node
        return None

    def query_selector_all(self, selector: str) -> List["Element"]:
        return [node for node in self.iter() if node.matches(selector)]

    def get_element_by_id(self, element_id: str) -> Optional["Element"]:
        return self.query_selector(f"#{element_id}")

    # ---------------- serialisation ----------------

    def inner_html(self) -> str:
        return "".join(child.outer_html() for child in self.children)

    def outer_html(self) -> str:
        if self.tag == TEXT_TAG:
            return str(escape(self._text))
        if self.tag == FRAGMENT_TAG:
            return self.inner_html()

        attrs = "".join(f' {name}="{escape(value)}"' for name, value in self.attrs.items())
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>"


class Document:
    """Root of a page: an `html` element holding a `body`."""

    def __init__(self):
        self.document_element = Element("html")
        self.body = Element("body")
        self.document_element.append_child(self.body)

    @classmethod
    def with_container(cls, selector: str = ".metrics") -> "Document":
        """Create a page whose body holds a single grid container matching `selector`."""
        document = cls()
        document.body.append_child(document.create_element_for(selector))
        return document

    def create_element(self, tag: str, attrs: Optional[Dict[str, str]] = None) -> Element:
        return Element(tag, attrs)

    def create_element_for(self, selector: str) -> Element:
        """Create an element matched by a simple selector (`#id`, `.class`, `tag`, `tag.class`)."""
        if any(ch in selector for ch in " >+~[:,"):
            raise ValueError(f"Unsupported container selector: {selector!r}")
        if selector.startswith("#"):
            element = Element("div", {"id": selector[1:]})
        else:
            tag, _, cls = selector.partition(".")
            element = Element(tag or "div", {"class": cls} if cls else None)

        if not element.matches(selector):
            raise ValueError(f"Unsupported container selector: {selector!r}")
        return element

    def create_document_fragment(self) -> Element:
        return Element(FRAGMENT_TAG)

    def query_selector(self, selector: str) -> Optional[Element]:
        return self.document_element.query_selector(selector)

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return self.document_element.get_element_by_id(element_id)

    def to_html(self) -> str:
        return "<!DOCTYPE html>\n" + self.document_element.outer_html()
