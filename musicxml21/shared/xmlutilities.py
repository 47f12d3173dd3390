# ------------------------------------------------------------------------------
# Name:          xmlutilities.py
# Purpose:       ElementTree building with source line numbers.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
from xml.etree.ElementTree import TreeBuilder, Element
from xml.parsers import expat

class SourceLineElement(Element):
    '''
    An Element that also remembers the line in the source document where its start
    tag was found (or None if it was built by hand).
    '''
    sourceline: int | None = None

class LineNumberingTreeBuilder:
    '''
    Wraps an ElementTree TreeBuilder and feeds it from expat directly, so that every
    element it builds gets a sourceline.

    >>> root = LineNumberingTreeBuilder().parse('<a>\\n  <b/>\\n  <c>x</c>\\n</a>')
    >>> [(e.tag, e.sourceline) for e in root.iter()]
    [('a', 1), ('b', 2), ('c', 3)]
    '''
    def __init__(self) -> None:
        self.tb: TreeBuilder = TreeBuilder(element_factory=SourceLineElement)
        self.parser = expat.ParserCreate()
        self.parser.buffer_text = True
        self.parser.StartElementHandler = self.start
        self.parser.EndElementHandler = self.end
        self.parser.CharacterDataHandler = self.data

    def start(self, name: str, attr: dict[str, str]) -> None:
        elem: Element = self.tb.start(name, attr)
        if isinstance(elem, SourceLineElement):
            elem.sourceline = self.parser.CurrentLineNumber

    def end(self, name: str) -> None:
        self.tb.end(name)

    def data(self, theData: str) -> None:
        self.tb.data(theData)

    def close(self) -> Element:
        return self.tb.close()

    def parse(self, document: str | bytes) -> Element:
        '''
        Parses the whole document and returns the root element.  Raises
        expat.ExpatError if the document is not well-formed XML.
        '''
        self.parser.Parse(document, True)
        return self.close()

def sourceLineOf(elem: Element | None) -> int | None:
    if elem is None:
        return None
    return getattr(elem, 'sourceline', None)
