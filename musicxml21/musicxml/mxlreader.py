# ------------------------------------------------------------------------------
# Name:          mxlreader.py
# Purpose:       MusicXML parser (plain .musicxml/.xml, or compressed .mxl)
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
'''
To convert a MusicXML document into a typed :class:`Score`, use :class:`MusicXmlReader`.

>>> xmlString = """<?xml version="1.0" encoding="UTF-8"?>
... <score-partwise version="4.0">
...   <work><work-title>Example</work-title></work>
...   <part-list>
...     <score-part id="P1"><part-name>Flute</part-name></score-part>
...   </part-list>
...   <part id="P1">
...     <measure number="1">
...       <attributes>
...         <divisions>1</divisions>
...         <key><fifths>0</fifths></key>
...         <time><beats>1</beats><beat-type>4</beat-type></time>
...         <clef><sign>G</sign><line>2</line></clef>
...       </attributes>
...       <note><pitch><step>A</step><octave>4</octave></pitch>
...             <duration>1</duration><type>quarter</type></note>
...     </measure>
...   </part>
... </score-partwise>
... """
>>> from musicxml21.musicxml import MusicXmlReader
>>> reader = MusicXmlReader(xmlString)
>>> score = reader.run()
>>> score.title, score.parts[0].name, score.parts[0].measures[0].notes[0].pitch.nameWithOctave
('Example', 'Flute', 'A4')
>>> reader.warnings
[]

**Fatal errors**

:class:`MusicXmlParseError` is raised for input that isn't XML (or an .mxl archive
that can't be read).  :class:`MusicXmlStructureError` and
:class:`MusicXmlValidationError` are raised by the engine for problems that make the
rest of the document meaningless.  Everything else becomes a :class:`MusicXmlWarning`
in ``reader.warnings``.
'''
import io
import pathlib
import zipfile
from xml.etree.ElementTree import Element, ParseError, fromstring
from xml.parsers import expat

from music21 import environment

from musicxml21.musicxml.mxlexceptions import MusicXmlParseError
from musicxml21.musicxml.mxlexceptions import MusicXmlStructureError
from musicxml21.musicxml.mxlmeasure import MeasureEngine
from musicxml21.musicxml.mxlmetadata import ScoreMetadata
from musicxml21.musicxml.mxlmetadata import ScorePartInfo
from musicxml21.musicxml.mxlmetadatareader import MxlMetadataReader
from musicxml21.musicxml.mxlpart import PartWalker
from musicxml21.musicxml.mxlscore import Part
from musicxml21.musicxml.mxlscore import Score
from musicxml21.musicxml.mxlshared import MxlShared
from musicxml21.musicxml.mxlwarnings import DEFAULT_MAX_WARNINGS
from musicxml21.musicxml.mxlwarnings import MusicXmlWarning
from musicxml21.musicxml.mxlwarnings import WarningCategories
from musicxml21.musicxml.mxlwarnings import WarningSeverity
from musicxml21.musicxml.mxlwarnings import WarningSink
from musicxml21.shared import LineNumberingTreeBuilder
from musicxml21.shared import SharedConstants

environLocal = environment.Environment('musicxml21.musicxml.mxlreader')

_CONTAINER_PATH = 'META-INF/container.xml'

# Text Strings for Error Conditions
# -----------------------------------------------------------------------------
_INVALID_XML_DOC = 'MusicXML document is not valid XML.'
_INVALID_ARCHIVE = 'Compressed MusicXML (.mxl) archive could not be read.'
_NO_ROOTFILE = 'Compressed MusicXML (.mxl) archive contains no MusicXML file.'
_TIMEWISE_UNSUPPORTED = 'score-timewise documents are not supported, only score-partwise.'
_WRONG_ROOT_ELEMENT = 'Root element should be <score-partwise>, not <{}>.'

# Text Strings for Warnings
# -----------------------------------------------------------------------------
_NO_PART_LIST = 'Document has no <part-list>; part ids will not be checked'
_UNSUPPORTED_VERSION = 'MusicXML version "{}" is not one of {}, parsing anyway'
_NO_PARTS = 'Document has no <part> elements'


class ScoreAssembler:
    '''
    Builds a :class:`Score` from a <score-partwise> root element, one :class:`PartWalker`
    fold per <part>.  Parts are independent of each other: no state is shared between
    them, and nothing is checked across them.
    '''
    def __init__(
        self,
        warningSink: WarningSink,
        strictClefLines: bool = False,
        checkMeasureDurations: bool = True
    ) -> None:
        self.warningSink: WarningSink = warningSink
        self.partWalker = PartWalker(
            MeasureEngine(warningSink, strictClefLines, checkMeasureDurations)
        )

    def scoreFromElement(self, root: Element) -> Score:
        if root.tag == 'score-timewise':
            raise MusicXmlStructureError(
                _TIMEWISE_UNSUPPORTED, line=MxlShared.line(root), element=root.tag
            )
        if root.tag != 'score-partwise':
            raise MusicXmlStructureError(
                _WRONG_ROOT_ELEMENT.format(root.tag), line=MxlShared.line(root), element=root.tag
            )

        version: str | None = root.get('version')
        if version is not None and version not in SharedConstants._SUPPORTED_MUSICXML_VERSIONS:
            self.warningSink.addWarning(
                _UNSUPPORTED_VERSION.format(
                    version, ', '.join(SharedConstants._SUPPORTED_MUSICXML_VERSIONS)
                ),
                WarningCategories.COMPATIBILITY,
                WarningSeverity.INFO,
                line=MxlShared.line(root),
                element=root.tag
            )

        metadata: ScoreMetadata = MxlMetadataReader(root).processMetadata()

        partInfos: dict[str, ScorePartInfo] | None = None
        if root.find('part-list') is None:
            self.warningSink.addWarning(
                _NO_PART_LIST,
                WarningCategories.STRUCTURE,
                WarningSeverity.MODERATE,
                line=MxlShared.line(root),
                element=root.tag
            )
        else:
            partInfos = {info.id: info for info in metadata.partInfos}

        parts: list[Part] = []
        for partElem in root.findall('part'):
            parts.append(self.partWalker.partFromElement(partElem, partInfos))

        if not parts:
            self.warningSink.addWarning(
                _NO_PARTS,
                WarningCategories.STRUCTURE,
                WarningSeverity.SERIOUS,
                line=MxlShared.line(root),
                element=root.tag
            )

        return Score(
            parts=tuple(parts),
            version=version,
            metadata=metadata,
            warnings=tuple(self.warningSink.warnings)
        )


class MusicXmlReader:
    '''
    A :class:`MusicXmlReader` instance manages the conversion of one MusicXML document
    into a :class:`Score`.

    ``theDocument`` may be a str (XML text) or bytes (XML, or the contents of a
    compressed .mxl file, which is recognized by its zip signature).

    Pass in ``warningSink`` to collect warnings from several readers in one place
    (a WarningSink can be shared across threads); otherwise each reader gets its own.

    :raises: :exc:`MusicXmlParseError` when the document is not valid XML, or is an
        unreadable .mxl archive.
    '''
    def __init__(
        self,
        theDocument: str | bytes | None = None,
        warningSink: WarningSink | None = None,
        maxWarnings: int = DEFAULT_MAX_WARNINGS,
        strictClefLines: bool = False,
        checkMeasureDurations: bool = True
    ) -> None:
        environLocal.printDebug('*** initializing MusicXmlReader')

        self.warningSink: WarningSink = (
            warningSink if warningSink is not None else WarningSink(maxWarnings)
        )
        self.strictClefLines: bool = strictClefLines
        self.checkMeasureDurations: bool = checkMeasureDurations

        self.documentRoot: Element
        if theDocument is None:
            # Without this, the class can't be pickled.
            self.documentRoot = Element('score-partwise')
            return

        if isinstance(theDocument, bytes):
            if theDocument.startswith(SharedConstants._ZIP_SIGNATURE):
                theDocument = self.rootfileFromArchive(theDocument)
            else:
                theDocument = self.decodeDocument(theDocument)

        try:
            self.documentRoot = LineNumberingTreeBuilder().parse(theDocument)
        except expat.ExpatError as parseErr:
            environLocal.printDebug(f'MusicXML parse failed: {parseErr}')
            raise MusicXmlParseError(_INVALID_XML_DOC, line=parseErr.lineno) from parseErr

    @classmethod
    def fromFile(cls, filePath: str | pathlib.Path, **keywords) -> 'MusicXmlReader':
        with open(filePath, 'rb') as f:
            data: bytes = f.read()
        return cls(data, **keywords)

    def run(self) -> Score:
        '''
        Parses the document.  Raises MusicXmlStructureError or MusicXmlValidationError
        for fatal problems; everything else ends up in self.warnings (and in the
        returned Score's warnings).
        '''
        assembler = ScoreAssembler(
            self.warningSink,
            strictClefLines=self.strictClefLines,
            checkMeasureDurations=self.checkMeasureDurations
        )
        return assembler.scoreFromElement(self.documentRoot)

    @property
    def warnings(self) -> list[MusicXmlWarning]:
        return self.warningSink.warnings

    @staticmethod
    def decodeDocument(data: bytes) -> str:
        # We try the three most likely encodings to work.  And sometimes latin-1
        # characters can work their way in.
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError:
            try:
                return data.decode('utf-16')
            except UnicodeError:
                return data.decode('latin-1')

    @staticmethod
    def rootfileFromArchive(data: bytes) -> str:
        '''
        Returns the decoded text of the score inside a compressed .mxl archive: the
        first rootfile named by META-INF/container.xml, else a .xml/.musicxml file at
        the top of the archive, else any .xml file outside META-INF.
        '''
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                names: list[str] = archive.namelist()
                chosen: str | None = None

                if _CONTAINER_PATH in names:
                    chosen = MusicXmlReader._rootfileFromContainer(archive.read(_CONTAINER_PATH))
                    if chosen is not None and chosen not in names:
                        environLocal.printDebug(f'container rootfile {chosen} not in archive')
                        chosen = None

                if chosen is None:
                    candidates: list[str] = [
                        n for n in names
                        if not n.startswith('META-INF/') and '/' not in n
                            and (n.endswith('.xml') or n.endswith('.musicxml'))
                    ]
                    if not candidates:
                        candidates = [
                            n for n in names
                            if not n.startswith('META-INF/') and n.endswith('.xml')
                        ]
                    if candidates:
                        chosen = candidates[0]

                if chosen is None:
                    raise MusicXmlParseError(_NO_ROOTFILE)

                return MusicXmlReader.decodeDocument(archive.read(chosen))
        except zipfile.BadZipFile as zipErr:
            raise MusicXmlParseError(_INVALID_ARCHIVE) from zipErr

    @staticmethod
    def _rootfileFromContainer(containerData: bytes) -> str | None:
        try:
            container: Element = fromstring(containerData)
        except ParseError:
            return None
        for elem in container.iter():
            # the container may or may not use a namespace
            if elem.tag == 'rootfile' or elem.tag.endswith('}rootfile'):
                fullPath: str | None = elem.get('full-path')
                if fullPath:
                    return fullPath
        return None
