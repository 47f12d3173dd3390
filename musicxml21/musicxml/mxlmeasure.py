# ------------------------------------------------------------------------------
# Name:          mxlmeasure.py
# Purpose:       Parses one <measure> against the state inherited from the previous one
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
'''
The :class:`MeasureEngine` walks a <measure>'s children in document order.  It starts
from a :class:`MeasureState` (divisions, key, time and clefs in effect at the end of
the previous measure), merges every <attributes> it sees into a working copy of that
state, and hands each child to the right reader.  The result is the finished
:class:`Measure` plus the state to hand to the next measure.

>>> from xml.etree.ElementTree import fromstring
>>> from musicxml21.musicxml.mxlwarnings import WarningSink
>>> engine = MeasureEngine(WarningSink())
>>> m1, state = engine.measureFromElement(fromstring(
...     '<measure number="1"><attributes><divisions>2</divisions>'
...     '<time><beats>2</beats><beat-type>4</beat-type></time></attributes>'
...     '<note><pitch><step>C</step><octave>4</octave></pitch><duration>4</duration></note>'
...     '</measure>'), MeasureState(), 'P1')
>>> m2, state = engine.measureFromElement(fromstring('<measure number="2"/>'), state, 'P1')
>>> m2.divisions, m2.timeSignature.ratioString
(2, '2/4')
'''
import typing as t
from dataclasses import dataclass, replace
from enum import IntEnum, auto
from xml.etree.ElementTree import Element

from music21 import environment

from musicxml21.musicxml import mxlvalidation as mv
from musicxml21.musicxml.mxlattributes import AttributesResolver
from musicxml21.musicxml.mxlattributes import AttributesUpdate
from musicxml21.musicxml.mxlbeams import BeamFragment
from musicxml21.musicxml.mxlbeams import BeamReconstructor
from musicxml21.musicxml.mxldirections import MxlDirectionReader
from musicxml21.musicxml.mxlexceptions import MusicXmlStructureError
from musicxml21.musicxml.mxlnote import NoteResolver
from musicxml21.musicxml.mxlscore import Barline
from musicxml21.musicxml.mxlscore import Direction
from musicxml21.musicxml.mxlscore import Ending
from musicxml21.musicxml.mxlscore import Measure
from musicxml21.musicxml.mxlscore import Note
from musicxml21.musicxml.mxlscore import PrintHint
from musicxml21.musicxml.mxlshared import MxlShared
from musicxml21.musicxml.mxltimeline import TimelineTracker
from musicxml21.musicxml.mxlvalues import Clef
from musicxml21.musicxml.mxlvalues import KeySignature
from musicxml21.musicxml.mxlvalues import TimeSignature
from musicxml21.musicxml.mxlwarnings import WarningCategories
from musicxml21.musicxml.mxlwarnings import WarningSeverity
from musicxml21.musicxml.mxlwarnings import WarningSink

environLocal = environment.Environment('musicxml21.musicxml.mxlmeasure')

# when these tags aren't processed, we won't worry about them (at least for now)
_IGNORE_UNPROCESSED: tuple[str, ...] = (
    'sound',          # playback only
    'harmony',        # chord symbols are not part of this model
    'figured-bass',
    'grouping',
    'link',
    'bookmark',
    'listening',
)

# Text Strings for Error Conditions
# -----------------------------------------------------------------------------
_NOT_A_MEASURE = 'Expected a <measure> element, got <{}>'
_ENGINE_CLOSED = 'MeasureEngine is closed; start a new measure first'
_UNPROCESSED_SUBELEMENT = 'Found an unprocessed <{}> element in a <{}>.'


class MeasureEngineState(IntEnum):
    AWAITING_ATTRIBUTES = auto()
    IN_MEASURE = auto()
    CLOSED = auto()


@dataclass(frozen=True)
class MeasureState:
    '''
    The notational context in effect at a measure boundary.  Measures never modify
    one of these; they build a new one with :meth:`merged`.
    '''
    divisions: int | None = None
    keySignature: KeySignature | None = None
    timeSignature: TimeSignature | None = None
    clefs: tuple[Clef, ...] = ()
    staves: int | None = None

    def merged(self, update: AttributesUpdate) -> 'MeasureState':
        '''
        Returns a new state with the update's fields applied.  An incoming clef replaces
        the inherited clef on the same staff; other staves keep theirs.

        >>> from musicxml21.musicxml.mxlvalues import Clef
        >>> s = MeasureState(clefs=(Clef('G', 2), Clef('F', 4, staffNumber=2)))
        >>> s2 = s.merged(AttributesUpdate(divisions=4, clefs=(Clef('C', 3, staffNumber=2),)))
        >>> s2.divisions, [c.sign for c in s2.clefs]
        (4, ['G', 'C'])
        '''
        clefs: tuple[Clef, ...] = self.clefs
        if update.clefs:
            byStaff: dict[int, Clef] = {c.staffNumber: c for c in self.clefs}
            for clef in update.clefs:
                byStaff[clef.staffNumber] = clef
            clefs = tuple(byStaff[n] for n in sorted(byStaff))

        return replace(
            self,
            divisions=update.divisions if update.divisions is not None else self.divisions,
            keySignature=(
                update.keySignature if update.keySignature is not None else self.keySignature
            ),
            timeSignature=(
                update.timeSignature if update.timeSignature is not None
                else self.timeSignature
            ),
            clefs=clefs,
            staves=update.staves if update.staves is not None else self.staves
        )


class MeasureEngine:
    '''
    Parses <measure> elements, one at a time.  An engine can be reused for every measure
    of every part; everything that belongs to one measure is reset at the start of
    :meth:`measureFromElement`.
    '''
    def __init__(
        self,
        warningSink: WarningSink,
        strictClefLines: bool = False,
        checkMeasureDurations: bool = True
    ) -> None:
        self.warningSink: WarningSink = warningSink
        self.checkMeasureDurations: bool = checkMeasureDurations
        self.attributesResolver = AttributesResolver(warningSink, strictClefLines)
        self.noteResolver = NoteResolver(warningSink)
        self.directionReader = MxlDirectionReader(warningSink)

        self.initializeTagToFunctionTables()

        # Current parse state (one measure)
        self.engineState: MeasureEngineState = MeasureEngineState.CLOSED
        self.workingState: MeasureState = MeasureState()
        self.partId: str = ''
        self.measureNumber: str = ''
        self.notes: list[Note] = []
        self.barlines: list[Barline] = []
        self.endings: list[Ending] = []
        self.directions: list[Direction] = []
        self.printHint: PrintHint | None = None
        self.beamReconstructor: BeamReconstructor | None = None
        self.timeline: TimelineTracker | None = None

    def initializeTagToFunctionTables(self) -> None:
        self.measureChildTagToFunction: dict[str, t.Callable[[Element], None]] = {
            'attributes': self._processAttributes,
            'note': self._processNote,
            'backup': self._processMarker,
            'forward': self._processMarker,
            'barline': self._processBarline,
            'ending': self._processEnding,
            'direction': self._processDirection,
            'print': self._processPrint,
        }

    def measureFromElement(
        self,
        elem: Element,
        inherited: MeasureState,
        partId: str
    ) -> tuple[Measure, MeasureState]:
        '''
        Parses one <measure>.  Raises :class:`MusicXmlValidationError` for a missing or
        bad measure number, and lets any fatal error from the readers through.
        '''
        if elem.tag != 'measure':
            raise MusicXmlStructureError(
                _NOT_A_MEASURE.format(elem.tag),
                line=MxlShared.line(elem),
                element=elem.tag,
                context={'part': partId}
            )

        number: str = elem.get('number', '')
        isPickup: bool = elem.get('implicit') == 'yes' and number == '0'
        violation: mv.RuleViolation | None = mv.checkMeasureNumber(
            number, elem.get('implicit') == 'yes'
        )
        if violation is not None:
            raise violation.toError(
                line=MxlShared.line(elem), element='measure', context={'part': partId}
            )

        self._openMeasure(inherited, partId, number)
        environLocal.printDebug(f'measure {number} of part {partId}')

        for child in elem:
            self._processChild(child)

        measure: Measure = self._closeMeasure(
            number=number,
            isPickup=isPickup,
            width=MxlShared.attrFloat(elem, 'width'),
            line=MxlShared.line(elem)
        )
        return measure, self.workingState

    def _openMeasure(self, inherited: MeasureState, partId: str, number: str) -> None:
        self.engineState = MeasureEngineState.AWAITING_ATTRIBUTES
        self.workingState = inherited
        self.partId = partId
        self.measureNumber = number
        self.notes = []
        self.barlines = []
        self.endings = []
        self.directions = []
        self.printHint = None
        self.beamReconstructor = BeamReconstructor(self.warningSink, partId, number)
        self.timeline = TimelineTracker(self.warningSink, partId, number)

    def _processChild(self, child: Element) -> None:
        if self.engineState == MeasureEngineState.CLOSED:
            raise MusicXmlStructureError(_ENGINE_CLOSED, element=child.tag)

        if child.tag != 'attributes':
            self.engineState = MeasureEngineState.IN_MEASURE

        processor: t.Callable[[Element], None] | None = (
            self.measureChildTagToFunction.get(child.tag)
        )
        if processor is not None:
            processor(child)
        elif child.tag not in _IGNORE_UNPROCESSED:
            self.warningSink.addWarning(
                _UNPROCESSED_SUBELEMENT.format(child.tag, 'measure'),
                WarningCategories.COMPATIBILITY,
                WarningSeverity.INFO,
                line=MxlShared.line(child),
                element=child.tag,
                context=MxlShared.context(self.partId, self.measureNumber)
            )

    def _closeMeasure(
        self,
        number: str,
        isPickup: bool,
        width: float | None,
        line: int | None
    ) -> Measure:
        if t.TYPE_CHECKING:
            assert self.beamReconstructor is not None
            assert self.timeline is not None

        self.engineState = MeasureEngineState.CLOSED
        measure = Measure(
            number=number,
            isPickup=isPickup,
            width=width,
            notes=tuple(self.notes),
            beams=self.beamReconstructor.finish(),
            divisions=self.workingState.divisions,
            keySignature=self.workingState.keySignature,
            timeSignature=self.workingState.timeSignature,
            clefs=self.workingState.clefs,
            staves=self.workingState.staves,
            barlines=tuple(self.barlines),
            endings=tuple(self.endings),
            directions=tuple(self.directions),
            printHint=self.printHint,
            cursorEnd=self.timeline.measureLength
        )

        if self.checkMeasureDurations:
            violation: mv.RuleViolation | None = mv.checkMeasureDuration(
                measure.notes,
                measure.timeSignature,
                measure.divisions,
                isPickup,
                measureLength=measure.cursorEnd
            )
            if violation is not None:
                self.warningSink.addWarning(
                    violation.message,
                    WarningCategories.MEASURE,
                    WarningSeverity.INFO,
                    rule=violation.rule,
                    line=line,
                    element='measure',
                    context=MxlShared.context(self.partId, number, **violation.context)
                )

        return measure

    # Measure child processors
    # -----------------------------------------------------------------------------
    def _processAttributes(self, elem: Element) -> None:
        update: AttributesUpdate = self.attributesResolver.attributesFromElement(
            elem, self.workingState.divisions, self.partId, self.measureNumber
        )
        self.workingState = self.workingState.merged(update)

    def _processNote(self, elem: Element) -> None:
        if t.TYPE_CHECKING:
            assert self.beamReconstructor is not None
            assert self.timeline is not None

        note: Note | None
        fragments: list[BeamFragment]
        note, fragments = self.noteResolver.noteFromElement(
            elem, self.workingState.divisions, self.partId, self.measureNumber
        )
        if note is None:
            return

        noteIndex: int = len(self.notes)
        self.notes.append(note)
        self.beamReconstructor.addFragments(noteIndex, fragments)
        self.timeline.advanceForNote(note)

    def _processMarker(self, elem: Element) -> None:
        if t.TYPE_CHECKING:
            assert self.timeline is not None

        rest: Note | None = self.timeline.restFromMarker(elem, self.workingState.divisions)
        if rest is not None:
            self.notes.append(rest)

    def _processBarline(self, elem: Element) -> None:
        barline: Barline
        ending: Ending | None
        barline, ending = self.directionReader.barlineFromElement(
            elem, self.partId, self.measureNumber
        )
        self.barlines.append(barline)
        if ending is not None:
            self.endings.append(ending)

    def _processEnding(self, elem: Element) -> None:
        ending: Ending | None = self.directionReader.endingFromElement(
            elem, self.partId, self.measureNumber
        )
        if ending is not None:
            self.endings.append(ending)

    def _processDirection(self, elem: Element) -> None:
        direction: Direction | None = self.directionReader.directionFromElement(
            elem, self.partId, self.measureNumber
        )
        if direction is not None:
            self.directions.append(direction)

    def _processPrint(self, elem: Element) -> None:
        self.printHint = self.directionReader.printFromElement(elem)
