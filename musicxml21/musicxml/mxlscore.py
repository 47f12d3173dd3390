# ------------------------------------------------------------------------------
# Name:          mxlscore.py
# Purpose:       The parsed score: notes, beams, measures, parts and the score itself
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import typing as t
from dataclasses import dataclass, field

from music21.common.types import OffsetQL

from musicxml21.musicxml import mxlvalidation as mv
from musicxml21.musicxml.mxlvalues import Pitch
from musicxml21.musicxml.mxlvalues import Duration
from musicxml21.musicxml.mxlvalues import KeySignature
from musicxml21.musicxml.mxlvalues import TimeSignature
from musicxml21.musicxml.mxlvalues import Clef
from musicxml21.musicxml.mxlvalues import TimeModification
from musicxml21.musicxml.mxlmetadata import PageLayout
from musicxml21.musicxml.mxlmetadata import SystemLayout
from musicxml21.musicxml.mxlmetadata import StaffLayout

if t.TYPE_CHECKING:
    from musicxml21.musicxml.mxlmetadata import ScoreMetadata
    from musicxml21.musicxml.mxlmetadata import ScorePartInfo
    from musicxml21.musicxml.mxlwarnings import MusicXmlWarning


@dataclass(frozen=True)
class Slur:
    type: str
    number: int = 1
    placement: str | None = None


@dataclass(frozen=True)
class Tie:
    type: str
    placement: str | None = None


@dataclass(frozen=True)
class Articulation:
    type: str
    placement: str | None = None


@dataclass(frozen=True)
class Note:
    '''
    One note, rest or synthesized rest.  Exactly one of ``pitch`` and ``isRest`` must
    be set; anything else raises a :class:`MusicXmlValidationError`.

    >>> from musicxml21.musicxml.mxlvalues import Pitch
    >>> Note(pitch=Pitch('C', 4)).isRest
    False
    >>> Note(pitch=Pitch('C', 4), isRest=True)
    Traceback (most recent call last):
    musicxml21.musicxml.mxlexceptions.MusicXmlValidationError: A rest cannot have a pitch [rule: note_rest_pitch_exclusive] (element: note)
    '''
    pitch: Pitch | None = None
    isRest: bool = False
    duration: Duration | None = None
    type: str | None = None
    voice: int | None = None
    staff: int | None = None
    dots: int = 0
    timeModification: TimeModification | None = None
    stem: str | None = None
    accidental: str | None = None
    slurs: tuple[Slur, ...] = ()
    ties: tuple[Tie, ...] = ()
    articulations: tuple[Articulation, ...] = ()
    dynamics: tuple[str, ...] = ()
    isChordElementPresent: bool = False
    isGrace: bool = False
    isSynthesized: bool = False
    restMeasure: bool = False
    defaultX: float | None = None
    defaultY: float | None = None
    line: int | None = None

    def __post_init__(self) -> None:
        violation: mv.RuleViolation | None = mv.checkRestPitch(self.isRest, self.pitch is not None)
        if violation is None and self.voice is not None:
            violation = mv.checkVoice(self.voice)
        if violation is None and self.staff is not None:
            violation = mv.checkStaff(self.staff)
        if violation is None:
            violation = mv.checkDots(self.dots)
        if violation is not None:
            raise violation.toError(line=self.line, element='note')


@dataclass(frozen=True)
class Beam:
    '''
    A beam group at one level, joining the notes at ``noteIndices`` (indices into the
    owning Measure's notes).  ``role`` joins the fragment markers seen, e.g.
    'begin-continue-end'.
    '''
    level: int
    noteIndices: tuple[int, ...]
    role: str
    measureNumber: str = ''


@dataclass(frozen=True)
class Barline:
    location: str = 'right'
    barStyle: str | None = None
    repeatDirection: str | None = None
    repeatTimes: int | None = None


@dataclass(frozen=True)
class Ending:
    number: str
    type: str
    printObject: bool = True
    text: str | None = None


@dataclass(frozen=True)
class DirectionItem:
    '''
    One child of a <direction-type>: 'words', 'segno', 'coda', 'dynamics', 'wedge',
    'metronome', 'rehearsal'...  ``text`` is the words/rehearsal text or the dynamic
    mark name(s), ``attributes`` keeps whatever formatting attributes were there.
    '''
    kind: str
    text: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Sound:
    tempo: float | None = None
    dynamics: float | None = None
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Direction:
    items: tuple[DirectionItem, ...]
    placement: str | None = None
    offset: int | None = None
    staff: int | None = None
    voice: int | None = None
    sound: Sound | None = None


@dataclass(frozen=True)
class PrintHint:
    newPage: bool = False
    newSystem: bool = False
    blankPage: int | None = None
    pageNumber: str | None = None
    pageLayout: PageLayout | None = None
    systemLayout: SystemLayout | None = None
    staffLayouts: tuple[StaffLayout, ...] = ()
    measureDistance: float | None = None
    measureNumbering: str | None = None


@dataclass(frozen=True)
class Measure:
    number: str
    isPickup: bool = False
    width: float | None = None
    notes: tuple[Note, ...] = ()
    beams: tuple[Beam, ...] = ()
    divisions: int | None = None
    keySignature: KeySignature | None = None
    timeSignature: TimeSignature | None = None
    clefs: tuple[Clef, ...] = ()
    staves: int | None = None
    barlines: tuple[Barline, ...] = ()
    endings: tuple[Ending, ...] = ()
    directions: tuple[Direction, ...] = ()
    printHint: PrintHint | None = None
    cursorEnd: OffsetQL = 0.0

    @property
    def ending(self) -> Ending | None:
        return self.endings[0] if self.endings else None


@dataclass(frozen=True)
class Part:
    id: str
    name: str | None = None
    measures: tuple[Measure, ...] = ()
    info: 'ScorePartInfo | None' = None


@dataclass(frozen=True)
class Score:
    parts: tuple[Part, ...] = ()
    version: str | None = None
    metadata: 'ScoreMetadata | None' = None
    warnings: tuple['MusicXmlWarning', ...] = ()

    @property
    def title(self) -> str | None:
        if self.metadata is None:
            return None
        return self.metadata.title

    def getPartById(self, partId: str) -> Part | None:
        for part in self.parts:
            if part.id == partId:
                return part
        return None
