# ------------------------------------------------------------------------------
# Name:          mxltimeline.py
# Purpose:       Tracks the within-measure cursor and turns <forward>/<backup> into rests
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
'''
A :class:`TimelineTracker` follows the timing cursor through one measure.  Notes move
it forward (unless they are chord members or grace notes), and every <forward> or
<backup> with a usable duration becomes a synthesized rest in the measure's note
sequence, at the marker's position in the document.

Both markers produce the same rest.  This is a single-stream model: it makes every
explicit gap or rewind show up as a silent event, but it does not rebuild separate
per-voice timelines.
'''
from xml.etree.ElementTree import Element

from music21 import environment
from music21.common.numberTools import opFrac
from music21.common.types import OffsetQL

from musicxml21.musicxml.mxlscore import Note
from musicxml21.musicxml.mxlshared import MxlShared
from musicxml21.musicxml.mxlvalues import Duration
from musicxml21.musicxml.mxlwarnings import WarningCategories
from musicxml21.musicxml.mxlwarnings import WarningSeverity
from musicxml21.musicxml.mxlwarnings import WarningSink
from musicxml21.shared import M21Utilities

environLocal = environment.Environment('musicxml21.musicxml.mxltimeline')

MARKER_FORWARD = 'forward'
MARKER_BACKUP = 'backup'

# Text Strings for Warnings
# -----------------------------------------------------------------------------
_NO_DIVISIONS = 'No valid divisions in effect for <{}>, using divisions=1'
_BACKUP_TOO_FAR = '<backup> of {} quarter notes goes before the start of the measure'


class TimelineTracker:
    '''
    >>> from xml.etree.ElementTree import fromstring
    >>> from musicxml21.musicxml.mxlwarnings import WarningSink
    >>> tracker = TimelineTracker(WarningSink(), 'P1', '1')
    >>> rest = tracker.restFromMarker(
    ...     fromstring('<forward><duration>720</duration></forward>'), 480)
    >>> rest.isRest, rest.type, rest.dots, rest.isSynthesized
    (True, 'quarter', 1, True)
    >>> tracker.cursor
    1.5
    >>> tracker.restFromMarker(fromstring('<backup/>'), 480) is None
    True
    '''
    def __init__(self, warningSink: WarningSink, partId: str, measureNumber: str) -> None:
        self.warningSink: WarningSink = warningSink
        self.partId: str = partId
        self.measureNumber: str = measureNumber
        # both in quarter notes
        self.cursor: OffsetQL = 0.0
        self.maxCursor: OffsetQL = 0.0

    def _moveCursor(self, delta: OffsetQL) -> None:
        self.cursor = opFrac(self.cursor + delta)
        if self.cursor < 0:
            self.warningSink.addWarning(
                _BACKUP_TOO_FAR.format(-delta),
                WarningCategories.MEASURE,
                WarningSeverity.MINOR,
                element=MARKER_BACKUP,
                context={'part': self.partId, 'measure': self.measureNumber}
            )
            self.cursor = 0.0
        if self.cursor > self.maxCursor:
            self.maxCursor = self.cursor

    def advanceForNote(self, note: Note) -> None:
        if note.isChordElementPresent or note.isGrace or note.duration is None:
            return
        self._moveCursor(note.duration.quarterLength)

    def restFromMarker(self, elem: Element, divisions: int | None) -> Note | None:
        '''
        Returns the rest implied by a <forward> or <backup> element, or None if the
        element has no usable duration.  A zero duration gives a zero-length rest with
        no type.
        '''
        kind: str = elem.tag
        durText: str | None = MxlShared.childText(elem, 'duration')
        value: int | None = MxlShared.intFromText(durText)
        if value is None or value < 0:
            environLocal.printDebug(
                f'skipping <{kind}> without usable duration ({durText!r})'
                + f' in part {self.partId} measure {self.measureNumber}'
            )
            return None

        if divisions is None or divisions <= 0:
            self.warningSink.addWarning(
                _NO_DIVISIONS.format(kind),
                WarningCategories.NOTE_DIVISIONS,
                WarningSeverity.MINOR,
                line=MxlShared.line(elem),
                element=kind,
                context={'part': self.partId, 'measure': self.measureNumber}
            )
            divisions = 1

        duration = Duration(value, divisions)
        ql: OffsetQL = duration.quarterLength
        if kind == MARKER_BACKUP:
            self._moveCursor(opFrac(-ql))
        else:
            self._moveCursor(ql)

        noteType: str | None
        dots: int
        noteType, dots = M21Utilities.noteTypeAndDotsFromQuarterLength(ql)

        # voice/staff are only kept if they are sane
        voice: int | None = MxlShared.childInt(elem, 'voice')
        if voice is not None and voice <= 0:
            voice = None
        staff: int | None = MxlShared.childInt(elem, 'staff')
        if staff is not None and staff <= 0:
            staff = None

        return Note(
            isRest=True,
            duration=duration,
            type=noteType,
            dots=dots,
            voice=voice,
            staff=staff,
            isSynthesized=True,
            line=MxlShared.line(elem),
        )

    @property
    def measureLength(self) -> OffsetQL:
        return self.maxCursor
