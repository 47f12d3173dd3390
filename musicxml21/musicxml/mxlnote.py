# ------------------------------------------------------------------------------
# Name:          mxlnote.py
# Purpose:       Reads a <note> element into a Note (plus its beam fragments)
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import typing as t
from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from music21 import environment

from musicxml21.musicxml.mxlbeams import BeamFragment
from musicxml21.musicxml.mxlbeams import BEAM_ROLES
from musicxml21.musicxml.mxlexceptions import MusicXmlStructureError
from musicxml21.musicxml.mxlexceptions import MusicXmlValidationError
from musicxml21.musicxml.mxlscore import Articulation
from musicxml21.musicxml.mxlscore import Note
from musicxml21.musicxml.mxlscore import Slur
from musicxml21.musicxml.mxlscore import Tie
from musicxml21.musicxml.mxlshared import MxlShared
from musicxml21.musicxml.mxlvalues import Duration
from musicxml21.musicxml.mxlvalues import Pitch
from musicxml21.musicxml.mxlvalues import TimeModification
from musicxml21.musicxml.mxlwarnings import WarningCategories
from musicxml21.musicxml.mxlwarnings import WarningSeverity
from musicxml21.musicxml.mxlwarnings import WarningSink

environLocal = environment.Environment('musicxml21.musicxml.mxlnote')

# Text Strings for Error Conditions
# -----------------------------------------------------------------------------
_MISSING_PITCH = 'Non-rest note is missing <pitch> element'
_MISSING_PITCH_CHILD = '<{}> is missing required <{}> element'
_NON_INTEGER_OCTAVE = 'Non-integer <{}> value "{}"'
_MISSING_SLUR_TYPE = '<slur> element missing required "type" attribute'

# Text Strings for Warnings
# -----------------------------------------------------------------------------
_NO_DURATION = 'Note without <duration> element'
_BAD_DURATION = 'Invalid <duration> value "{}" for note, ignoring duration'
_NO_DIVISIONS = 'No valid divisions in effect for note with duration, using divisions=1'
_BAD_ALTER = 'Invalid <alter> value "{}", ignoring alter'
_BAD_VALUE = 'Invalid <{}> value "{}", ignoring'
_BAD_TIME_MOD = 'Invalid <time-modification>: {}'
_BAD_SLUR_TYPE = '<slur> has invalid type "{}", skipping slur'
_BAD_SLUR_NUMBER = '<slur> has non-integer number "{}", using 1'
_BAD_TIE_TYPE = '<{}> has invalid or missing type "{}", skipping tie'
_BAD_BEAM_NUMBER = '<beam> has non-integer number "{}", using level 1'
_BAD_BEAM_ROLE = '<beam> has unknown value "{}", ignoring'
_INVALID_NOTE = 'Invalid note constructed: {}'

_SLUR_TYPES: tuple[str, ...] = ('start', 'stop', 'continue')
_TIE_TYPES: tuple[str, ...] = ('start', 'stop', 'continue')
_STEM_TYPES: tuple[str, ...] = ('up', 'down', 'double', 'none')
_ACCIDENTAL_TYPES: tuple[str, ...] = (
    'sharp', 'flat', 'natural', 'double-sharp', 'double-flat', 'sharp-sharp', 'flat-flat',
    'natural-sharp', 'natural-flat', 'quarter-sharp', 'quarter-flat',
    'three-quarters-sharp', 'three-quarters-flat', 'sharp-up', 'sharp-down',
    'flat-up', 'flat-down', 'triple-sharp', 'triple-flat', 'other'
)


@dataclass
class NoteFields:
    '''
    Everything read off one <note>, before validation.  Only :func:`buildNote`
    turns this into a :class:`Note`.
    '''
    isRest: bool = False
    pitchStep: str | None = None
    pitchOctave: int | None = None
    pitchAlter: float | None = None
    duration: Duration | None = None
    type: str | None = None
    voice: int | None = None
    staff: int | None = None
    dots: int = 0
    timeModification: TimeModification | None = None
    stem: str | None = None
    accidental: str | None = None
    slurs: list[Slur] = field(default_factory=list)
    ties: list[Tie] = field(default_factory=list)
    articulations: list[Articulation] = field(default_factory=list)
    dynamics: list[str] = field(default_factory=list)
    isChordElementPresent: bool = False
    isGrace: bool = False
    restMeasure: bool = False
    defaultX: float | None = None
    defaultY: float | None = None
    line: int | None = None
    context: dict[str, t.Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NoteResult:
    note: Note | None = None
    error: MusicXmlValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.note is not None


def buildNote(fields: NoteFields) -> NoteResult:
    '''
    Validates the fields and builds the Note.  Never raises: a validation failure comes
    back in NoteResult.error.

    >>> result = buildNote(NoteFields(pitchStep='H', pitchOctave=4))
    >>> result.ok, result.error.rule
    (False, 'pitch_step_validation')
    >>> buildNote(NoteFields(isRest=True)).note.isRest
    True
    '''
    try:
        pitch: Pitch | None = None
        if fields.pitchStep is not None and fields.pitchOctave is not None:
            pitch = Pitch.validated(
                fields.pitchStep,
                fields.pitchOctave,
                fields.pitchAlter,
                line=fields.line,
                context=fields.context
            )
        note = Note(
            pitch=pitch,
            isRest=fields.isRest,
            duration=fields.duration,
            type=fields.type,
            voice=fields.voice,
            staff=fields.staff,
            dots=fields.dots,
            timeModification=fields.timeModification,
            stem=fields.stem,
            accidental=fields.accidental,
            slurs=tuple(fields.slurs),
            ties=tuple(fields.ties),
            articulations=tuple(fields.articulations),
            dynamics=tuple(fields.dynamics),
            isChordElementPresent=fields.isChordElementPresent,
            isGrace=fields.isGrace,
            restMeasure=fields.restMeasure,
            defaultX=fields.defaultX,
            defaultY=fields.defaultY,
            line=fields.line,
        )
    except MusicXmlValidationError as e:
        return NoteResult(error=e)
    return NoteResult(note=note)


class NoteResolver:
    '''
    Converts one <note> element into a :class:`Note` plus the note's beam fragments.

    Only a missing pitch (on a non-rest) or a slur without a type is fatal
    (:class:`MusicXmlStructureError`).  Bad optional values are warned about and left
    out, and a note that fails validation is warned about and skipped (the returned
    note is None).
    '''
    def __init__(self, warningSink: WarningSink) -> None:
        self.warningSink: WarningSink = warningSink

    def _warn(
        self,
        message: str,
        category: str,
        elem: Element,
        context: dict[str, t.Any],
        severity: WarningSeverity = WarningSeverity.MINOR,
        rule: str | None = None
    ) -> None:
        self.warningSink.addWarning(
            message,
            category,
            severity,
            rule=rule,
            line=MxlShared.line(elem),
            element=elem.tag,
            context=context
        )

    def noteFromElement(
        self,
        elem: Element,
        divisions: int | None,
        partId: str,
        measureNumber: str
    ) -> tuple[Note | None, list[BeamFragment]]:
        context: dict[str, t.Any] = MxlShared.context(partId, measureNumber)
        fields = NoteFields(line=MxlShared.line(elem), context=context)

        restElem: Element | None = elem.find('rest')
        fields.isRest = restElem is not None
        if restElem is not None:
            fields.restMeasure = restElem.get('measure') == 'yes'
        else:
            self._readPitch(elem, fields, context)

        fields.isGrace = elem.find('grace') is not None
        fields.isChordElementPresent = elem.find('chord') is not None
        fields.duration = self._readDuration(elem, divisions, fields.isGrace, context)

        fields.type = MxlShared.childText(elem, 'type') or None
        fields.voice = self._readPositiveInt(elem, 'voice', WarningCategories.VOICE, context)
        fields.staff = self._readPositiveInt(elem, 'staff', WarningCategories.NOTATION, context)
        fields.dots = len(elem.findall('dot'))
        fields.stem = self._readChoice(elem, 'stem', _STEM_TYPES, context)
        fields.accidental = self._readChoice(elem, 'accidental', _ACCIDENTAL_TYPES, context)
        fields.defaultX = MxlShared.attrFloat(elem, 'default-x')
        fields.defaultY = MxlShared.attrFloat(elem, 'default-y')

        timeModElem: Element | None = elem.find('time-modification')
        if timeModElem is not None:
            fields.timeModification = self._readTimeModification(timeModElem, context)

        for notationsElem in elem.findall('notations'):
            self._readNotations(notationsElem, fields, context)
        self._readSoundTies(elem, fields, context)

        beamFragments: list[BeamFragment] = self._readBeamFragments(elem, context)

        result: NoteResult = buildNote(fields)
        if result.error is not None:
            self._warn(
                _INVALID_NOTE.format(result.error.message),
                WarningCategories.NOTE_VALIDATION,
                elem,
                {**context, **result.error.context},
                severity=WarningSeverity.MODERATE,
                rule=result.error.rule
            )
            return None, []

        return result.note, beamFragments

    # Per-field readers
    # -----------------------------------------------------------------------------
    def _readPitch(
        self,
        elem: Element,
        fields: NoteFields,
        context: dict[str, t.Any]
    ) -> None:
        pitchElem: Element | None = elem.find('pitch')
        stepTag: str = 'step'
        octaveTag: str = 'octave'
        if pitchElem is None:
            # unpitched (percussion) notes carry a display position instead
            pitchElem = elem.find('unpitched')
            stepTag = 'display-step'
            octaveTag = 'display-octave'
        if pitchElem is None:
            raise MusicXmlStructureError(
                _MISSING_PITCH,
                line=MxlShared.line(elem),
                element='note',
                context=context
            )

        step: str | None = MxlShared.childText(pitchElem, stepTag)
        if step is None:
            raise MusicXmlStructureError(
                _MISSING_PITCH_CHILD.format(pitchElem.tag, stepTag),
                line=MxlShared.line(pitchElem),
                element=pitchElem.tag,
                context=context
            )
        octaveText: str | None = MxlShared.childText(pitchElem, octaveTag)
        if octaveText is None:
            raise MusicXmlStructureError(
                _MISSING_PITCH_CHILD.format(pitchElem.tag, octaveTag),
                line=MxlShared.line(pitchElem),
                element=pitchElem.tag,
                context=context
            )
        octave: int | None = MxlShared.intFromText(octaveText)
        if octave is None:
            raise MusicXmlStructureError(
                _NON_INTEGER_OCTAVE.format(octaveTag, octaveText),
                line=MxlShared.line(pitchElem),
                element=pitchElem.tag,
                context=context
            )

        fields.pitchStep = step
        fields.pitchOctave = octave

        alterText: str | None = MxlShared.childText(pitchElem, 'alter')
        if alterText is not None:
            fields.pitchAlter = MxlShared.alterFromText(alterText)
            if fields.pitchAlter is None:
                self._warn(
                    _BAD_ALTER.format(alterText), WarningCategories.PITCH, pitchElem, context
                )

    def _readDuration(
        self,
        elem: Element,
        divisions: int | None,
        isGrace: bool,
        context: dict[str, t.Any]
    ) -> Duration | None:
        durElem: Element | None = elem.find('duration')
        if durElem is None:
            if not isGrace:
                self._warn(_NO_DURATION, WarningCategories.DURATION, elem, context)
            return None

        durText: str | None = MxlShared.text(durElem)
        value: int | None = MxlShared.intFromText(durText)
        if value is None or value < 0:
            self._warn(
                _BAD_DURATION.format(durText), WarningCategories.DURATION, durElem, context
            )
            return None

        effectiveDivisions: int | None = divisions
        if effectiveDivisions is None or effectiveDivisions <= 0:
            self._warn(
                _NO_DIVISIONS,
                WarningCategories.NOTE_DIVISIONS,
                durElem,
                {**context, 'originalDivisions': divisions}
            )
            effectiveDivisions = 1

        # zero is legal here (it is not legal for Duration.validated)
        return Duration(value, effectiveDivisions)

    def _readPositiveInt(
        self,
        elem: Element,
        tag: str,
        category: str,
        context: dict[str, t.Any]
    ) -> int | None:
        child: Element | None = elem.find(tag)
        if child is None:
            return None
        text: str | None = MxlShared.text(child)
        value: int | None = MxlShared.intFromText(text)
        if value is None or value <= 0:
            self._warn(
                _BAD_VALUE.format(tag, text), category, child, context,
                rule=f'note_{tag}_validation'
            )
            return None
        return value

    def _readChoice(
        self,
        elem: Element,
        tag: str,
        choices: tuple[str, ...],
        context: dict[str, t.Any]
    ) -> str | None:
        child: Element | None = elem.find(tag)
        if child is None:
            return None
        text: str | None = MxlShared.text(child)
        if text not in choices:
            self._warn(_BAD_VALUE.format(tag, text), WarningCategories.NOTATION, child, context)
            return None
        return text

    def _readTimeModification(
        self,
        elem: Element,
        context: dict[str, t.Any]
    ) -> TimeModification | None:
        actualNotes: int | None = MxlShared.childInt(elem, 'actual-notes')
        normalNotes: int | None = MxlShared.childInt(elem, 'normal-notes')
        if actualNotes is None or normalNotes is None:
            self._warn(
                _BAD_TIME_MOD.format('<actual-notes> and <normal-notes> must be integers'),
                WarningCategories.NOTATION,
                elem,
                context,
                rule='time_modification_validation'
            )
            return None

        normalType: str | None = MxlShared.childText(elem, 'normal-type') or None
        normalDots: list[Element] = elem.findall('normal-dot')
        try:
            return TimeModification.validated(
                actualNotes,
                normalNotes,
                normalType,
                len(normalDots) if normalDots else None,
                line=MxlShared.line(elem),
                context=context
            )
        except MusicXmlValidationError as e:
            self._warn(
                _BAD_TIME_MOD.format(e.message),
                WarningCategories.NOTATION,
                elem,
                context,
                rule=e.rule
            )
            return None

    def _readNotations(
        self,
        notationsElem: Element,
        fields: NoteFields,
        context: dict[str, t.Any]
    ) -> None:
        for child in notationsElem:
            if child.tag == 'slur':
                slur: Slur | None = self._slurFromElement(child, context)
                if slur is not None:
                    fields.slurs.append(slur)
            elif child.tag == 'tied':
                tie: Tie | None = self._tieFromElement(child, context)
                if tie is not None:
                    fields.ties.append(tie)
            elif child.tag == 'articulations':
                for articElem in child:
                    fields.articulations.append(
                        Articulation(type=articElem.tag, placement=articElem.get('placement'))
                    )
            elif child.tag == 'dynamics':
                for dynElem in child:
                    if dynElem.tag == 'other-dynamics':
                        fields.dynamics.append(MxlShared.text(dynElem) or '')
                    else:
                        fields.dynamics.append(dynElem.tag)
            else:
                environLocal.printDebug(f'skipping <{child.tag}> in <notations>')

    def _slurFromElement(self, elem: Element, context: dict[str, t.Any]) -> Slur | None:
        slurType: str | None = elem.get('type')
        if slurType is None:
            raise MusicXmlStructureError(
                _MISSING_SLUR_TYPE,
                line=MxlShared.line(elem),
                element='slur',
                context=context
            )
        if slurType not in _SLUR_TYPES:
            self._warn(_BAD_SLUR_TYPE.format(slurType), WarningCategories.NOTATION, elem, context)
            return None

        number: int = 1
        numberStr: str | None = elem.get('number')
        if numberStr:
            parsed: int | None = MxlShared.intFromText(numberStr)
            if parsed is None:
                self._warn(
                    _BAD_SLUR_NUMBER.format(numberStr), WarningCategories.NOTATION, elem, context
                )
            else:
                number = parsed

        return Slur(type=slurType, number=number, placement=elem.get('placement'))

    def _tieFromElement(self, elem: Element, context: dict[str, t.Any]) -> Tie | None:
        tieType: str | None = elem.get('type')
        if tieType not in _TIE_TYPES:
            self._warn(
                _BAD_TIE_TYPE.format(elem.tag, tieType), WarningCategories.TIE, elem, context
            )
            return None
        if t.TYPE_CHECKING:
            assert tieType is not None
        return Tie(type=tieType, placement=elem.get('placement'))

    def _readSoundTies(
        self,
        elem: Element,
        fields: NoteFields,
        context: dict[str, t.Any]
    ) -> None:
        # <tie> (sound) usually duplicates <tied> (notation); only add what's missing
        notatedTypes: set[str] = {tie.type for tie in fields.ties}
        for tieElem in elem.findall('tie'):
            tie: Tie | None = self._tieFromElement(tieElem, context)
            if tie is not None and tie.type not in notatedTypes:
                fields.ties.append(tie)
                notatedTypes.add(tie.type)

    def _readBeamFragments(
        self,
        elem: Element,
        context: dict[str, t.Any]
    ) -> list[BeamFragment]:
        fragments: list[BeamFragment] = []
        for beamElem in elem.findall('beam'):
            level: int = 1
            numberStr: str | None = beamElem.get('number')
            if numberStr is not None:
                parsed: int | None = MxlShared.intFromText(numberStr)
                if parsed is None or parsed < 1:
                    self._warn(
                        _BAD_BEAM_NUMBER.format(numberStr),
                        WarningCategories.BEAM,
                        beamElem,
                        context
                    )
                else:
                    level = parsed

            role: str | None = MxlShared.text(beamElem)
            if role not in BEAM_ROLES:
                self._warn(
                    _BAD_BEAM_ROLE.format(role), WarningCategories.BEAM, beamElem, context
                )
                continue
            if t.TYPE_CHECKING:
                assert role is not None
            fragments.append(BeamFragment(level, role))
        return fragments
