# ------------------------------------------------------------------------------
# Name:          mxlvalidation.py
# Purpose:       Pure rule checks for MusicXML values, notes and measures.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
'''
Every check in this module is a pure function: it returns None when the value is
fine, or a :class:`RuleViolation` naming the rule that was broken.  Nothing here
raises and nothing here records warnings; callers decide whether a violation is
fatal (:meth:`RuleViolation.toError`) or gets downgraded to a warning.

>>> checkPitch('C', 4, None) is None
True
>>> checkPitch('H', 4, None).rule
'pitch_step_validation'
>>> checkTimeSignature(3, 6).rule
'time_signature_beat_type_validation'
'''
import typing as t
from dataclasses import dataclass, field
from fractions import Fraction

from music21.common.types import OffsetQL

from musicxml21.musicxml.mxlexceptions import MusicXmlValidationError

if t.TYPE_CHECKING:
    from musicxml21.musicxml.mxlscore import Note
    from musicxml21.musicxml.mxlvalues import TimeSignature

VALID_STEPS: tuple[str, ...] = ('C', 'D', 'E', 'F', 'G', 'A', 'B')
MIN_OCTAVE: int = 0
MAX_OCTAVE: int = 9
MIN_ALTER: float = -2
MAX_ALTER: float = 2
MIN_FIFTHS: int = -7
MAX_FIFTHS: int = 7
VALID_MODES: tuple[str, ...] = (
    'major', 'minor', 'dorian', 'phrygian', 'lydian',
    'mixolydian', 'aeolian', 'ionian', 'locrian'
)
# clef signs that normally need a <line>
LINED_CLEF_SIGNS: tuple[str, ...] = ('G', 'F', 'C')

# rule ids
PITCH_STEP_RULE = 'pitch_step_validation'
PITCH_OCTAVE_RULE = 'pitch_octave_validation'
PITCH_ALTER_RULE = 'pitch_alter_validation'
DURATION_POSITIVE_RULE = 'duration_positive_validation'
DURATION_DIVISIONS_RULE = 'duration_divisions_validation'
DIVISIONS_POSITIVE_RULE = 'divisions_positive_validation'
KEY_FIFTHS_RULE = 'key_signature_fifths_validation'
KEY_MODE_RULE = 'key_signature_mode_validation'
TIME_BEATS_RULE = 'time_signature_beats_validation'
TIME_BEAT_TYPE_RULE = 'time_signature_beat_type_validation'
TIME_MODIFICATION_RULE = 'time_modification_validation'
CLEF_SIGN_RULE = 'clef_sign_not_empty'
CLEF_LINE_RULE = 'clef_line_required_for_sign'
NOTE_REST_PITCH_RULE = 'note_rest_pitch_exclusive'
NOTE_PITCH_REQUIRED_RULE = 'note_pitch_required_validation'
NOTE_VOICE_RULE = 'note_voice_validation'
NOTE_STAFF_RULE = 'note_staff_validation'
NOTE_DOTS_RULE = 'note_dots_validation'
MEASURE_NUMBER_REQUIRED_RULE = 'measure_number_required'
MEASURE_NUMBER_RULE = 'measure_number_validation'
MEASURE_DURATION_RULE = 'measure_duration_mismatch'


@dataclass(frozen=True)
class RuleViolation:
    rule: str
    message: str
    context: dict[str, t.Any] = field(default_factory=dict)

    def toError(
        self,
        line: int | None = None,
        element: str | None = None,
        context: dict[str, t.Any] | None = None
    ) -> MusicXmlValidationError:
        fullContext: dict[str, t.Any] = dict(self.context)
        if context:
            fullContext.update(context)
        return MusicXmlValidationError(
            self.message,
            rule=self.rule,
            line=line,
            element=element,
            context=fullContext
        )


def isPowerOfTwo(value: int) -> bool:
    '''
    >>> [isPowerOfTwo(n) for n in (1, 2, 3, 4, 6, 8, 0, -4)]
    [True, True, False, True, False, True, False, False]
    '''
    return value > 0 and (value & (value - 1)) == 0


def checkPitch(step: str, octave: int, alter: float | None) -> RuleViolation | None:
    if step not in VALID_STEPS:
        return RuleViolation(
            PITCH_STEP_RULE,
            f'Invalid pitch step "{step}", must be one of {", ".join(VALID_STEPS)}',
            {'step': step}
        )
    if not MIN_OCTAVE <= octave <= MAX_OCTAVE:
        return RuleViolation(
            PITCH_OCTAVE_RULE,
            f'Pitch octave {octave} is out of range ({MIN_OCTAVE}-{MAX_OCTAVE})',
            {'octave': octave}
        )
    if alter is not None and not MIN_ALTER <= alter <= MAX_ALTER:
        return RuleViolation(
            PITCH_ALTER_RULE,
            f'Pitch alter {alter} is out of range ({MIN_ALTER}-{MAX_ALTER})',
            {'alter': alter}
        )
    return None


def checkDuration(value: int, divisions: int) -> RuleViolation | None:
    if value <= 0:
        return RuleViolation(
            DURATION_POSITIVE_RULE,
            f'Duration value must be positive, got {value}',
            {'value': value}
        )
    if divisions <= 0:
        return RuleViolation(
            DURATION_DIVISIONS_RULE,
            f'Duration divisions must be positive, got {divisions}',
            {'divisions': divisions}
        )
    return None


def checkDivisions(divisions: int) -> RuleViolation | None:
    if divisions <= 0:
        return RuleViolation(
            DIVISIONS_POSITIVE_RULE,
            f'Divisions must be positive, got {divisions}',
            {'divisions': divisions}
        )
    return None


def checkKeySignature(fifths: int, mode: str | None) -> RuleViolation | None:
    if not MIN_FIFTHS <= fifths <= MAX_FIFTHS:
        return RuleViolation(
            KEY_FIFTHS_RULE,
            f'Key signature fifths {fifths} is out of range ({MIN_FIFTHS} to {MAX_FIFTHS})',
            {'fifths': fifths}
        )
    if mode is not None and mode.lower() not in VALID_MODES:
        return RuleViolation(
            KEY_MODE_RULE,
            f'Unknown key signature mode "{mode}"',
            {'mode': mode}
        )
    return None


def checkTimeSignature(beats: int, beatType: int) -> RuleViolation | None:
    if beats <= 0:
        return RuleViolation(
            TIME_BEATS_RULE,
            f'Time signature beats must be positive, got {beats}',
            {'beats': beats}
        )
    if not isPowerOfTwo(beatType):
        return RuleViolation(
            TIME_BEAT_TYPE_RULE,
            f'Time signature beat-type must be a positive power of two, got {beatType}',
            {'beatType': beatType}
        )
    return None


def checkTimeModification(actualNotes: int, normalNotes: int) -> RuleViolation | None:
    if actualNotes <= 0 or normalNotes <= 0:
        return RuleViolation(
            TIME_MODIFICATION_RULE,
            'Time modification actual-notes and normal-notes must be positive, '
            + f'got {actualNotes}:{normalNotes}',
            {'actualNotes': actualNotes, 'normalNotes': normalNotes}
        )
    return None


def checkClef(sign: str, line: int | None, requireLine: bool = False) -> RuleViolation | None:
    '''
    A G, F or C clef without a line is only a violation when the caller asks for it.

    >>> checkClef('G', None) is None
    True
    >>> checkClef('G', None, requireLine=True).rule
    'clef_line_required_for_sign'
    >>> checkClef('percussion', None, requireLine=True) is None
    True
    '''
    if not sign:
        return RuleViolation(CLEF_SIGN_RULE, 'Clef sign must not be empty')
    if requireLine and line is None and sign in LINED_CLEF_SIGNS:
        return RuleViolation(
            CLEF_LINE_RULE,
            f'Clef sign "{sign}" requires a line',
            {'sign': sign}
        )
    return None


def checkRestPitch(isRest: bool, hasPitch: bool) -> RuleViolation | None:
    if isRest and hasPitch:
        return RuleViolation(NOTE_REST_PITCH_RULE, 'A rest cannot have a pitch')
    if not isRest and not hasPitch:
        return RuleViolation(NOTE_PITCH_REQUIRED_RULE, 'A non-rest note must have a pitch')
    return None


def checkVoice(voice: int) -> RuleViolation | None:
    if voice <= 0:
        return RuleViolation(
            NOTE_VOICE_RULE, f'Voice must be a positive integer, got {voice}', {'voice': voice}
        )
    return None


def checkStaff(staff: int) -> RuleViolation | None:
    if staff <= 0:
        return RuleViolation(
            NOTE_STAFF_RULE, f'Staff must be a positive integer, got {staff}', {'staff': staff}
        )
    return None


def checkDots(dots: int) -> RuleViolation | None:
    if dots < 0:
        return RuleViolation(
            NOTE_DOTS_RULE, f'Dot count must not be negative, got {dots}', {'dots': dots}
        )
    return None


def checkMeasureNumber(number: str | None, isImplicit: bool) -> RuleViolation | None:
    '''
    Measure numbers must be non-negative integers.  Zero is only allowed for an
    implicit (pickup) measure.

    >>> checkMeasureNumber('12', False) is None
    True
    >>> checkMeasureNumber('0', True) is None
    True
    >>> checkMeasureNumber('0', False).rule
    'measure_number_validation'
    >>> checkMeasureNumber('', False).rule
    'measure_number_required'
    '''
    if not number:
        return RuleViolation(MEASURE_NUMBER_REQUIRED_RULE, 'Measure number is required')

    try:
        numberInt: int = int(number)
    except ValueError:
        numberInt = -1

    if numberInt < 0 or (numberInt == 0 and not isImplicit):
        return RuleViolation(
            MEASURE_NUMBER_RULE,
            f'Invalid measure number: {number}',
            {'measure': number, 'implicit': isImplicit}
        )
    return None


def expectedMeasureDuration(timeSignature: 'TimeSignature', divisions: int) -> Fraction:
    '''
    The length of a full measure in divisions units.

    >>> from musicxml21.musicxml.mxlvalues import TimeSignature
    >>> expectedMeasureDuration(TimeSignature(6, 8), 4)
    Fraction(12, 1)
    '''
    return Fraction(timeSignature.beats * divisions * 4, timeSignature.beatType)


def checkMeasureDuration(
    notes: t.Sequence['Note'],
    timeSignature: 'TimeSignature | None',
    divisions: int | None,
    isPickup: bool = False,
    measureLength: OffsetQL | None = None
) -> RuleViolation | None:
    '''
    Compares the measure's length against the time signature.  If the caller tracked
    the timeline, measureLength (in quarter notes) is used.  Otherwise the longest
    voice's summed duration is used: chord members, grace notes and rests synthesized
    from <forward>/<backup> do not count, and notes without a duration are skipped.
    Pickup measures are allowed to be short.  The result is only ever reported as a
    warning.
    '''
    if timeSignature is None or not divisions or divisions <= 0:
        return None

    total: Fraction
    if measureLength is not None:
        total = Fraction(measureLength) * divisions
    else:
        voiceTotals: dict[int, Fraction] = {}
        for note in notes:
            if (note.isChordElementPresent or note.isGrace or note.isSynthesized
                    or note.duration is None):
                continue
            voice: int = note.voice if note.voice is not None else 1
            # scale to the measure's divisions, in case a duration was parsed with another one
            voiceTotals[voice] = (
                voiceTotals.get(voice, Fraction(0))
                + Fraction(note.duration.value * divisions, note.duration.divisions)
            )
        total = max(voiceTotals.values(), default=Fraction(0))

    if total == 0:
        return None

    expected: Fraction = expectedMeasureDuration(timeSignature, divisions)
    if total == expected or (isPickup and total < expected):
        return None

    return RuleViolation(
        MEASURE_DURATION_RULE,
        f'Measure duration {total} does not match time signature '
        + f'{timeSignature.beats}/{timeSignature.beatType} (expected {expected})',
        {'actual': str(total), 'expected': str(expected)}
    )
