import pytest

# The things we're testing
from musicxml21.musicxml import mxlvalidation as mv
from musicxml21.musicxml import Duration
from musicxml21.musicxml import MusicXmlError
from musicxml21.musicxml import MusicXmlValidationError
from musicxml21.musicxml import Note
from musicxml21.musicxml import Pitch
from musicxml21.musicxml import TimeSignature

# test utilities
from tests.Utilities import *

def _quarter(divisions: int = 1, **kw) -> Note:
    return Note(pitch=Pitch('C', 4), duration=Duration(divisions, divisions), **kw)

def test_PowerOfTwo():
    assert [n for n in range(-2, 70) if mv.isPowerOfTwo(n)] == [1, 2, 4, 8, 16, 32, 64]

def test_MeasureNumber():
    CheckIsNone(mv.checkMeasureNumber('1', False))
    CheckIsNone(mv.checkMeasureNumber('0', True))
    assert mv.checkMeasureNumber('0', False).rule == 'measure_number_validation'
    assert mv.checkMeasureNumber('-3', False).rule == 'measure_number_validation'
    assert mv.checkMeasureNumber('12a', False).rule == 'measure_number_validation'
    assert mv.checkMeasureNumber('', False).rule == 'measure_number_required'
    assert mv.checkMeasureNumber(None, True).rule == 'measure_number_required'

def test_RestPitchExclusive():
    assert mv.checkRestPitch(True, True).rule == 'note_rest_pitch_exclusive'
    assert mv.checkRestPitch(False, False).rule == 'note_pitch_required_validation'
    CheckIsNone(mv.checkRestPitch(True, False))
    CheckIsNone(mv.checkRestPitch(False, True))

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Note(pitch=Pitch('C', 4), isRest=True)
    assert excInfo.value.rule == 'note_rest_pitch_exclusive'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Note(isRest=False)
    assert excInfo.value.rule == 'note_pitch_required_validation'

def test_NoteVoiceStaffDots():
    with pytest.raises(MusicXmlValidationError) as excInfo:
        Note(isRest=True, voice=0)
    assert excInfo.value.rule == 'note_voice_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Note(isRest=True, staff=-1)
    assert excInfo.value.rule == 'note_staff_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Note(isRest=True, dots=-1)
    assert excInfo.value.rule == 'note_dots_validation'

def test_ExpectedMeasureDuration():
    assert mv.expectedMeasureDuration(TimeSignature(4, 4), 1) == 4
    assert mv.expectedMeasureDuration(TimeSignature(6, 8), 2) == 6
    assert mv.expectedMeasureDuration(TimeSignature(3, 2), 480) == 2880

def test_MeasureDuration():
    ts = TimeSignature(2, 4)
    full = [_quarter(), _quarter()]
    CheckIsNone(mv.checkMeasureDuration(full, ts, 1))

    short = [_quarter()]
    violation = mv.checkMeasureDuration(short, ts, 1)
    assert violation.rule == 'measure_duration_mismatch'
    assert violation.context == {'actual': '1', 'expected': '2'}

    # pickups may be short, never long
    CheckIsNone(mv.checkMeasureDuration(short, ts, 1, isPickup=True))
    assert mv.checkMeasureDuration(full + short, ts, 1, isPickup=True) is not None

    # chord members, grace notes and synthesized rests don't count
    chord = [_quarter(), _quarter(isChordElementPresent=True), _quarter()]
    CheckIsNone(mv.checkMeasureDuration(chord, ts, 1))
    grace = full + [Note(pitch=Pitch('D', 4), isGrace=True, duration=Duration(1, 1))]
    CheckIsNone(mv.checkMeasureDuration(grace, ts, 1))
    synthesized = full + [Note(isRest=True, duration=Duration(1, 1), isSynthesized=True)]
    CheckIsNone(mv.checkMeasureDuration(synthesized, ts, 1))

    # two full voices
    twoVoices = [_quarter(voice=1), _quarter(voice=1), _quarter(voice=2), _quarter(voice=2)]
    CheckIsNone(mv.checkMeasureDuration(twoVoices, ts, 1))

    # nothing to check
    CheckIsNone(mv.checkMeasureDuration([], ts, 1))
    CheckIsNone(mv.checkMeasureDuration(short, None, 1))
    CheckIsNone(mv.checkMeasureDuration(short, ts, None))

def test_ErrorString():
    err = MusicXmlValidationError(
        'Bad thing', rule='some_rule', line=3, element='note', context={'part': 'P1'}
    )
    assert isinstance(err, MusicXmlError)
    assert err.args[0] == 'Bad thing'
    CheckString(
        str(err), "Bad thing [rule: some_rule] (element: note, line: 3) [context: {'part': 'P1'}]"
    )
    CheckString(str(MusicXmlError('Plain', line=9)), 'Plain (line: 9)')

def test_MeasureDurationFromTimeline():
    ts = TimeSignature(3, 8)
    CheckIsNone(mv.checkMeasureDuration([], ts, 2, measureLength=1.5))
    violation = mv.checkMeasureDuration([], ts, 2, measureLength=1.0)
    assert violation.context == {'actual': '2', 'expected': '3'}
    CheckIsNone(mv.checkMeasureDuration([], ts, 2, isPickup=True, measureLength=0.5))
