import pytest

# The things we're testing
from musicxml21.musicxml import Clef
from musicxml21.musicxml import Duration
from musicxml21.musicxml import KeySignature
from musicxml21.musicxml import MusicXmlValidationError
from musicxml21.musicxml import Pitch
from musicxml21.musicxml import TimeModification
from musicxml21.musicxml import TimeSignature

# test utilities
from tests.Utilities import *

def test_PitchValid():
    for step in ('C', 'D', 'E', 'F', 'G', 'A', 'B'):
        for octave in (0, 4, 9):
            for alter in (None, -2, -1, 0, 1, 2, 0.5):
                pitch = Pitch.validated(step, octave, alter)
                CheckPitch(pitch, step, octave, alter)

def test_PitchInvalid():
    with pytest.raises(MusicXmlValidationError) as excInfo:
        Pitch.validated('H', 4)
    assert excInfo.value.rule == 'pitch_step_validation'
    assert excInfo.value.element == 'pitch'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Pitch.validated('c', 4)
    assert excInfo.value.rule == 'pitch_step_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Pitch.validated('C', 10)
    assert excInfo.value.rule == 'pitch_octave_validation'
    assert excInfo.value.context['octave'] == 10

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Pitch.validated('C', -1)
    assert excInfo.value.rule == 'pitch_octave_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Pitch.validated('C', 4, 3)
    assert excInfo.value.rule == 'pitch_alter_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Pitch.validated('C', 4, -2.5, line=7, context={'part': 'P1'})
    assert excInfo.value.rule == 'pitch_alter_validation'
    assert excInfo.value.line == 7
    assert excInfo.value.context['part'] == 'P1'
    assert excInfo.value.context['alter'] == -2.5

def test_PitchName():
    CheckString(Pitch('B', 3, -1).nameWithOctave, 'B-3')
    CheckString(Pitch('F', 5, 1).nameWithOctave, 'F#5')
    CheckString(Pitch('C', 4).nameWithOctave, 'C4')
    CheckString(Pitch('D', 4, 0.5).nameWithOctave, 'D4')

def test_TimeSignatureBeatTypes():
    for beatType in (1, 2, 4, 8, 16, 32, 64):
        ts = TimeSignature.validated(3, beatType)
        assert ts.beatType == beatType
        CheckString(ts.ratioString, f'3/{beatType}')

    for beatType in (0, 3, 5, 6, 7, 12, -4):
        with pytest.raises(MusicXmlValidationError) as excInfo:
            TimeSignature.validated(3, beatType)
        assert excInfo.value.rule == 'time_signature_beat_type_validation'

    for beats in (0, -3):
        with pytest.raises(MusicXmlValidationError) as excInfo:
            TimeSignature.validated(beats, 4)
        assert excInfo.value.rule == 'time_signature_beats_validation'

def test_KeySignature():
    assert KeySignature.validated(-7) == KeySignature(-7, None)
    assert KeySignature.validated(7, 'Major') == KeySignature(7, 'major')

    with pytest.raises(MusicXmlValidationError) as excInfo:
        KeySignature.validated(8)
    assert excInfo.value.rule == 'key_signature_fifths_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        KeySignature.validated(0, 'happy')
    assert excInfo.value.rule == 'key_signature_mode_validation'

def test_Duration():
    dur = Duration.validated(480, 480)
    assert dur.quarterLength == 1.0
    assert Duration(240, 480).quarterLength == 0.5
    assert Duration(3, 2).quarterLength == 1.5

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Duration.validated(0, 480)
    assert excInfo.value.rule == 'duration_positive_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Duration.validated(1, 0)
    assert excInfo.value.rule == 'duration_divisions_validation'

def test_Clef():
    assert Clef.validated('G', 2) == Clef('G', 2, None, 1)
    assert Clef.validated('G', None).line is None
    assert Clef.validated('percussion', None, requireLine=True).sign == 'percussion'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Clef.validated('')
    assert excInfo.value.rule == 'clef_sign_not_empty'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        Clef.validated('F', None, requireLine=True, sourceLine=12)
    assert excInfo.value.rule == 'clef_line_required_for_sign'
    assert excInfo.value.line == 12

def test_TimeModification():
    tm = TimeModification.validated(3, 2, 'eighth')
    assert (tm.actualNotes, tm.normalNotes, tm.normalType) == (3, 2, 'eighth')

    with pytest.raises(MusicXmlValidationError) as excInfo:
        TimeModification.validated(0, 2)
    assert excInfo.value.rule == 'time_modification_validation'
