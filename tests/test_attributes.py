import pytest

# The things we're testing
from musicxml21.musicxml import AttributesResolver
from musicxml21.musicxml import Clef
from musicxml21.musicxml import KeySignature
from musicxml21.musicxml import MusicXmlStructureError
from musicxml21.musicxml import MusicXmlValidationError
from musicxml21.musicxml import WarningCategories
from musicxml21.musicxml import WarningSink

# test utilities
from tests.Utilities import *

def _resolve(xml: str, sink: WarningSink | None = None, strictClefLines: bool = False):
    if sink is None:
        sink = WarningSink()
    resolver = AttributesResolver(sink, strictClefLines=strictClefLines)
    return resolver.attributesFromElement(element(xml), None, 'P1', '1')

def test_FullAttributes():
    update = _resolve(
        '<attributes><divisions>480</divisions>'
        '<key><fifths>2</fifths><mode>major</mode></key>'
        '<time symbol="common"><beats>4</beats><beat-type>4</beat-type></time>'
        '<staves>2</staves>'
        '<clef number="1"><sign>G</sign><line>2</line></clef>'
        '<clef number="2"><sign>F</sign><line>4</line><clef-octave-change>-1</clef-octave-change></clef>'
        '</attributes>'
    )
    assert update.divisions == 480
    assert update.keySignature == KeySignature(2, 'major')
    assert update.timeSignature.ratioString == '4/4'
    assert update.timeSignature.symbol == 'common'
    assert update.staves == 2
    assert update.clefs == (Clef('G', 2, None, 1), Clef('F', 4, -1, 2))
    assert not update.isEmpty

def test_EmptyAttributes():
    assert _resolve('<attributes/>').isEmpty

def test_BadStavesIsAWarning():
    sink = WarningSink()
    update = _resolve('<attributes><divisions>2</divisions><staves>two</staves></attributes>', sink)
    assert update.divisions == 2
    CheckIsNone(update.staves)
    CheckOnlyWarning(sink.warnings, expectedCategory=WarningCategories.MEASURE,
                     expectedElement='staves')

    sink = WarningSink()
    CheckIsNone(_resolve('<attributes><staves>0</staves></attributes>', sink).staves)
    assert len(sink.warnings) == 1

def test_MissingBeatTypeIsFatal():
    with pytest.raises(MusicXmlStructureError) as excInfo:
        _resolve('<attributes>\n<time><beats>3</beats></time></attributes>')
    assert excInfo.value.element == 'time'
    assert 'beat-type' in excInfo.value.message
    assert excInfo.value.line == 2

def test_BadValuesAreFatal():
    with pytest.raises(MusicXmlStructureError):
        _resolve('<attributes><divisions>many</divisions></attributes>')

    with pytest.raises(MusicXmlValidationError) as excInfo:
        _resolve('<attributes><divisions>0</divisions></attributes>')
    assert excInfo.value.rule == 'divisions_positive_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        _resolve('<attributes><time><beats>3</beats><beat-type>6</beat-type></time></attributes>')
    assert excInfo.value.rule == 'time_signature_beat_type_validation'

    with pytest.raises(MusicXmlValidationError) as excInfo:
        _resolve('<attributes><key><fifths>9</fifths></key></attributes>')
    assert excInfo.value.rule == 'key_signature_fifths_validation'

    with pytest.raises(MusicXmlStructureError):
        _resolve('<attributes><key><cancel>2</cancel></key></attributes>')

    with pytest.raises(MusicXmlStructureError):
        _resolve('<attributes><clef><line>2</line></clef></attributes>')

    with pytest.raises(MusicXmlStructureError):
        _resolve('<attributes><clef number="x"><sign>G</sign></clef></attributes>')

def test_ClefLines():
    update = _resolve('<attributes><clef><sign>G</sign></clef></attributes>')
    assert update.clefs == (Clef('G', None, None, 1),)

    with pytest.raises(MusicXmlValidationError) as excInfo:
        _resolve('<attributes><clef><sign>G</sign></clef></attributes>', strictClefLines=True)
    assert excInfo.value.rule == 'clef_line_required_for_sign'

    update = _resolve(
        '<attributes><clef><sign>percussion</sign></clef></attributes>', strictClefLines=True
    )
    assert update.clefs[0].sign == 'percussion'

def test_TimeSignatureVariants():
    sink = WarningSink()
    update = _resolve(
        '<attributes><time><beats>3+2</beats><beat-type>8</beat-type></time></attributes>', sink
    )
    assert (update.timeSignature.beats, update.timeSignature.beatType) == (5, 8)
    assert not sink.hasWarnings()

    update = _resolve(
        '<attributes><time><senza-misura/></time></attributes>', sink
    )
    assert update.timeSignature is None
    CheckOnlyWarning(sink.warnings, expectedCategory=WarningCategories.TIME_SIGNATURE)

    sink = WarningSink()
    update = _resolve(
        '<attributes><time><beats>2</beats><beat-type>4</beat-type>'
        '<beats>3</beats><beat-type>8</beat-type></time></attributes>', sink
    )
    assert update.timeSignature.ratioString == '2/4'
    CheckOnlyWarning(sink.warnings, expectedCategory=WarningCategories.TIME_SIGNATURE)

def test_MultipleKeys():
    sink = WarningSink()
    update = _resolve(
        '<attributes><key number="1"><fifths>1</fifths></key>'
        '<key><fifths>-1</fifths></key></attributes>', sink
    )
    assert update.keySignature.fifths == -1
    CheckOnlyWarning(sink.warnings, expectedCategory=WarningCategories.KEY_SIGNATURE)
