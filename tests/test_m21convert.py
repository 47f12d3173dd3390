import music21 as m21

# The things we're testing
import musicxml21
from musicxml21 import MusicXMLConverter
from musicxml21.musicxml import M21Convert

# test utilities
from tests.Utilities import *

TWO_MEASURES = (
    '<measure number="1">' + firstAttributes(1, 4, 4)
    + pitchedNote('C', 4) + pitchedNote('D', 4) + pitchedNote('E', 4) + pitchedNote('F', 4)
    + '</measure>\n<measure number="2">' + pitchedNote('G', 4, 4)
    + '<barline location="right"><bar-style>light-heavy</bar-style></barline>'
    + '</measure>'
)

def _convert(measuresXml: str) -> m21.stream.Score:
    score, _ = readScore(partwiseDocument(measuresXml))
    return M21Convert.scoreToM21(score)

def test_PartsAndMeasures():
    s = _convert(TWO_MEASURES)
    assert len(s.parts) == 1
    part = s.parts[0]
    assert part.id == 'P1'
    assert part.partName == 'Music'

    measures = list(part.getElementsByClass(m21.stream.Measure))
    assert [m.number for m in measures] == [1, 2]
    pitches = [n.pitch.nameWithOctave for n in part.recurse().notes]
    assert pitches == ['C4', 'D4', 'E4', 'F4', 'G4']
    assert measures[1].notes[0].duration.quarterLength == 4.0

def test_AttributesOnlyWhereTheyChange():
    s = _convert(TWO_MEASURES)
    measures = list(s.parts[0].getElementsByClass(m21.stream.Measure))

    timeSigs = list(measures[0].getElementsByClass(m21.meter.TimeSignature))
    assert len(timeSigs) == 1
    assert timeSigs[0].ratioString == '4/4'
    clefs = list(measures[0].getElementsByClass(m21.clef.Clef))
    assert len(clefs) == 1
    assert isinstance(clefs[0], m21.clef.TrebleClef)
    keySigs = list(measures[0].getElementsByClass(m21.key.KeySignature))
    assert len(keySigs) == 1
    assert keySigs[0].sharps == 0

    assert not list(measures[1].getElementsByClass(m21.meter.TimeSignature))
    assert not list(measures[1].getElementsByClass(m21.clef.Clef))
    assert not list(measures[1].getElementsByClass(m21.key.KeySignature))

def test_Barlines():
    s = _convert(TWO_MEASURES)
    measures = list(s.parts[0].getElementsByClass(m21.stream.Measure))
    assert measures[1].rightBarline is not None
    assert measures[1].rightBarline.type == 'final'

    s = _convert(
        '<measure number="1">' + firstAttributes(1, 1, 4) + pitchedNote('C', 4)
        + '<barline location="right"><bar-style>light-heavy</bar-style>'
        + '<repeat direction="backward" times="3"/></barline></measure>'
    )
    measure = s.parts[0].getElementsByClass(m21.stream.Measure)[0]
    assert isinstance(measure.rightBarline, m21.bar.Repeat)
    assert measure.rightBarline.direction == 'end'
    assert measure.rightBarline.times == 3

def test_Chord():
    s = _convert(
        '<measure number="1">' + firstAttributes(1, 1, 4)
        + pitchedNote('C', 4)
        + pitchedNote('E', 4, extra='<chord/>')
        + pitchedNote('G', 4, extra='<chord/>')
        + '</measure>'
    )
    measure = s.parts[0].getElementsByClass(m21.stream.Measure)[0]
    chords = list(measure.getElementsByClass(m21.chord.Chord))
    assert len(chords) == 1
    assert [p.nameWithOctave for p in chords[0].pitches] == ['C4', 'E4', 'G4']
    assert chords[0].duration.quarterLength == 1.0

def test_RestsAndAccidentals():
    s = _convert(
        '<measure number="1">' + firstAttributes(1, 2, 4)
        + restNote(1)
        + '<note><pitch><step>F</step><alter>1</alter><octave>5</octave></pitch>'
        + '<duration>1</duration><accidental>sharp</accidental></note>'
        + '</measure>'
    )
    measure = s.parts[0].getElementsByClass(m21.stream.Measure)[0]
    elements = list(measure.notesAndRests)
    assert len(elements) == 2
    assert isinstance(elements[0], m21.note.Rest)
    assert isinstance(elements[1], m21.note.Note)
    assert elements[1].pitch.nameWithOctave == 'F#5'
    assert elements[1].offset == 1.0

def test_TwoVoices():
    s = _convert(
        '<measure number="1">' + firstAttributes(1, 2, 4)
        + pitchedNote('E', 5, extra='<voice>1</voice>')
        + pitchedNote('F', 5, extra='<voice>1</voice>')
        + '<backup><duration>2</duration></backup>'
        + pitchedNote('C', 4, 2, extra='<voice>2</voice>')
        + '</measure>'
    )
    measure = s.parts[0].getElementsByClass(m21.stream.Measure)[0]
    voices = list(measure.voices)
    assert len(voices) == 2
    assert [n.pitch.nameWithOctave for n in voices[0].notes] == ['E5', 'F5']
    assert [n.pitch.nameWithOctave for n in voices[1].notes] == ['C4']
    assert voices[1].notes[0].offset == 0.0

def test_Beams():
    eighth = '<type>eighth</type><beam number="1">{}</beam>'
    s = _convert(
        '<measure number="1">' + firstAttributes(2, 2, 4)
        + pitchedNote('C', 5, extra=eighth.format('begin'))
        + pitchedNote('D', 5, extra=eighth.format('continue'))
        + pitchedNote('E', 5, extra=eighth.format('continue'))
        + pitchedNote('F', 5, extra=eighth.format('end'))
        + '</measure>'
    )
    notes = list(s.parts[0].recurse().notes)
    assert len(notes) == 4
    assert [n.beams.getTypes() for n in notes] == [
        ['start'], ['continue'], ['continue'], ['stop']
    ]

def test_Ties():
    s = _convert(
        '<measure number="1">' + firstAttributes(1, 2, 4)
        + pitchedNote('C', 4, extra='<tie type="start"/>')
        + pitchedNote('C', 4, extra='<tie type="stop"/>')
        + '</measure>'
    )
    notes = list(s.parts[0].recurse().notes)
    assert notes[0].tie.type == 'start'
    assert notes[1].tie.type == 'stop'

def test_Metadata():
    document = '''<?xml version="1.0" encoding="UTF-8"?>
<score-partwise version="4.0">
  <work><work-title>Fugue</work-title></work>
  <identification><creator type="composer">J. S. Bach</creator></identification>
  <part-list><score-part id="P1"><part-name>Organ</part-name></score-part></part-list>
  <part id="P1">
    <measure number="1">
      <attributes><divisions>1</divisions><time><beats>1</beats><beat-type>4</beat-type></time></attributes>
      <note><rest/><duration>1</duration></note>
    </measure>
  </part>
</score-partwise>
'''
    score, _ = readScore(document)
    s = M21Convert.scoreToM21(score)
    assert s.metadata.title == 'Fugue'
    assert s.metadata.composer == 'J. S. Bach'
    assert s.parts[0].partName == 'Organ'

def test_ConverterParseData():
    c = MusicXMLConverter()
    s = c.parseData(partwiseDocument(TWO_MEASURES))
    assert isinstance(s, m21.stream.Score)
    assert c.warnings == []
    assert c.parsedScore is not None
    assert len(c.parsedScore.parts) == 1
    assert len(list(s.parts[0].recurse().notes)) == 5

def test_ConverterParseFile(tmp_path):
    path = tmp_path / 'simple.musicxml21'
    path.write_text(partwiseDocument(TWO_MEASURES), encoding='utf-8')
    s = MusicXMLConverter().parseFile(path)
    assert isinstance(s, m21.stream.Score)
    assert len(list(s.parts[0].recurse().notes)) == 5

def test_Register():
    musicxml21.register()
    try:
        assert MusicXMLConverter in m21.converter.Converter().subConvertersList()
        # registering twice doesn't add a second copy
        musicxml21.register()
        subconverters = m21.converter.Converter().subConvertersList()
        assert subconverters.count(MusicXMLConverter) == 1
    finally:
        m21.converter.resetSubConverters()
