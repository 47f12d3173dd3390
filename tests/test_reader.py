import io
import zipfile

import pytest

# The things we're testing
from musicxml21.musicxml import MusicXmlParseError
from musicxml21.musicxml import MusicXmlReader
from musicxml21.musicxml import MusicXmlStructureError
from musicxml21.musicxml import MusicXmlValidationError
from musicxml21.musicxml import WarningCategories
from musicxml21.musicxml import WarningSeverity
from musicxml21.musicxml import WarningSink

# test utilities
from tests.Utilities import *

SIMPLE_MEASURES = (
    '<measure number="1">' + firstAttributes(1, 2, 4)
    + pitchedNote('C', 4) + pitchedNote('D', 4)
    + '</measure>\n<measure number="2">' + pitchedNote('E', 4, 2) + '</measure>'
)

FULL_HEADER_DOCUMENT = '''<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE score-partwise PUBLIC "-//Recordare//DTD MusicXML 4.0 Partwise//EN"
  "http://www.musicxml.org/dtds/partwise.dtd">
<score-partwise version="3.1">
  <work><work-number>BWV 578</work-number><work-title>Fugue</work-title></work>
  <movement-number>2</movement-number>
  <movement-title>Allegro</movement-title>
  <identification>
    <creator type="composer">J. S. Bach</creator>
    <creator type="lyricist">Nobody</creator>
    <rights>Public domain</rights>
    <encoding><software>Test</software><encoding-date>2024-01-01</encoding-date></encoding>
  </identification>
  <defaults>
    <scaling><millimeters>7</millimeters><tenths>40</tenths></scaling>
    <page-layout><page-height>1683</page-height><page-width>1190</page-width></page-layout>
  </defaults>
  <credit page="1"><credit-type>title</credit-type><credit-words>Fugue</credit-words></credit>
  <part-list>
    <part-group type="start" number="1"/>
    <score-part id="P1">
      <part-name>Organ</part-name>
      <part-abbreviation>Org.</part-abbreviation>
      <score-instrument id="P1-I1"><instrument-name>Pipe Organ</instrument-name></score-instrument>
      <midi-instrument id="P1-I1"><midi-channel>1</midi-channel><midi-program>20</midi-program></midi-instrument>
    </score-part>
    <part-group type="stop" number="1"/>
  </part-list>
  <part id="P1">
    <measure number="1">
      <attributes><divisions>1</divisions><time><beats>1</beats><beat-type>4</beat-type></time></attributes>
      <note><rest/><duration>1</duration></note>
    </measure>
  </part>
</score-partwise>
'''

def _mxl(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()

def test_SimpleDocument():
    score, warnings = readScore(partwiseDocument(SIMPLE_MEASURES))
    assert warnings == []
    assert score.version == '4.0'
    assert len(score.parts) == 1
    part = score.getPartById('P1')
    assert part.name == 'Music'
    assert [m.number for m in part.measures] == ['1', '2']
    CheckNotes(part.measures[0].notes, [('C4', 1.0), ('D4', 1.0)])
    CheckNotes(part.measures[1].notes, [('E4', 2.0)])
    assert part.measures[1].timeSignature.ratioString == '2/4'
    assert score.warnings == ()

def test_Metadata():
    score, warnings = readScore(FULL_HEADER_DOCUMENT)
    assert warnings == []
    md = score.metadata
    assert score.title == 'Fugue'
    assert md.composer == 'J. S. Bach'
    assert md.work.number == 'BWV 578'
    assert md.movementNumber == '2'
    assert md.movementTitle == 'Allegro'
    assert md.identification.rights == ('Public domain',)
    assert md.identification.encoding.encodingDate == '2024-01-01'
    assert md.defaults.scaling.tenths == 40.0
    assert md.defaults.pageLayout.pageWidth == 1190.0
    assert md.credits[0].words == ('Fugue',)
    info = md.getPartInfo('P1')
    assert info.abbreviation == 'Org.'
    assert info.instruments[0].name == 'Pipe Organ'
    assert info.midiInstruments[0].program == 20
    assert score.parts[0].info is info

def test_LineNumbers():
    sink = WarningSink()
    document = partwiseDocument(
        '<measure number="1">' + firstAttributes(1, 1, 4) + '\n'
        + pitchedNote('C', 4, 1, '<voice>bad</voice>') + '</measure>'
    )
    score, warnings = readScore(document, warningSink=sink)
    assert sink.warnings == warnings
    CheckOnlyWarning(warnings, expectedCategory=WarningCategories.VOICE)
    voiceLine = document.splitlines().index(
        [line for line in document.splitlines() if '<voice>bad' in line][0]
    ) + 1
    assert warnings[0].line == voiceLine
    assert score.parts[0].measures[0].notes[0].line == voiceLine

def test_ParseErrors():
    with pytest.raises(MusicXmlParseError) as excInfo:
        MusicXmlReader('<score-partwise><part></score-partwise>')
    assert excInfo.value.line == 1

    with pytest.raises(MusicXmlParseError):
        MusicXmlReader(b'PK\x03\x04 this is not really a zip file')

    with pytest.raises(MusicXmlParseError):
        MusicXmlReader(_mxl({'readme.txt': 'nothing here'}))

def test_WrongRoot():
    with pytest.raises(MusicXmlStructureError) as excInfo:
        MusicXmlReader('<score-timewise version="4.0"/>').run()
    assert 'timewise' in excInfo.value.message

    with pytest.raises(MusicXmlStructureError):
        MusicXmlReader('<opus/>').run()

def test_PartList():
    document = '<score-partwise><part id="P1"><measure number="1"/></part></score-partwise>'
    score, warnings = readScore(document)
    assert len(score.parts) == 1
    CheckOnlyWarning(warnings, expectedCategory=WarningCategories.STRUCTURE)

    document = partwiseDocument('<measure number="1"/>').replace('<part id="P1">', '<part id="P2">')
    with pytest.raises(MusicXmlValidationError) as excInfo:
        readScore(document)
    assert excInfo.value.rule == 'part_id_validation'

def test_NoParts():
    score, warnings = readScore('<score-partwise version="4.0"><part-list/></score-partwise>')
    assert score.parts == ()
    CheckOnlyWarning(warnings, expectedSeverity=WarningSeverity.SERIOUS)

def test_UnsupportedVersion():
    document = partwiseDocument(SIMPLE_MEASURES).replace('version="4.0"', 'version="2.0"')
    score, warnings = readScore(document)
    assert score.version == '2.0'
    CheckOnlyWarning(warnings, expectedCategory=WarningCategories.COMPATIBILITY)

def test_Bytes():
    document = partwiseDocument(SIMPLE_MEASURES)
    score, _ = readScore(document.encode('utf-8'))
    assert len(score.parts[0].measures) == 2

    utf16 = document.replace('encoding="UTF-8"', 'encoding="UTF-16"').encode('utf-16')
    score, _ = readScore(utf16)
    assert len(score.parts[0].measures) == 2

def test_CompressedWithContainer():
    document = partwiseDocument(SIMPLE_MEASURES)
    container = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<container><rootfiles><rootfile full-path="scores/song.musicxml" '
        'media-type="application/vnd.recordare.musicxml+xml"/></rootfiles></container>'
    )
    data = _mxl({
        'META-INF/container.xml': container,
        'decoy.xml': '<not-a-score/>',
        'scores/song.musicxml': document,
    })
    score, warnings = readScore(data)
    assert warnings == []
    assert len(score.parts[0].measures) == 2

def test_CompressedWithoutContainer():
    data = _mxl({'song.xml': partwiseDocument(SIMPLE_MEASURES)})
    score, _ = readScore(data)
    assert len(score.parts[0].measures) == 2

def test_FromFile(tmp_path):
    path = tmp_path / 'song.musicxml'
    path.write_text(partwiseDocument(SIMPLE_MEASURES), encoding='utf-8')
    score = MusicXmlReader.fromFile(path).run()
    assert score.parts[0].measures[1].notes[0].pitch.nameWithOctave == 'E4'

    mxlPath = tmp_path / 'song.mxl'
    mxlPath.write_bytes(_mxl({'song.musicxml': partwiseDocument(SIMPLE_MEASURES)}))
    reader = MusicXmlReader.fromFile(mxlPath, maxWarnings=10)
    assert reader.warningSink.maxWarnings == 10
    assert len(reader.run().parts) == 1

def test_SharedSink():
    sink = WarningSink()
    bad = partwiseDocument(
        '<measure number="1">' + firstAttributes(1, 1, 4)
        + pitchedNote('C', 4, 1, '<voice>0</voice>') + '</measure>'
    )
    MusicXmlReader(bad, warningSink=sink).run()
    MusicXmlReader(bad, warningSink=sink).run()
    assert sink.warningCount == 2
