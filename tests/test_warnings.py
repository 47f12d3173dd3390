import threading

# The things we're testing
from musicxml21.musicxml import MusicXmlWarning
from musicxml21.musicxml import WarningCategories
from musicxml21.musicxml import WarningSeverity
from musicxml21.musicxml import WarningSink

# test utilities
from tests.Utilities import *

def test_AddAndQuery():
    sink = WarningSink()
    assert not sink.hasWarnings()
    w = sink.addWarning(
        'bad voice', WarningCategories.VOICE, WarningSeverity.MINOR,
        rule='note_voice_validation', line=12, element='note', context={'part': 'P1'}
    )
    sink.addWarning('no part-list', WarningCategories.STRUCTURE)
    sink.addWarning('unknown tag', WarningCategories.COMPATIBILITY, WarningSeverity.INFO)

    assert sink.hasWarnings()
    assert sink.warningCount == 3
    assert sink.warnings[0] is w
    assert sink.getWarningsByCategory('voice') == [w]
    assert sink.getWarningsByRule('note_voice_validation') == [w]
    assert len(sink.getWarningsBySeverity(WarningSeverity.MODERATE)) == 1
    assert len(sink.getWarningsByMinSeverity(WarningSeverity.MINOR)) == 2
    assert sink.hasWarningsWithMinSeverity(WarningSeverity.MODERATE)
    assert not sink.hasWarningsWithMinSeverity(WarningSeverity.SERIOUS)
    assert sink.getWarningCountsByCategory() == {'voice': 1, 'structure': 1, 'compatibility': 1}
    assert sink.getWarningCountsBySeverity() == {
        WarningSeverity.MINOR: 1, WarningSeverity.MODERATE: 1, WarningSeverity.INFO: 1
    }

    # the list handed out is a copy
    sink.warnings.clear()
    assert sink.warningCount == 3

    sink.clearWarnings()
    assert sink.warningCount == 0

def test_WarningString():
    w = MusicXmlWarning(
        'bad voice', 'voice', WarningSeverity.MINOR,
        rule='note_voice_validation', line=12, element='note', context={'part': 'P1'}
    )
    CheckString(
        str(w),
        "WARNING [MINOR] voice: bad voice (element: note, line: 12) "
        + "[context: {'part': 'P1'}] [rule: note_voice_validation]"
    )
    CheckString(str(MusicXmlWarning('x', 'parsing')), 'WARNING [MODERATE] parsing: x')

def test_MaxWarnings():
    sink = WarningSink(maxWarnings=3)
    for i in range(5):
        sink.addWarning(f'w{i}', WarningCategories.MEASURE)
    assert [w.message for w in sink.warnings] == ['w2', 'w3', 'w4']

def test_Disabled():
    sink = WarningSink(enabled=False)
    sink.addWarning('ignored', WarningCategories.MEASURE)
    assert not sink.hasWarnings()

def test_Summary():
    sink = WarningSink()
    CheckString(sink.createSummary(), 'No warnings')
    sink.addWarning('a', WarningCategories.BEAM, WarningSeverity.MINOR)
    sink.addWarning('b', WarningCategories.BEAM, WarningSeverity.SERIOUS)
    summary = sink.createSummary()
    assert 'Total warnings: 2' in summary
    assert '  beam: 2' in summary
    assert summary.index('  minor: 1') < summary.index('  serious: 1')

def test_SharedAcrossThreads():
    sink = WarningSink(maxWarnings=0)

    def addMany():
        for _ in range(200):
            sink.addWarning('x', WarningCategories.PARSING)

    threads = [threading.Thread(target=addMany) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sink.warningCount == 800
