# The things we're testing
from musicxml21.musicxml import Duration
from musicxml21.musicxml import Note
from musicxml21.musicxml import Pitch
from musicxml21.musicxml import TimelineTracker
from musicxml21.musicxml import WarningCategories
from musicxml21.musicxml import WarningSink

# test utilities
from tests.Utilities import *

def _tracker(sink: WarningSink | None = None) -> TimelineTracker:
    return TimelineTracker(sink if sink is not None else WarningSink(), 'P1', '1')

def test_ForwardRest():
    tracker = _tracker()
    rest = tracker.restFromMarker(
        plainElement('<forward><duration>2</duration><voice>2</voice><staff>1</staff></forward>'),
        1
    )
    CheckNote(rest, isRest=True, isSynthesized=True, quarterLength=2.0, type='half', dots=0,
                voice=2, staff=1)
    assert tracker.cursor == 2.0

def test_BackupRest():
    tracker = _tracker()
    tracker.advanceForNote(Note(pitch=Pitch('C', 4), duration=Duration(4, 1)))
    rest = tracker.restFromMarker(plainElement('<backup><duration>4</duration></backup>'), 1)
    CheckNote(rest, isRest=True, isSynthesized=True, quarterLength=4.0, type='whole')
    assert tracker.cursor == 0.0
    assert tracker.measureLength == 4.0

def test_OddDurations():
    tracker = _tracker()
    rest = tracker.restFromMarker(plainElement('<forward><duration>5</duration></forward>'), 4)
    CheckNote(rest, quarterLength=1.25, type=None, dots=0)
    rest = tracker.restFromMarker(plainElement('<forward><duration>3</duration></forward>'), 4)
    CheckNote(rest, quarterLength=0.75, type='eighth', dots=1)

def test_NoUsableDuration():
    sink = WarningSink()
    tracker = _tracker(sink)
    CheckIsNone(tracker.restFromMarker(plainElement('<forward/>'), 1))
    CheckIsNone(tracker.restFromMarker(plainElement('<forward><duration>x</duration></forward>'), 1))
    CheckIsNone(tracker.restFromMarker(plainElement('<backup><duration>-1</duration></backup>'), 1))
    assert tracker.cursor == 0.0
    assert not sink.hasWarnings()

def test_ZeroDurationRest():
    sink = WarningSink()
    tracker = _tracker(sink)
    tracker.advanceForNote(Note(pitch=Pitch('C', 4), duration=Duration(1, 1)))
    for marker in ('forward', 'backup'):
        rest = tracker.restFromMarker(
            plainElement(f'<{marker}><duration>0</duration></{marker}>'), 1
        )
        CheckNote(rest, isRest=True, isSynthesized=True, quarterLength=0.0, type=None, dots=0)
    assert tracker.cursor == 1.0
    assert not sink.hasWarnings()

def test_NoDivisions():
    sink = WarningSink()
    tracker = _tracker(sink)
    rest = tracker.restFromMarker(plainElement('<forward><duration>1</duration></forward>'), None)
    CheckNote(rest, duration=Duration(1, 1))
    CheckOnlyWarning(sink.warnings, expectedCategory=WarningCategories.NOTE_DIVISIONS)

def test_BackupPastStart():
    sink = WarningSink()
    tracker = _tracker(sink)
    rest = tracker.restFromMarker(plainElement('<backup><duration>2</duration></backup>'), 1)
    CheckNote(rest, isRest=True)
    assert tracker.cursor == 0.0
    CheckOnlyWarning(sink.warnings, expectedCategory=WarningCategories.MEASURE,
                     expectedElement='backup')

def test_ChordAndGraceDontAdvance():
    tracker = _tracker()
    tracker.advanceForNote(Note(pitch=Pitch('C', 4), duration=Duration(1, 1)))
    tracker.advanceForNote(
        Note(pitch=Pitch('E', 4), duration=Duration(1, 1), isChordElementPresent=True)
    )
    tracker.advanceForNote(Note(pitch=Pitch('G', 4), isGrace=True))
    tracker.advanceForNote(Note(pitch=Pitch('G', 4)))
    assert tracker.cursor == 1.0
