# ------------------------------------------------------------------------------
# Name:          m21convert.py
# Purpose:       M21Convert is a static class full of utility routines that
#                convert a parsed MusicXML Score into music21 objects.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import typing as t

import music21 as m21
from music21.common.numberTools import opFrac
from music21.common.types import OffsetQL

from musicxml21.musicxml.mxlscore import Barline
from musicxml21.musicxml.mxlscore import Beam
from musicxml21.musicxml.mxlscore import Direction
from musicxml21.musicxml.mxlscore import Measure
from musicxml21.musicxml.mxlscore import Note
from musicxml21.musicxml.mxlscore import Part
from musicxml21.musicxml.mxlscore import Score
from musicxml21.musicxml.mxlvalues import Clef
from musicxml21.musicxml.mxlvalues import KeySignature
from musicxml21.musicxml.mxlvalues import Pitch
from musicxml21.musicxml.mxlvalues import TimeSignature

environLocal = m21.environment.Environment('musicxml21.musicxml.m21convert')

DEFAULT_VOICE: int = 1


class M21Convert:
    '''
    Converts a :class:`Score` into a :class:`music21.stream.Score`.

    Only the first staff of a multi-staff part gets a clef.  Rests synthesized from
    <forward>/<backup> are not converted: each voice is laid out from its own notes.
    Directions are placed at the start of their measure.
    '''

    _ARTICULATION_DICT: dict[str, t.Type[m21.articulations.Articulation]] = {
        'accent': m21.articulations.Accent,
        'strong-accent': m21.articulations.StrongAccent,
        'staccato': m21.articulations.Staccato,
        'staccatissimo': m21.articulations.Staccatissimo,
        'spiccato': m21.articulations.Spiccato,
        'tenuto': m21.articulations.Tenuto,
        'detached-legato': m21.articulations.DetachedLegato,
        'stress': m21.articulations.Stress,
        'unstress': m21.articulations.Unstress,
        'breath-mark': m21.articulations.BreathMark,
        'caesura': m21.articulations.Caesura,
        'doit': m21.articulations.Doit,
        'falloff': m21.articulations.Falloff,
        'plop': m21.articulations.Plop,
        'scoop': m21.articulations.Scoop,
    }

    _BAR_STYLE_DICT: dict[str, str] = {
        'regular': 'regular',
        'dotted': 'dotted',
        'dashed': 'dashed',
        'heavy': 'heavy',
        'light-light': 'double',
        'light-heavy': 'final',
        'heavy-light': 'heavy-light',
        'heavy-heavy': 'heavy-heavy',
        'tick': 'tick',
        'short': 'short',
        'none': 'none',
    }

    _MICROTONAL_ACCIDENTAL_DICT: dict[float, str] = {
        0.5: 'half-sharp',
        -0.5: 'half-flat',
        1.5: 'one-and-a-half-sharp',
        -1.5: 'one-and-a-half-flat',
    }

    _STEM_DICT: dict[str, str] = {
        'up': 'up',
        'down': 'down',
        'double': 'double',
        'none': 'noStem',
    }

    _KEY_MODES: tuple[str, ...] = (
        'major', 'minor', 'dorian', 'phrygian', 'lydian', 'mixolydian', 'aeolian', 'ionian', 'locrian'
    )

    _BEAM_START: str = 'start'
    _BEAM_CONTINUE: str = 'continue'
    _BEAM_STOP: str = 'stop'

    @staticmethod
    def scoreToM21(score: Score) -> m21.stream.Score:
        m21Score = m21.stream.Score()
        m21Score.metadata = M21Convert.metadataToM21(score)
        for part in score.parts:
            m21Score.append(M21Convert.partToM21(part))
        return m21Score

    @staticmethod
    def metadataToM21(score: Score) -> m21.metadata.Metadata:
        md = m21.metadata.Metadata()
        if score.metadata is None:
            return md
        if score.metadata.title:
            md.title = score.metadata.title
        if score.metadata.composer:
            md.composer = score.metadata.composer
        if score.metadata.movementTitle:
            md.movementName = score.metadata.movementTitle
        if score.metadata.movementNumber:
            md.movementNumber = score.metadata.movementNumber
        return md

    @staticmethod
    def partToM21(part: Part) -> m21.stream.Part:
        m21Part = m21.stream.Part()
        m21Part.id = part.id
        if part.name:
            m21Part.partName = part.name
        if part.info is not None and part.info.abbreviation:
            m21Part.partAbbreviation = part.info.abbreviation

        prevKey: KeySignature | None = None
        prevTime: TimeSignature | None = None
        prevClef: Clef | None = None
        for measure in part.measures:
            m21Measure: m21.stream.Measure = M21Convert.measureToM21(
                measure, prevKey, prevTime, prevClef
            )
            m21Part.append(m21Measure)
            prevKey = measure.keySignature
            prevTime = measure.timeSignature
            if measure.clefs:
                prevClef = measure.clefs[0]

        return m21Part

    @staticmethod
    def measureToM21(
        measure: Measure,
        prevKey: KeySignature | None = None,
        prevTime: TimeSignature | None = None,
        prevClef: Clef | None = None
    ) -> m21.stream.Measure:
        m21Measure = m21.stream.Measure()
        try:
            m21Measure.number = int(measure.number)
        except ValueError:
            m21Measure.numberSuffix = measure.number

        # only emit key/time/clef where they change
        if measure.clefs and measure.clefs[0] != prevClef:
            m21Clef: m21.clef.Clef | None = M21Convert.clefToM21(measure.clefs[0])
            if m21Clef is not None:
                m21Measure.insert(0, m21Clef)
        if measure.keySignature is not None and measure.keySignature != prevKey:
            m21Measure.insert(0, M21Convert.keySignatureToM21(measure.keySignature))
        if measure.timeSignature is not None and measure.timeSignature != prevTime:
            m21Measure.insert(0, M21Convert.timeSignatureToM21(measure.timeSignature))

        for direction in measure.directions:
            for obj in M21Convert.directionToM21(direction):
                m21Measure.insert(0, obj)

        for barline in measure.barlines:
            M21Convert.applyBarline(m21Measure, barline)

        m21Notes: dict[int, m21.note.GeneralNote] = M21Convert.layOutNotes(measure, m21Measure)
        M21Convert.applyBeams(measure.beams, m21Notes)

        if measure.isPickup and measure.timeSignature is not None:
            fullLength: OffsetQL = opFrac(
                measure.timeSignature.beats * 4 / measure.timeSignature.beatType
            )
            m21Measure.paddingLeft = max(0.0, opFrac(fullLength - m21Measure.highestTime))

        return m21Measure

    @staticmethod
    def layOutNotes(
        measure: Measure,
        m21Measure: m21.stream.Measure
    ) -> dict[int, m21.note.GeneralNote]:
        '''
        Inserts the measure's notes (grouped into chords, and into voices if there is
        more than one voice) and returns a map from note index to the music21 object
        that note ended up in.
        '''
        # list of (voice, [indices]) chord groups, in document order
        groups: list[tuple[int, list[int]]] = []
        for idx, note in enumerate(measure.notes):
            if note.isSynthesized:
                continue
            if note.isChordElementPresent and groups and not note.isRest:
                groups[-1][1].append(idx)
                continue
            voice: int = note.voice if note.voice is not None else DEFAULT_VOICE
            groups.append((voice, [idx]))

        voiceNumbers: list[int] = sorted({voice for voice, _ in groups})
        m21Voices: dict[int, m21.stream.Voice] = {}
        if len(voiceNumbers) > 1:
            for voiceNumber in voiceNumbers:
                m21Voice = m21.stream.Voice()
                m21Voice.id = str(voiceNumber)
                m21Voices[voiceNumber] = m21Voice
                m21Measure.insert(0, m21Voice)

        offsets: dict[int, OffsetQL] = {}
        output: dict[int, m21.note.GeneralNote] = {}
        for voice, indices in groups:
            gn: m21.note.GeneralNote = M21Convert.generalNoteToM21(
                [measure.notes[i] for i in indices]
            )
            offset: OffsetQL = offsets.get(voice, 0.0)
            container: m21.stream.Stream = m21Voices.get(voice, m21Measure)
            container.insert(offset, gn)
            offsets[voice] = opFrac(offset + gn.duration.quarterLength)
            for i in indices:
                output[i] = gn

        return output

    @staticmethod
    def generalNoteToM21(notes: list[Note]) -> m21.note.GeneralNote:
        '''
        Converts one note, or a chord (a list of notes where all but the first have
        isChordElementPresent set).
        '''
        leader: Note = notes[0]
        gn: m21.note.GeneralNote
        if leader.isRest:
            gn = m21.note.Rest()
            if leader.restMeasure:
                gn.fullMeasure = True
        elif len(notes) == 1:
            gn = m21.note.Note()
            gn.pitch = M21Convert.pitchToM21(leader)
        else:
            gn = m21.chord.Chord([M21Convert.pitchToM21(n) for n in notes])

        gn.duration = M21Convert.durationToM21(leader)
        if leader.isGrace:
            gn = gn.getGrace()

        if isinstance(gn, m21.note.NotRest):
            if leader.stem is not None:
                gn.stemDirection = M21Convert._STEM_DICT.get(leader.stem, 'unspecified')
            tieTypes: set[str] = {tie.type for tie in leader.ties}
            if {'start', 'stop'} <= tieTypes:
                gn.tie = m21.tie.Tie('continue')
            elif tieTypes:
                gn.tie = m21.tie.Tie(leader.ties[0].type)
            for artic in leader.articulations:
                articClass = M21Convert._ARTICULATION_DICT.get(artic.type)
                if articClass is not None:
                    gn.articulations.append(articClass())

        return gn

    @staticmethod
    def pitchToM21(note: Note) -> m21.pitch.Pitch:
        if t.TYPE_CHECKING:
            assert note.pitch is not None
        pitch: Pitch = note.pitch
        p: m21.pitch.Pitch
        if pitch.alter is None or pitch.alter == int(pitch.alter):
            p = m21.pitch.Pitch(pitch.nameWithOctave)
        else:
            p = m21.pitch.Pitch(f'{pitch.step}{pitch.octave}')
            accidName: str | None = M21Convert._MICROTONAL_ACCIDENTAL_DICT.get(pitch.alter)
            if accidName is not None:
                p.accidental = m21.pitch.Accidental(accidName)
            else:
                p.microtone = m21.pitch.Microtone(pitch.alter * 100)

        if note.accidental == 'natural' and p.accidental is None:
            p.accidental = m21.pitch.Accidental('natural')
        if note.accidental is not None and p.accidental is not None:
            p.accidental.displayStatus = True
        return p

    @staticmethod
    def durationToM21(note: Note) -> m21.duration.Duration:
        '''
        Uses the performed duration if there is one (music21 infers the notation from
        it), otherwise the notated type (e.g. grace notes).
        '''
        if note.duration is not None and note.duration.value > 0:
            return m21.duration.Duration(note.duration.quarterLength)
        if note.type is None:
            return m21.duration.Duration(0.0)

        m21Type: str = 'longa' if note.type == 'long' else note.type
        dur = m21.duration.Duration(type=m21Type, dots=note.dots)
        if note.timeModification is not None:
            tm = note.timeModification
            dur.appendTuplet(m21.duration.Tuplet(tm.actualNotes, tm.normalNotes))
        return dur

    @staticmethod
    def clefToM21(clef: Clef) -> m21.clef.Clef | None:
        if clef.sign == 'percussion':
            return m21.clef.PercussionClef()
        if clef.sign == 'TAB':
            return m21.clef.TabClef()
        if clef.sign == 'none':
            return m21.clef.NoClef()
        clefString: str = clef.sign
        if clef.line is not None:
            clefString += str(clef.line)
        try:
            return m21.clef.clefFromString(clefString, octaveShift=clef.octaveChange or 0)
        except m21.clef.ClefException:
            environLocal.printDebug(f'no music21 clef for {clefString}')
            return None

    @staticmethod
    def keySignatureToM21(keySig: KeySignature) -> m21.key.KeySignature:
        ks = m21.key.KeySignature(keySig.fifths)
        if keySig.mode in M21Convert._KEY_MODES:
            return ks.asKey(keySig.mode)
        return ks

    @staticmethod
    def timeSignatureToM21(timeSig: TimeSignature) -> m21.meter.TimeSignature:
        ts = m21.meter.TimeSignature(timeSig.ratioString)
        if timeSig.symbol in ('common', 'cut'):
            ts.symbol = timeSig.symbol
        return ts

    @staticmethod
    def directionToM21(direction: Direction) -> list[m21.base.Music21Object]:
        output: list[m21.base.Music21Object] = []
        for item in direction.items:
            if item.kind == 'words' and item.text:
                output.append(m21.expressions.TextExpression(item.text))
            elif item.kind == 'rehearsal' and item.text:
                output.append(m21.expressions.RehearsalMark(item.text))
            elif item.kind == 'dynamics' and item.text:
                for mark in item.text.split():
                    output.append(m21.dynamics.Dynamic(mark))
            elif item.kind == 'segno':
                output.append(m21.repeat.Segno())
            elif item.kind == 'coda':
                output.append(m21.repeat.Coda())
        if direction.sound is not None and direction.sound.tempo is not None:
            output.append(m21.tempo.MetronomeMark(number=direction.sound.tempo))
        return output

    @staticmethod
    def applyBarline(m21Measure: m21.stream.Measure, barline: Barline) -> None:
        m21Bar: m21.bar.Barline
        if barline.repeatDirection in ('forward', 'backward'):
            if barline.repeatDirection == 'forward':
                m21Bar = m21.bar.Repeat(direction='start')
            else:
                m21Bar = m21.bar.Repeat(direction='end', times=barline.repeatTimes)
        else:
            m21Bar = m21.bar.Barline(
                M21Convert._BAR_STYLE_DICT.get(barline.barStyle or 'regular', 'regular')
            )

        if barline.location == 'left':
            m21Measure.leftBarline = m21Bar
        elif barline.location == 'right':
            m21Measure.rightBarline = m21Bar

    @staticmethod
    def applyBeams(beams: t.Iterable[Beam], m21Notes: dict[int, m21.note.GeneralNote]) -> None:
        for beam in sorted(beams, key=lambda b: b.level):
            targets: list[m21.note.GeneralNote] = []
            for idx in beam.noteIndices:
                gn: m21.note.GeneralNote | None = m21Notes.get(idx)
                if (isinstance(gn, m21.note.NotRest)
                        and not any(gn is target for target in targets)):
                    targets.append(gn)
            if len(targets) < 2:
                continue
            for i, gn in enumerate(targets):
                if len(gn.beams) >= beam.level:
                    # already beamed at this level (chord members share one object)
                    continue
                if len(gn.beams) != beam.level - 1:
                    # levels must be added in order; skip a level we can't represent
                    continue
                if i == 0:
                    beamType = M21Convert._BEAM_START
                elif i == len(targets) - 1:
                    beamType = M21Convert._BEAM_STOP
                else:
                    beamType = M21Convert._BEAM_CONTINUE
                gn.beams.append(beamType)
