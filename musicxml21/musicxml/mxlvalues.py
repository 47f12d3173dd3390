# ------------------------------------------------------------------------------
# Name:          mxlvalues.py
# Purpose:       Immutable leaf values (pitch, duration, key, time, clef, tuplet ratio)
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
'''
The leaf values of a parsed score.  Each one is a frozen dataclass, and each one has
a ``validated`` classmethod that checks its invariants and raises
:class:`MusicXmlValidationError` when they are broken.  The parsers only ever build
these through ``validated``.

>>> Pitch.validated('F', 4, 1)
Pitch(step='F', octave=4, alter=1)
>>> Pitch.validated('F', 10)
Traceback (most recent call last):
musicxml21.musicxml.mxlexceptions.MusicXmlValidationError: Pitch octave 10 is out of range (0-9) [rule: pitch_octave_validation] (element: pitch) [context: {'octave': 10}]
'''
import typing as t
from dataclasses import dataclass
from fractions import Fraction

from music21.common.numberTools import opFrac
from music21.common.types import OffsetQL

from musicxml21.musicxml import mxlvalidation as mv

def _raiseIfViolated(
    violation: mv.RuleViolation | None,
    line: int | None,
    element: str,
    context: dict[str, t.Any] | None
) -> None:
    if violation is not None:
        raise violation.toError(line=line, element=element, context=context)


@dataclass(frozen=True)
class Pitch:
    step: str
    octave: int
    alter: float | None = None

    @classmethod
    def validated(
        cls,
        step: str,
        octave: int,
        alter: float | None = None,
        line: int | None = None,
        context: dict[str, t.Any] | None = None
    ) -> 'Pitch':
        _raiseIfViolated(mv.checkPitch(step, octave, alter), line, 'pitch', context)
        return cls(step, octave, alter)

    @property
    def nameWithOctave(self) -> str:
        '''
        music21-style name ('#' for sharps, '-' for flats), e.g. 'B-3'.
        Microtonal alters are left off.

        >>> Pitch('B', 3, -1).nameWithOctave
        'B-3'
        >>> Pitch('C', 5, 2).nameWithOctave
        'C##5'
        '''
        accid: str = ''
        if self.alter is not None and self.alter == int(self.alter):
            alterInt: int = int(self.alter)
            if alterInt > 0:
                accid = '#' * alterInt
            elif alterInt < 0:
                accid = '-' * -alterInt
        return f'{self.step}{accid}{self.octave}'


@dataclass(frozen=True)
class Duration:
    '''
    A duration in divisions units, along with the divisions that were in effect when it
    was parsed.  value == 0 is allowed for a Duration the parser builds directly (grace
    encodings), but ``validated`` insists on positive values.
    '''
    value: int
    divisions: int

    @classmethod
    def validated(
        cls,
        value: int,
        divisions: int,
        line: int | None = None,
        context: dict[str, t.Any] | None = None
    ) -> 'Duration':
        _raiseIfViolated(mv.checkDuration(value, divisions), line, 'duration', context)
        return cls(value, divisions)

    @property
    def quarterLength(self) -> OffsetQL:
        '''
        >>> Duration(720, 480).quarterLength
        1.5
        >>> Duration(160, 480).quarterLength
        Fraction(1, 3)
        '''
        return opFrac(Fraction(self.value, self.divisions))


@dataclass(frozen=True)
class TimeSignature:
    beats: int
    beatType: int
    symbol: str | None = None

    @classmethod
    def validated(
        cls,
        beats: int,
        beatType: int,
        symbol: str | None = None,
        line: int | None = None,
        context: dict[str, t.Any] | None = None
    ) -> 'TimeSignature':
        _raiseIfViolated(mv.checkTimeSignature(beats, beatType), line, 'time', context)
        return cls(beats, beatType, symbol)

    @property
    def ratioString(self) -> str:
        return f'{self.beats}/{self.beatType}'


@dataclass(frozen=True)
class KeySignature:
    fifths: int
    mode: str | None = None

    @classmethod
    def validated(
        cls,
        fifths: int,
        mode: str | None = None,
        line: int | None = None,
        context: dict[str, t.Any] | None = None
    ) -> 'KeySignature':
        _raiseIfViolated(mv.checkKeySignature(fifths, mode), line, 'key', context)
        if mode is not None:
            mode = mode.lower()
        return cls(fifths, mode)


@dataclass(frozen=True)
class Clef:
    sign: str
    line: int | None = None
    octaveChange: int | None = None
    staffNumber: int = 1

    @classmethod
    def validated(
        cls,
        sign: str,
        line: int | None = None,
        octaveChange: int | None = None,
        staffNumber: int = 1,
        requireLine: bool = False,
        sourceLine: int | None = None,
        context: dict[str, t.Any] | None = None
    ) -> 'Clef':
        _raiseIfViolated(mv.checkClef(sign, line, requireLine), sourceLine, 'clef', context)
        return cls(sign, line, octaveChange, staffNumber)


@dataclass(frozen=True)
class TimeModification:
    actualNotes: int
    normalNotes: int
    normalType: str | None = None
    normalDotCount: int | None = None

    @classmethod
    def validated(
        cls,
        actualNotes: int,
        normalNotes: int,
        normalType: str | None = None,
        normalDotCount: int | None = None,
        line: int | None = None,
        context: dict[str, t.Any] | None = None
    ) -> 'TimeModification':
        _raiseIfViolated(
            mv.checkTimeModification(actualNotes, normalNotes),
            line,
            'time-modification',
            context
        )
        return cls(actualNotes, normalNotes, normalType, normalDotCount)
