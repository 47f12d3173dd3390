# ------------------------------------------------------------------------------
# Name:          mxlbeams.py
# Purpose:       Rebuilds beam groups from per-note <beam> fragments
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import typing as t
from dataclasses import dataclass

from music21 import environment

from musicxml21.musicxml.mxlscore import Beam
from musicxml21.musicxml.mxlwarnings import WarningCategories
from musicxml21.musicxml.mxlwarnings import WarningSeverity
from musicxml21.musicxml.mxlwarnings import WarningSink

environLocal = environment.Environment('musicxml21.musicxml.mxlbeams')

BEAM_BEGIN = 'begin'
BEAM_CONTINUE = 'continue'
BEAM_END = 'end'
BEAM_FORWARD_HOOK = 'forward hook'
BEAM_BACKWARD_HOOK = 'backward hook'
BEAM_ROLES: tuple[str, ...] = (
    BEAM_BEGIN, BEAM_CONTINUE, BEAM_END, BEAM_FORWARD_HOOK, BEAM_BACKWARD_HOOK
)

# Text Strings for Warnings
# -----------------------------------------------------------------------------
_UNOPENED_BEAM = 'Beam "{}" at level {} (note {}) has no open beam group, discarding'
_REOPENED_BEAM = 'Beam "begin" at level {} (note {}) while a group was still open, discarding {}'
_SHORT_BEAM = 'Beam group at level {} has only {} note(s), discarding'
_UNTERMINATED_BEAM = 'Beam group at level {} was never ended, discarding notes {}'


@dataclass(frozen=True)
class BeamFragment:
    level: int
    role: str


class _OpenGroup:
    def __init__(self, firstIndex: int) -> None:
        self.noteIndices: list[int] = [firstIndex]
        self.roles: list[str] = [BEAM_BEGIN]

    def append(self, noteIndex: int, role: str) -> None:
        if self.noteIndices[-1] != noteIndex:
            self.noteIndices.append(noteIndex)
        if role not in self.roles:
            self.roles.append(role)


class BeamReconstructor:
    '''
    Collects the beam fragments of one measure's notes, one open group per beam level,
    and turns them into :class:`Beam` spans.  Malformed groups are discarded with a
    warning, never fatal, and no group survives past :meth:`finish`.

    >>> from musicxml21.musicxml.mxlwarnings import WarningSink
    >>> sink = WarningSink()
    >>> br = BeamReconstructor(sink, 'P1', '1')
    >>> br.addFragments(0, [BeamFragment(1, 'begin')])
    >>> br.addFragments(1, [BeamFragment(1, 'continue')])
    >>> br.addFragments(2, [BeamFragment(1, 'end')])
    >>> br.finish()
    (Beam(level=1, noteIndices=(0, 1, 2), role='begin-continue-end', measureNumber='1'),)
    >>> sink.warningCount
    0
    '''
    def __init__(self, warningSink: WarningSink, partId: str, measureNumber: str) -> None:
        self.warningSink: WarningSink = warningSink
        self.partId: str = partId
        self.measureNumber: str = measureNumber
        self.openGroups: dict[int, _OpenGroup] = {}
        self.beams: list[Beam] = []

    def _warn(self, message: str, severity: WarningSeverity = WarningSeverity.MINOR) -> None:
        self.warningSink.addWarning(
            message,
            WarningCategories.BEAM,
            severity,
            element='beam',
            context={'part': self.partId, 'measure': self.measureNumber}
        )

    def addFragments(self, noteIndex: int, fragments: t.Iterable[BeamFragment]) -> None:
        for fragment in fragments:
            self.addFragment(noteIndex, fragment)

    def addFragment(self, noteIndex: int, fragment: BeamFragment) -> None:
        level: int = fragment.level
        role: str = fragment.role
        group: _OpenGroup | None = self.openGroups.get(level)

        if role == BEAM_BEGIN:
            if group is not None:
                self._warn(_REOPENED_BEAM.format(level, noteIndex, group.noteIndices))
            self.openGroups[level] = _OpenGroup(noteIndex)
            return

        if group is None:
            if role in (BEAM_FORWARD_HOOK, BEAM_BACKWARD_HOOK):
                # a standalone hook is a partial beam on one note; nothing to group
                environLocal.printDebug(f'standalone beam {role} at level {level}')
            else:
                self._warn(_UNOPENED_BEAM.format(role, level, noteIndex))
            return

        group.append(noteIndex, role)
        if role == BEAM_END:
            del self.openGroups[level]
            self._emit(level, group)

    def _emit(self, level: int, group: _OpenGroup) -> None:
        if len(group.noteIndices) < 2:
            self._warn(_SHORT_BEAM.format(level, len(group.noteIndices)))
            return
        self.beams.append(
            Beam(
                level=level,
                noteIndices=tuple(group.noteIndices),
                role='-'.join(group.roles),
                measureNumber=self.measureNumber
            )
        )

    def finish(self) -> tuple[Beam, ...]:
        for level in sorted(self.openGroups):
            self._warn(_UNTERMINATED_BEAM.format(level, self.openGroups[level].noteIndices))
        self.openGroups = {}
        return tuple(sorted(self.beams, key=lambda b: (b.noteIndices[0], b.level)))
