# ------------------------------------------------------------------------------
# Name:          mxlwarnings.py
# Purpose:       Non-fatal warnings recorded while parsing MusicXML.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import threading
import typing as t
from dataclasses import dataclass, field
from enum import IntEnum

from music21 import environment

environLocal = environment.Environment('musicxml21.musicxml.mxlwarnings')

DEFAULT_MAX_WARNINGS: int = 1000

class WarningSeverity(IntEnum):
    INFO = 0
    MINOR = 1
    MODERATE = 2
    SERIOUS = 3

    @property
    def label(self) -> str:
        return self.name.lower()

class WarningCategories:
    '''
    The category names used when recording warnings.  Just a namespace; never instantiated.
    '''
    PARSING: str = 'parsing'
    STRUCTURE: str = 'structure'
    VALIDATION: str = 'validation'
    PITCH: str = 'pitch'
    DURATION: str = 'duration'
    TIME_SIGNATURE: str = 'time_signature'
    KEY_SIGNATURE: str = 'key_signature'
    CLEF: str = 'clef'
    MEASURE: str = 'measure'
    VOICE: str = 'voice'
    BEAM: str = 'beam'
    TIE: str = 'tie'
    NOTATION: str = 'notation'
    DIRECTION: str = 'direction'
    PERFORMANCE: str = 'performance'
    COMPATIBILITY: str = 'compatibility'
    NOTE_DIVISIONS: str = 'note_divisions'
    NOTE_VALIDATION: str = 'note_validation'


@dataclass(frozen=True)
class MusicXmlWarning:
    message: str
    category: str
    severity: WarningSeverity = WarningSeverity.MODERATE
    rule: str | None = None
    line: int | None = None
    element: str | None = None
    context: dict[str, t.Any] = field(default_factory=dict)

    def __str__(self) -> str:
        '''
        >>> w = MusicXmlWarning('bad voice', 'voice', WarningSeverity.MINOR,
        ...                     line=12, element='note', rule='note_voice_validation')
        >>> str(w)
        'WARNING [MINOR] voice: bad voice (element: note, line: 12) [rule: note_voice_validation]'
        '''
        output: str = f'WARNING [{self.severity.name}] {self.category}: {self.message}'
        location: list[str] = []
        if self.element:
            location.append(f'element: {self.element}')
        if self.line is not None:
            location.append(f'line: {self.line}')
        if location:
            output += ' (' + ', '.join(location) + ')'
        if self.context:
            output += f' [context: {self.context}]'
        if self.rule:
            output += f' [rule: {self.rule}]'
        return output


class WarningSink:
    '''
    Collects MusicXmlWarnings for one (or more) parses.  Appends are guarded by a lock,
    so one sink may be shared by readers running on different threads.

    When more than maxWarnings have been recorded, the oldest ones are dropped.  A
    disabled sink records nothing.
    '''
    def __init__(self, maxWarnings: int = DEFAULT_MAX_WARNINGS, enabled: bool = True) -> None:
        self.maxWarnings: int = maxWarnings
        self.enabled: bool = enabled
        self._warnings: list[MusicXmlWarning] = []
        self._lock: threading.Lock = threading.Lock()

    def add(self, warning: MusicXmlWarning) -> None:
        if not self.enabled:
            return
        environLocal.printDebug(str(warning))
        with self._lock:
            self._warnings.append(warning)
            if self.maxWarnings > 0 and len(self._warnings) > self.maxWarnings:
                del self._warnings[:len(self._warnings) - self.maxWarnings]

    def addWarning(
        self,
        message: str,
        category: str,
        severity: WarningSeverity = WarningSeverity.MODERATE,
        rule: str | None = None,
        line: int | None = None,
        element: str | None = None,
        context: dict[str, t.Any] | None = None
    ) -> MusicXmlWarning:
        warning = MusicXmlWarning(
            message=message,
            category=category,
            severity=severity,
            rule=rule,
            line=line,
            element=element,
            context=dict(context) if context else {}
        )
        self.add(warning)
        return warning

    @property
    def warnings(self) -> list[MusicXmlWarning]:
        with self._lock:
            return list(self._warnings)

    def getWarningsByCategory(self, category: str) -> list[MusicXmlWarning]:
        return [w for w in self.warnings if w.category == category]

    def getWarningsBySeverity(self, severity: WarningSeverity) -> list[MusicXmlWarning]:
        return [w for w in self.warnings if w.severity == severity]

    def getWarningsByMinSeverity(self, minSeverity: WarningSeverity) -> list[MusicXmlWarning]:
        return [w for w in self.warnings if w.severity >= minSeverity]

    def getWarningsByRule(self, rule: str) -> list[MusicXmlWarning]:
        return [w for w in self.warnings if w.rule == rule]

    @property
    def warningCount(self) -> int:
        with self._lock:
            return len(self._warnings)

    def getWarningCountsByCategory(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for w in self.warnings:
            counts[w.category] = counts.get(w.category, 0) + 1
        return counts

    def getWarningCountsBySeverity(self) -> dict[WarningSeverity, int]:
        counts: dict[WarningSeverity, int] = {}
        for w in self.warnings:
            counts[w.severity] = counts.get(w.severity, 0) + 1
        return counts

    def clearWarnings(self) -> None:
        with self._lock:
            self._warnings = []

    def hasWarnings(self) -> bool:
        return self.warningCount > 0

    def hasWarningsWithMinSeverity(self, minSeverity: WarningSeverity) -> bool:
        return any(w.severity >= minSeverity for w in self.warnings)

    def createSummary(self) -> str:
        '''
        >>> sink = WarningSink()
        >>> sink.createSummary()
        'No warnings'
        >>> _ = sink.addWarning('x', WarningCategories.PARSING, WarningSeverity.INFO)
        >>> print(sink.createSummary())
        Warning Summary:
        Total warnings: 1
        <BLANKLINE>
        By category:
          parsing: 1
        <BLANKLINE>
        By severity:
          info: 1
        '''
        theWarnings: list[MusicXmlWarning] = self.warnings
        if not theWarnings:
            return 'No warnings'

        lines: list[str] = ['Warning Summary:', f'Total warnings: {len(theWarnings)}']

        lines.append('')
        lines.append('By category:')
        for category, count in self.getWarningCountsByCategory().items():
            lines.append(f'  {category}: {count}')

        lines.append('')
        lines.append('By severity:')
        for severity, count in sorted(self.getWarningCountsBySeverity().items()):
            lines.append(f'  {severity.label}: {count}')

        return '\n'.join(lines)
