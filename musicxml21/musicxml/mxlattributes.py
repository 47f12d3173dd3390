# ------------------------------------------------------------------------------
# Name:          mxlattributes.py
# Purpose:       Reads a measure's <attributes> into a partial state update
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import typing as t
from dataclasses import dataclass
from xml.etree.ElementTree import Element

from music21 import environment

from musicxml21.musicxml import mxlvalidation as mv
from musicxml21.musicxml.mxlexceptions import MusicXmlStructureError
from musicxml21.musicxml.mxlshared import MxlShared
from musicxml21.musicxml.mxlvalues import Clef
from musicxml21.musicxml.mxlvalues import KeySignature
from musicxml21.musicxml.mxlvalues import TimeSignature
from musicxml21.musicxml.mxlwarnings import WarningCategories
from musicxml21.musicxml.mxlwarnings import WarningSeverity
from musicxml21.musicxml.mxlwarnings import WarningSink

environLocal = environment.Environment('musicxml21.musicxml.mxlattributes')

# Text Strings for Error Conditions
# -----------------------------------------------------------------------------
_NON_INTEGER_TEXT = 'Non-integer <{}> value "{}" in <{}>'
_MISSING_CHILD = '<{}> is missing required <{}> element'
_MISSING_FIFTHS = '<key> without <fifths> is not supported'
_SENZA_MISURA = '<time> with <senza-misura> has no time signature, ignoring'
_EXTRA_TIME_PAIRS = '<time> with {} beats/beat-type pairs, only the first is used'
_BAD_CLEF_NUMBER = '<clef> has non-integer number attribute "{}"'
_EXTRA_KEYS = '{} <key> elements found, only the first one without a number is used'
_BAD_STAVES = '<staves> value "{}" is not a positive integer, ignoring'


@dataclass(frozen=True)
class AttributesUpdate:
    '''
    The fields an <attributes> element sets.  Each is None (or empty) when the element
    doesn't mention it, in which case the inherited value stays in effect.
    '''
    divisions: int | None = None
    keySignature: KeySignature | None = None
    timeSignature: TimeSignature | None = None
    clefs: tuple[Clef, ...] = ()
    staves: int | None = None

    @property
    def isEmpty(self) -> bool:
        return (
            self.divisions is None
            and self.keySignature is None
            and self.timeSignature is None
            and not self.clefs
            and self.staves is None
        )


class AttributesResolver:
    '''
    Converts one <attributes> element into an :class:`AttributesUpdate`.

    Unparsable numbers and missing required children raise
    :class:`MusicXmlStructureError`; out-of-range values raise
    :class:`MusicXmlValidationError` (from the leaf constructors).  Both are fatal:
    everything after a bad <divisions>, <key> or <time> would be wrong.  A bad <staves>
    only costs the staff count, so it is a warning.

    >>> from xml.etree.ElementTree import fromstring
    >>> from musicxml21.musicxml.mxlwarnings import WarningSink
    >>> resolver = AttributesResolver(WarningSink())
    >>> elem = fromstring(
    ...     '<attributes><divisions>480</divisions>'
    ...     '<key><fifths>-3</fifths><mode>minor</mode></key>'
    ...     '<time><beats>3</beats><beat-type>4</beat-type></time>'
    ...     '<clef><sign>G</sign><line>2</line></clef></attributes>')
    >>> update = resolver.attributesFromElement(elem, None, 'P1', '1')
    >>> update.divisions, update.keySignature, update.timeSignature.ratioString
    (480, KeySignature(fifths=-3, mode='minor'), '3/4')
    >>> update.clefs
    (Clef(sign='G', line=2, octaveChange=None, staffNumber=1),)
    '''
    def __init__(self, warningSink: WarningSink, strictClefLines: bool = False) -> None:
        self.warningSink: WarningSink = warningSink
        self.strictClefLines: bool = strictClefLines

    def attributesFromElement(
        self,
        elem: Element,
        currentDivisions: int | None,
        partId: str,
        measureNumber: str
    ) -> AttributesUpdate:
        context: dict[str, t.Any] = MxlShared.context(partId, measureNumber)
        environLocal.printDebug(
            f'attributes in part {partId} measure {measureNumber}'
            + f' (inherited divisions: {currentDivisions})'
        )

        divisions: int | None = self._divisionsFromElement(elem.find('divisions'), context)

        keySig: KeySignature | None = None
        keyElems: list[Element] = elem.findall('key')
        if keyElems:
            # a <key> with a number attribute applies to one staff only; prefer one without
            unnumbered: list[Element] = [k for k in keyElems if k.get('number') is None]
            if len(keyElems) > 1:
                self.warningSink.addWarning(
                    _EXTRA_KEYS.format(len(keyElems)),
                    WarningCategories.KEY_SIGNATURE,
                    WarningSeverity.MINOR,
                    line=MxlShared.line(keyElems[1]),
                    element='key',
                    context=context
                )
            keySig = self._keySignatureFromElement((unnumbered or keyElems)[0], context)

        timeSig: TimeSignature | None = None
        timeElem: Element | None = elem.find('time')
        if timeElem is not None:
            timeSig = self._timeSignatureFromElement(timeElem, context)

        clefs: list[Clef] = []
        for clefElem in elem.findall('clef'):
            clefs.append(self._clefFromElement(clefElem, context))

        staves: int | None = None
        stavesElem: Element | None = elem.find('staves')
        if stavesElem is not None:
            staves = self._stavesFromElement(stavesElem, context)

        return AttributesUpdate(
            divisions=divisions,
            keySignature=keySig,
            timeSignature=timeSig,
            clefs=tuple(clefs),
            staves=staves
        )

    @staticmethod
    def _requiredInt(elem: Element, parentTag: str, context: dict[str, t.Any]) -> int:
        text: str | None = MxlShared.text(elem)
        value: int | None = MxlShared.intFromText(text)
        if value is None:
            raise MusicXmlStructureError(
                _NON_INTEGER_TEXT.format(elem.tag, text, parentTag),
                line=MxlShared.line(elem),
                element=elem.tag,
                context=context
            )
        return value

    @staticmethod
    def _requiredChild(elem: Element, tag: str, context: dict[str, t.Any]) -> Element:
        child: Element | None = elem.find(tag)
        if child is None:
            raise MusicXmlStructureError(
                _MISSING_CHILD.format(elem.tag, tag),
                line=MxlShared.line(elem),
                element=elem.tag,
                context=context
            )
        return child

    def _divisionsFromElement(
        self,
        elem: Element | None,
        context: dict[str, t.Any]
    ) -> int | None:
        if elem is None:
            return None
        divisions: int = self._requiredInt(elem, 'attributes', context)
        violation: mv.RuleViolation | None = mv.checkDivisions(divisions)
        if violation is not None:
            raise violation.toError(
                line=MxlShared.line(elem), element='divisions', context=context
            )
        return divisions

    def _keySignatureFromElement(
        self,
        elem: Element,
        context: dict[str, t.Any]
    ) -> KeySignature:
        fifthsElem: Element | None = elem.find('fifths')
        if fifthsElem is None:
            raise MusicXmlStructureError(
                _MISSING_FIFTHS,
                line=MxlShared.line(elem),
                element='key',
                context=context
            )
        fifths: int = self._requiredInt(fifthsElem, 'key', context)
        mode: str | None = MxlShared.childText(elem, 'mode') or None
        return KeySignature.validated(
            fifths, mode, line=MxlShared.line(elem), context=context
        )

    def _timeSignatureFromElement(
        self,
        elem: Element,
        context: dict[str, t.Any]
    ) -> TimeSignature | None:
        if elem.find('senza-misura') is not None:
            self.warningSink.addWarning(
                _SENZA_MISURA,
                WarningCategories.TIME_SIGNATURE,
                WarningSeverity.INFO,
                line=MxlShared.line(elem),
                element='time',
                context=context
            )
            return None

        beatsElem: Element = self._requiredChild(elem, 'beats', context)
        beatTypeElem: Element = self._requiredChild(elem, 'beat-type', context)

        numPairs: int = len(elem.findall('beats'))
        if numPairs > 1:
            self.warningSink.addWarning(
                _EXTRA_TIME_PAIRS.format(numPairs),
                WarningCategories.TIME_SIGNATURE,
                WarningSeverity.MINOR,
                line=MxlShared.line(elem),
                element='time',
                context=context
            )

        beats: int = self._beatsFromElement(beatsElem, context)
        beatType: int = self._requiredInt(beatTypeElem, 'time', context)
        symbol: str | None = elem.get('symbol')

        return TimeSignature.validated(
            beats, beatType, symbol, line=MxlShared.line(elem), context=context
        )

    def _beatsFromElement(self, elem: Element, context: dict[str, t.Any]) -> int:
        '''
        <beats> may be additive ("3+2"); the parts are summed.
        '''
        text: str = MxlShared.text(elem) or ''
        total: int = 0
        for piece in text.split('+'):
            value: int | None = MxlShared.intFromText(piece)
            if value is None:
                raise MusicXmlStructureError(
                    _NON_INTEGER_TEXT.format('beats', text, 'time'),
                    line=MxlShared.line(elem),
                    element='beats',
                    context=context
                )
            total += value
        return total

    def _stavesFromElement(self, elem: Element, context: dict[str, t.Any]) -> int | None:
        text: str | None = MxlShared.text(elem)
        staves: int | None = MxlShared.intFromText(text)
        if staves is None or staves <= 0:
            self.warningSink.addWarning(
                _BAD_STAVES.format(text),
                WarningCategories.MEASURE,
                WarningSeverity.MINOR,
                line=MxlShared.line(elem),
                element='staves',
                context=context
            )
            return None
        return staves

    def _clefFromElement(self, elem: Element, context: dict[str, t.Any]) -> Clef:
        staffNumber: int = 1
        numberStr: str | None = elem.get('number')
        if numberStr is not None:
            number: int | None = MxlShared.intFromText(numberStr)
            if number is None:
                raise MusicXmlStructureError(
                    _BAD_CLEF_NUMBER.format(numberStr),
                    line=MxlShared.line(elem),
                    element='clef',
                    context=context
                )
            staffNumber = number

        signElem: Element = self._requiredChild(elem, 'sign', context)
        sign: str = MxlShared.text(signElem) or ''

        line: int | None = None
        lineElem: Element | None = elem.find('line')
        if lineElem is not None:
            line = self._requiredInt(lineElem, 'clef', context)

        octaveChange: int | None = None
        octaveElem: Element | None = elem.find('clef-octave-change')
        if octaveElem is not None:
            octaveChange = self._requiredInt(octaveElem, 'clef', context)

        return Clef.validated(
            sign,
            line,
            octaveChange,
            staffNumber,
            requireLine=self.strictClefLines,
            sourceLine=MxlShared.line(elem),
            context=context
        )
