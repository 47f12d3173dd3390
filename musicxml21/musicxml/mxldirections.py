# ------------------------------------------------------------------------------
# Name:          mxldirections.py
# Purpose:       Reads <barline>, <ending>, <direction> and <print> measure children
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
from xml.etree.ElementTree import Element

from music21 import environment

from musicxml21.musicxml.mxlmetadatareader import MxlMetadataReader
from musicxml21.musicxml.mxlscore import Barline
from musicxml21.musicxml.mxlscore import Direction
from musicxml21.musicxml.mxlscore import DirectionItem
from musicxml21.musicxml.mxlscore import Ending
from musicxml21.musicxml.mxlscore import PrintHint
from musicxml21.musicxml.mxlscore import Sound
from musicxml21.musicxml.mxlshared import MxlShared
from musicxml21.musicxml.mxlwarnings import WarningCategories
from musicxml21.musicxml.mxlwarnings import WarningSeverity
from musicxml21.musicxml.mxlwarnings import WarningSink

environLocal = environment.Environment('musicxml21.musicxml.mxldirections')

# Text Strings for Warnings
# -----------------------------------------------------------------------------
_INCOMPLETE_ENDING = (
    'Incomplete <ending> element in measure {}. '
    + 'Missing "number" or "type" attribute, or number text content.'
)
_BAD_ENDING_TYPE = '<ending> has unknown type "{}", skipping ending'
_EMPTY_DIRECTION = 'Direction element without any <direction-type> children, skipping it'
_EMPTY_WORDS = 'Empty <words> element found in direction'

_ENDING_TYPES: tuple[str, ...] = ('start', 'stop', 'discontinue')
# attributes kept on DirectionItems
_FORMATTING_ATTRS: tuple[str, ...] = (
    'default-x', 'default-y', 'relative-x', 'relative-y', 'placement', 'halign', 'valign',
    'font-family', 'font-size', 'font-style', 'font-weight', 'color', 'enclosure', 'justify',
    'type', 'number', 'spread', 'smufl', 'parentheses', 'id'
)


class MxlDirectionReader:
    '''
    Readers for the measure children that don't affect the timeline.  All of these
    warn and carry on when something is wrong; none of them raise.
    '''
    def __init__(self, warningSink: WarningSink) -> None:
        self.warningSink: WarningSink = warningSink

    def _warn(
        self,
        message: str,
        elem: Element,
        partId: str,
        measureNumber: str,
        category: str = WarningCategories.STRUCTURE
    ) -> None:
        self.warningSink.addWarning(
            message,
            category,
            WarningSeverity.MINOR,
            line=MxlShared.line(elem),
            element=elem.tag,
            context=MxlShared.context(partId, measureNumber)
        )

    def barlineFromElement(
        self,
        elem: Element,
        partId: str,
        measureNumber: str
    ) -> tuple[Barline, Ending | None]:
        '''
        Returns the barline, plus the <ending> it contains (if there is one, and it is
        complete).

        >>> from xml.etree.ElementTree import fromstring
        >>> from musicxml21.musicxml.mxlwarnings import WarningSink
        >>> reader = MxlDirectionReader(WarningSink())
        >>> reader.barlineFromElement(fromstring(
        ...     '<barline location="left"><bar-style>heavy-light</bar-style>'
        ...     '<ending number="1" type="start"/><repeat direction="forward"/></barline>'),
        ...     'P1', '5')
        (Barline(location='left', barStyle='heavy-light', repeatDirection='forward', repeatTimes=None), Ending(number='1', type='start', printObject=True, text=None))
        '''
        repeatDirection: str | None = None
        repeatTimes: int | None = None
        repeatEl: Element | None = elem.find('repeat')
        if repeatEl is not None:
            repeatDirection = repeatEl.get('direction')
            repeatTimes = MxlShared.attrInt(repeatEl, 'times')

        barline = Barline(
            location=elem.get('location', 'right'),
            barStyle=MxlShared.childText(elem, 'bar-style') or None,
            repeatDirection=repeatDirection,
            repeatTimes=repeatTimes
        )

        ending: Ending | None = None
        endingEl: Element | None = elem.find('ending')
        if endingEl is not None:
            ending = self.endingFromElement(endingEl, partId, measureNumber)

        return barline, ending

    def endingFromElement(
        self,
        elem: Element,
        partId: str,
        measureNumber: str
    ) -> Ending | None:
        text: str | None = MxlShared.text(elem) or None
        number: str | None = elem.get('number') or text
        endingType: str | None = elem.get('type')
        if not number or not endingType:
            self._warn(_INCOMPLETE_ENDING.format(measureNumber), elem, partId, measureNumber)
            return None
        if endingType not in _ENDING_TYPES:
            self._warn(_BAD_ENDING_TYPE.format(endingType), elem, partId, measureNumber)
            return None
        return Ending(
            number=number,
            type=endingType,
            printObject=MxlShared.attrYesNo(elem, 'print-object', True),
            text=text
        )

    def directionFromElement(
        self,
        elem: Element,
        partId: str,
        measureNumber: str
    ) -> Direction | None:
        items: list[DirectionItem] = []
        for dirTypeEl in elem.findall('direction-type'):
            for child in dirTypeEl:
                item: DirectionItem | None = self._directionItemFromElement(
                    child, partId, measureNumber
                )
                if item is not None:
                    items.append(item)

        if not items:
            self._warn(_EMPTY_DIRECTION, elem, partId, measureNumber)
            return None

        sound: Sound | None = None
        soundEl: Element | None = elem.find('sound')
        if soundEl is not None:
            sound = Sound(
                tempo=MxlShared.attrFloat(soundEl, 'tempo'),
                dynamics=MxlShared.attrFloat(soundEl, 'dynamics'),
                attributes={k: v for k, v in soundEl.attrib.items()
                                if k not in ('tempo', 'dynamics')}
            )

        return Direction(
            items=tuple(items),
            placement=elem.get('placement'),
            offset=MxlShared.childInt(elem, 'offset'),
            staff=MxlShared.childInt(elem, 'staff'),
            voice=MxlShared.childInt(elem, 'voice'),
            sound=sound
        )

    def _directionItemFromElement(
        self,
        elem: Element,
        partId: str,
        measureNumber: str
    ) -> DirectionItem | None:
        attributes: dict[str, str] = {
            k: v for k, v in elem.attrib.items() if k in _FORMATTING_ATTRS
        }
        text: str | None = None
        if elem.tag in ('words', 'rehearsal'):
            text = MxlShared.text(elem)
            if not text:
                self._warn(_EMPTY_WORDS, elem, partId, measureNumber)
        elif elem.tag == 'dynamics':
            marks: list[str] = []
            for dynEl in elem:
                if dynEl.tag == 'other-dynamics':
                    otherText: str | None = MxlShared.text(dynEl)
                    if otherText:
                        marks.append(otherText)
                else:
                    marks.append(dynEl.tag)
            text = ' '.join(marks)
        elif elem.tag == 'metronome':
            beatUnit: str | None = MxlShared.childText(elem, 'beat-unit')
            perMinute: str | None = MxlShared.childText(elem, 'per-minute')
            if beatUnit and perMinute:
                dots: str = '.' * len(elem.findall('beat-unit-dot'))
                text = f'{beatUnit}{dots}={perMinute}'

        return DirectionItem(kind=elem.tag, text=text, attributes=attributes)

    def printFromElement(self, elem: Element) -> PrintHint:
        staffLayouts = tuple(
            MxlMetadataReader.staffLayoutFromElement(e) for e in elem.findall('staff-layout')
        )
        pageLayoutEl: Element | None = elem.find('page-layout')
        systemLayoutEl: Element | None = elem.find('system-layout')

        measureDistance: float | None = None
        measureLayoutEl: Element | None = elem.find('measure-layout')
        if measureLayoutEl is not None:
            measureDistance = MxlShared.childFloat(measureLayoutEl, 'measure-distance')

        return PrintHint(
            newPage=MxlShared.attrYesNo(elem, 'new-page', False),
            newSystem=MxlShared.attrYesNo(elem, 'new-system', False),
            blankPage=MxlShared.attrInt(elem, 'blank-page'),
            pageNumber=elem.get('page-number'),
            pageLayout=(
                MxlMetadataReader.pageLayoutFromElement(pageLayoutEl)
                if pageLayoutEl is not None else None
            ),
            systemLayout=(
                MxlMetadataReader.systemLayoutFromElement(systemLayoutEl)
                if systemLayoutEl is not None else None
            ),
            staffLayouts=staffLayouts,
            measureDistance=measureDistance,
            measureNumbering=MxlShared.childText(elem, 'measure-numbering') or None
        )
