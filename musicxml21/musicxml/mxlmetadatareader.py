# ------------------------------------------------------------------------------
# Name:          mxlmetadatareader.py
# Purpose:       MusicXML score header (<work>, <identification>, <defaults>,
#                <credit>, <part-list>) parser
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
from xml.etree.ElementTree import Element

import music21 as m21

from musicxml21.musicxml.mxlmetadata import Creator
from musicxml21.musicxml.mxlmetadata import Credit
from musicxml21.musicxml.mxlmetadata import Defaults
from musicxml21.musicxml.mxlmetadata import Encoding
from musicxml21.musicxml.mxlmetadata import Identification
from musicxml21.musicxml.mxlmetadata import MidiInstrument
from musicxml21.musicxml.mxlmetadata import PageLayout
from musicxml21.musicxml.mxlmetadata import PageMargins
from musicxml21.musicxml.mxlmetadata import Scaling
from musicxml21.musicxml.mxlmetadata import ScoreInstrument
from musicxml21.musicxml.mxlmetadata import ScoreMetadata
from musicxml21.musicxml.mxlmetadata import ScorePartInfo
from musicxml21.musicxml.mxlmetadata import StaffLayout
from musicxml21.musicxml.mxlmetadata import SystemLayout
from musicxml21.musicxml.mxlmetadata import Work
from musicxml21.musicxml.mxlshared import MxlShared

environLocal = m21.environment.Environment('musicxml21.musicxml.mxlmetadatareader')


class MxlMetadataReader:
    '''
    Reads the descriptive parts of a <score-partwise> header into a
    :class:`ScoreMetadata`.  Nothing here is validated, and nothing here raises:
    missing or unparsable values are simply left as None.

    >>> from xml.etree.ElementTree import fromstring
    >>> root = fromstring(
    ...     '<score-partwise><work><work-title>Fugue</work-title></work>'
    ...     '<identification><creator type="composer">J. S. Bach</creator></identification>'
    ...     '<part-list><score-part id="P1"><part-name>Organ</part-name></score-part>'
    ...     '</part-list></score-partwise>')
    >>> md = MxlMetadataReader(root).processMetadata()
    >>> md.title, md.composer, md.getPartInfo('P1').name
    ('Fugue', 'J. S. Bach', 'Organ')
    '''
    def __init__(self, scoreRoot: Element) -> None:
        self.scoreRoot: Element = scoreRoot

    def processMetadata(self) -> ScoreMetadata:
        work: Work | None = None
        identification: Identification | None = None
        defaults: Defaults | None = None
        credits: list[Credit] = []
        partInfos: tuple[ScorePartInfo, ...] = ()

        for subEl in self.scoreRoot:
            if subEl.tag == 'work':
                work = self.processWork(subEl)
            elif subEl.tag == 'identification':
                identification = self.processIdentification(subEl)
            elif subEl.tag == 'defaults':
                defaults = self.processDefaults(subEl)
            elif subEl.tag == 'credit':
                credits.append(self.processCredit(subEl))
            elif subEl.tag == 'part-list':
                partInfos = self.processPartList(subEl)

        return ScoreMetadata(
            work=work,
            movementNumber=MxlShared.childText(self.scoreRoot, 'movement-number') or None,
            movementTitle=MxlShared.childText(self.scoreRoot, 'movement-title') or None,
            identification=identification,
            defaults=defaults,
            credits=tuple(credits),
            partInfos=partInfos
        )

    @staticmethod
    def processWork(element: Element) -> Work:
        opus: str | None = None
        opusEl: Element | None = element.find('opus')
        if opusEl is not None:
            # <opus> is a link; the href is all there is (the tree is not namespace-aware)
            opus = opusEl.get('xlink:href') or opusEl.get('href')
        return Work(
            title=MxlShared.childText(element, 'work-title') or None,
            number=MxlShared.childText(element, 'work-number') or None,
            opus=opus
        )

    @staticmethod
    def processIdentification(element: Element) -> Identification:
        creators: list[Creator] = []
        for creatorEl in element.findall('creator'):
            name: str | None = MxlShared.text(creatorEl)
            if name:
                creators.append(Creator(name=name, type=creatorEl.get('type')))

        rights: list[str] = []
        for rightsEl in element.findall('rights'):
            text: str | None = MxlShared.text(rightsEl)
            if text:
                rights.append(text)

        encoding: Encoding | None = None
        encodingEl: Element | None = element.find('encoding')
        if encodingEl is not None:
            encoding = Encoding(
                software=tuple(
                    MxlShared.text(e) or '' for e in encodingEl.findall('software')
                ),
                encodingDate=MxlShared.childText(encodingEl, 'encoding-date') or None,
                encoders=tuple(
                    MxlShared.text(e) or '' for e in encodingEl.findall('encoder')
                ),
                description=MxlShared.childText(encodingEl, 'encoding-description') or None
            )

        return Identification(
            creators=tuple(creators),
            rights=tuple(rights),
            source=MxlShared.childText(element, 'source') or None,
            encoding=encoding
        )

    @staticmethod
    def processDefaults(element: Element) -> Defaults:
        scaling: Scaling | None = None
        scalingEl: Element | None = element.find('scaling')
        if scalingEl is not None:
            millimeters: float | None = MxlShared.childFloat(scalingEl, 'millimeters')
            tenths: float | None = MxlShared.childFloat(scalingEl, 'tenths')
            if millimeters is not None and tenths is not None:
                scaling = Scaling(millimeters, tenths)

        pageLayout: PageLayout | None = None
        pageLayoutEl: Element | None = element.find('page-layout')
        if pageLayoutEl is not None:
            pageLayout = MxlMetadataReader.pageLayoutFromElement(pageLayoutEl)

        systemLayout: SystemLayout | None = None
        systemLayoutEl: Element | None = element.find('system-layout')
        if systemLayoutEl is not None:
            systemLayout = MxlMetadataReader.systemLayoutFromElement(systemLayoutEl)

        staffLayouts: tuple[StaffLayout, ...] = tuple(
            MxlMetadataReader.staffLayoutFromElement(e) for e in element.findall('staff-layout')
        )

        lineWidths: list[tuple[str, float]] = []
        noteSizes: list[tuple[str, float]] = []
        appearanceEl: Element | None = element.find('appearance')
        if appearanceEl is not None:
            for lw in appearanceEl.findall('line-width'):
                value: float | None = MxlShared.floatFromText(MxlShared.text(lw))
                if value is not None:
                    lineWidths.append((lw.get('type', ''), value))
            for ns in appearanceEl.findall('note-size'):
                value = MxlShared.floatFromText(MxlShared.text(ns))
                if value is not None:
                    noteSizes.append((ns.get('type', ''), value))

        return Defaults(
            scaling=scaling,
            pageLayout=pageLayout,
            systemLayout=systemLayout,
            staffLayouts=staffLayouts,
            lineWidths=tuple(lineWidths),
            noteSizes=tuple(noteSizes)
        )

    @staticmethod
    def pageLayoutFromElement(element: Element) -> PageLayout:
        margins: list[PageMargins] = []
        for marginsEl in element.findall('page-margins'):
            margins.append(PageMargins(
                leftMargin=MxlShared.childFloat(marginsEl, 'left-margin'),
                rightMargin=MxlShared.childFloat(marginsEl, 'right-margin'),
                topMargin=MxlShared.childFloat(marginsEl, 'top-margin'),
                bottomMargin=MxlShared.childFloat(marginsEl, 'bottom-margin'),
                type=marginsEl.get('type')
            ))
        return PageLayout(
            pageHeight=MxlShared.childFloat(element, 'page-height'),
            pageWidth=MxlShared.childFloat(element, 'page-width'),
            margins=tuple(margins)
        )

    @staticmethod
    def systemLayoutFromElement(element: Element) -> SystemLayout:
        leftMargin: float | None = None
        rightMargin: float | None = None
        marginsEl: Element | None = element.find('system-margins')
        if marginsEl is not None:
            leftMargin = MxlShared.childFloat(marginsEl, 'left-margin')
            rightMargin = MxlShared.childFloat(marginsEl, 'right-margin')
        return SystemLayout(
            leftMargin=leftMargin,
            rightMargin=rightMargin,
            systemDistance=MxlShared.childFloat(element, 'system-distance'),
            topSystemDistance=MxlShared.childFloat(element, 'top-system-distance')
        )

    @staticmethod
    def staffLayoutFromElement(element: Element) -> StaffLayout:
        return StaffLayout(
            staffNumber=MxlShared.attrInt(element, 'number') or 1,
            staffDistance=MxlShared.childFloat(element, 'staff-distance')
        )

    @staticmethod
    def processCredit(element: Element) -> Credit:
        return Credit(
            page=MxlShared.attrInt(element, 'page'),
            creditTypes=tuple(
                MxlShared.text(e) or '' for e in element.findall('credit-type')
            ),
            words=tuple(
                MxlShared.text(e) or '' for e in element.findall('credit-words')
            )
        )

    @staticmethod
    def processPartList(element: Element) -> tuple[ScorePartInfo, ...]:
        output: list[ScorePartInfo] = []
        # <part-group> elements are layout only, we skip them
        for scorePartEl in element.findall('score-part'):
            partId: str | None = scorePartEl.get('id')
            if not partId:
                environLocal.printDebug('skipping <score-part> without id')
                continue
            output.append(MxlMetadataReader.processScorePart(scorePartEl, partId))
        return tuple(output)

    @staticmethod
    def processScorePart(element: Element, partId: str) -> ScorePartInfo:
        instruments: list[ScoreInstrument] = []
        for instEl in element.findall('score-instrument'):
            instruments.append(ScoreInstrument(
                id=instEl.get('id', ''),
                name=MxlShared.childText(instEl, 'instrument-name') or None
            ))

        midiInstruments: list[MidiInstrument] = []
        for midiEl in element.findall('midi-instrument'):
            midiInstruments.append(MidiInstrument(
                id=midiEl.get('id', ''),
                channel=MxlShared.childInt(midiEl, 'midi-channel'),
                program=MxlShared.childInt(midiEl, 'midi-program'),
                volume=MxlShared.childFloat(midiEl, 'volume'),
                pan=MxlShared.childFloat(midiEl, 'pan')
            ))

        return ScorePartInfo(
            id=partId,
            name=MxlShared.childText(element, 'part-name') or None,
            abbreviation=MxlShared.childText(element, 'part-abbreviation') or None,
            instruments=tuple(instruments),
            midiInstruments=tuple(midiInstruments),
            midiDevices=tuple(
                MxlShared.text(e) or '' for e in element.findall('midi-device')
            )
        )
