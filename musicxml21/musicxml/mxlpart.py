# ------------------------------------------------------------------------------
# Name:          mxlpart.py
# Purpose:       Walks a <part>'s measures, threading state from one to the next
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import typing as t
from xml.etree.ElementTree import Element

from music21 import environment

from musicxml21.musicxml.mxlexceptions import MusicXmlStructureError
from musicxml21.musicxml.mxlexceptions import MusicXmlValidationError
from musicxml21.musicxml.mxlmeasure import MeasureEngine
from musicxml21.musicxml.mxlmeasure import MeasureState
from musicxml21.musicxml.mxlmetadata import ScorePartInfo
from musicxml21.musicxml.mxlscore import Measure
from musicxml21.musicxml.mxlscore import Part
from musicxml21.musicxml.mxlshared import MxlShared

environLocal = environment.Environment('musicxml21.musicxml.mxlpart')

PART_ID_RULE = 'part_id_validation'

# Text Strings for Error Conditions
# -----------------------------------------------------------------------------
_PART_WITHOUT_ID = 'Part element missing required "id" attribute'
_UNKNOWN_PART_ID = 'Part ID "{}" not found in part-list'


class PartWalker:
    '''
    Folds a MeasureEngine over a part's <measure> elements: each measure starts from
    the state the previous one ended with (an empty state for the first measure).
    '''
    def __init__(self, measureEngine: MeasureEngine) -> None:
        self.measureEngine: MeasureEngine = measureEngine

    def partFromElement(
        self,
        elem: Element,
        partInfos: dict[str, ScorePartInfo] | None = None
    ) -> Part:
        '''
        partInfos maps ids to the <part-list> entries; pass None if the document had no
        <part-list> at all (then any id is accepted).
        '''
        partId: str | None = elem.get('id')
        if not partId:
            raise MusicXmlStructureError(
                _PART_WITHOUT_ID,
                line=MxlShared.line(elem),
                element='part'
            )

        info: ScorePartInfo | None = None
        if partInfos is not None:
            info = partInfos.get(partId)
            if info is None:
                raise MusicXmlValidationError(
                    _UNKNOWN_PART_ID.format(partId),
                    rule=PART_ID_RULE,
                    line=MxlShared.line(elem),
                    element='part',
                    context={'part': partId}
                )

        environLocal.printDebug(f'walking part {partId}')
        measures: list[Measure]
        measures, _ = self.walkMeasures(elem.findall('measure'), partId)

        return Part(
            id=partId,
            name=info.name if info is not None else None,
            measures=tuple(measures),
            info=info
        )

    def walkMeasures(
        self,
        measureElems: t.Iterable[Element],
        partId: str,
        initialState: MeasureState | None = None
    ) -> tuple[list[Measure], MeasureState]:
        '''
        The fold itself, for callers that already have the <measure> elements.
        Returns the measures and the state after the last one.
        '''
        state: MeasureState = initialState if initialState is not None else MeasureState()
        measures: list[Measure] = []
        for measureElem in measureElems:
            measure: Measure
            measure, state = self.measureEngine.measureFromElement(measureElem, state, partId)
            measures.append(measure)
        return measures, state
