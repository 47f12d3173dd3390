# ------------------------------------------------------------------------------
# Name:          mxlmetadata.py
# Purpose:       Descriptive score data (work, identification, layout, credits, parts)
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
'''
Flat, descriptive value objects read by :class:`MxlMetadataReader`.  Nothing in here
is validated: layout, credits and MIDI descriptors are carried along as found.
'''
from dataclasses import dataclass


@dataclass(frozen=True)
class Work:
    title: str | None = None
    number: str | None = None
    opus: str | None = None


@dataclass(frozen=True)
class Creator:
    name: str
    type: str | None = None


@dataclass(frozen=True)
class Encoding:
    software: tuple[str, ...] = ()
    encodingDate: str | None = None
    encoders: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class Identification:
    creators: tuple[Creator, ...] = ()
    rights: tuple[str, ...] = ()
    source: str | None = None
    encoding: Encoding | None = None

    def creatorsOfType(self, creatorType: str) -> list[str]:
        return [c.name for c in self.creators if c.type == creatorType]


@dataclass(frozen=True)
class Scaling:
    millimeters: float
    tenths: float


@dataclass(frozen=True)
class PageMargins:
    leftMargin: float | None = None
    rightMargin: float | None = None
    topMargin: float | None = None
    bottomMargin: float | None = None
    type: str | None = None


@dataclass(frozen=True)
class PageLayout:
    pageHeight: float | None = None
    pageWidth: float | None = None
    margins: tuple[PageMargins, ...] = ()


@dataclass(frozen=True)
class SystemLayout:
    leftMargin: float | None = None
    rightMargin: float | None = None
    systemDistance: float | None = None
    topSystemDistance: float | None = None


@dataclass(frozen=True)
class StaffLayout:
    staffNumber: int = 1
    staffDistance: float | None = None


@dataclass(frozen=True)
class Defaults:
    scaling: Scaling | None = None
    pageLayout: PageLayout | None = None
    systemLayout: SystemLayout | None = None
    staffLayouts: tuple[StaffLayout, ...] = ()
    lineWidths: tuple[tuple[str, float], ...] = ()
    noteSizes: tuple[tuple[str, float], ...] = ()


@dataclass(frozen=True)
class Credit:
    page: int | None = None
    creditTypes: tuple[str, ...] = ()
    words: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoreInstrument:
    id: str
    name: str | None = None


@dataclass(frozen=True)
class MidiInstrument:
    id: str
    channel: int | None = None
    program: int | None = None
    volume: float | None = None
    pan: float | None = None


@dataclass(frozen=True)
class ScorePartInfo:
    id: str
    name: str | None = None
    abbreviation: str | None = None
    instruments: tuple[ScoreInstrument, ...] = ()
    midiInstruments: tuple[MidiInstrument, ...] = ()
    midiDevices: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoreMetadata:
    work: Work | None = None
    movementNumber: str | None = None
    movementTitle: str | None = None
    identification: Identification | None = None
    defaults: Defaults | None = None
    credits: tuple[Credit, ...] = ()
    partInfos: tuple[ScorePartInfo, ...] = ()

    @property
    def title(self) -> str | None:
        if self.work is not None and self.work.title:
            return self.work.title
        return self.movementTitle

    @property
    def composer(self) -> str | None:
        if self.identification is None:
            return None
        composers: list[str] = self.identification.creatorsOfType('composer')
        if composers:
            return composers[0]
        return None

    def getPartInfo(self, partId: str) -> ScorePartInfo | None:
        for info in self.partInfos:
            if info.id == partId:
                return info
        return None
