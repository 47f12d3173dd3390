# ------------------------------------------------------------------------------
# Purpose:       musicxml21 is a partwise MusicXML reader with a measure-level engine,
#                along with a music21 subconverter plug-in and CLI app that use it.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------

__all__ = [
    'musicxml',
    'MusicXMLConverter',
    'MusicXmlReader',
    'register',
]

from .MusicXMLConverter import MusicXMLConverter
from .musicxml import MusicXmlReader
from .shared import M21Utilities

class Music21VersionException(Exception):
    # raised if the version of music21 is not recent enough
    pass

def register() -> None:
    import music21 as m21

    if not M21Utilities.m21VersionIsAtLeast((10, 0, 0, '')):
        raise Music21VersionException('music21 version needs to be 10.0 or greater')

    # unregisterSubConverter raises if we weren't registered yet
    if MusicXMLConverter in m21.converter.Converter().subConvertersList():
        m21.converter.unregisterSubConverter(MusicXMLConverter)
    m21.converter.registerSubConverter(MusicXMLConverter)
