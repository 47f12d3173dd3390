# ------------------------------------------------------------------------------
# Name:          MusicXMLConverter.py
# Purpose:       A music21 subconverter for MusicXML files, using musicxml21's
#                MusicXmlReader.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
#
# ------------------------------------------------------------------------------
import typing as t
import pathlib

from music21 import stream

from music21.converter.subConverters import SubConverter

from musicxml21.musicxml import MusicXmlReader
from musicxml21.musicxml import M21Convert
from musicxml21.musicxml import Score

class MusicXMLConverter(SubConverter):
    '''
    Converter for MusicXML, read with musicxml21's MusicXmlReader.  Files must use a
    ".musicxml21" extension (or format='musicxml21'), because music21 parses ".xml",
    ".musicxml" and ".mxl" files with its own MusicXML reader.

    After parsing, self.warnings holds the reader's warnings.
    '''
    registerFormats = ('musicxml21',)
    registerInputExtensions = ('musicxml21',)

    def __init__(self, **keywords) -> None:
        super().__init__(**keywords)
        self.warnings: list = []
        self.parsedScore: Score | None = None

    def parseData(
        self,
        dataString: str | bytes,
        number: int | None = None
    ) -> stream.Score:
        '''
        Convert a string (or bytes) with a MusicXML document into its corresponding
        music21 elements.

        * dataString: The MusicXML document (bytes may be a compressed .mxl file).

        * number: Unused in this class. Default is ``None``.

        Returns the music21 Score corresponding to the MusicXML document.
        '''
        if isinstance(dataString, str) and dataString.startswith('musicxml21:'):
            dataString = dataString[len('musicxml21:'):]

        reader = MusicXmlReader(dataString)
        self.parsedScore = reader.run()
        self.warnings = reader.warnings
        self.stream = M21Convert.scoreToM21(self.parsedScore)

        output: stream.Stream = self.stream

        if t.TYPE_CHECKING:
            # self.stream is a property defined in SubConverter, and it's not
            # type-hinted properly.  But we know what this is.
            assert isinstance(output, stream.Score)

        return output

    def parseFile(
        self,
        filePath: str | pathlib.Path,
        number: int | None = None,
        **keywords,
    ) -> stream.Score:
        '''
        Convert a file with a MusicXML document (or a compressed .mxl file) into its
        corresponding music21 elements.

        * filePath: Full pathname to the file as a string or Path.

        * number: Unused in this class. Default is ``None``.

        Returns the music21 Score corresponding to the MusicXML file.
        '''
        # MusicXmlReader does the decoding (and unzipping), so read raw bytes.
        with open(filePath, 'rb') as f:
            data: bytes = f.read()

        self.parseData(data, number)

        if t.TYPE_CHECKING:
            assert isinstance(self.stream, stream.Score)

        return self.stream
