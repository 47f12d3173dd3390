# ------------------------------------------------------------------------------
# Purpose:       musicxml21 is a partwise MusicXML reader with a measure-level engine,
#                and a CLI app that reads (and optionally converts) MusicXML files
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
#
import argparse
import os
import sys
import typing as t

from music21 import converter
from music21.base import VERSION_STR
import musicxml21
from musicxml21.musicxml import M21Convert
from musicxml21.musicxml import MusicXmlError
from musicxml21.musicxml import MusicXmlReader
from musicxml21.musicxml import Score

def getOutputFormatsList() -> t.List[str]:
    c = converter.Converter()
    outList = c.subConvertersList('output')
    result = []
    for subc in outList:
        if subc.registerOutputExtensions:  # if this subc supports output at all
            for form in subc.registerFormats:
                result.append(form)
    return result

def printSupportedFormats() -> None:
    c = converter.Converter()
    outList = c.subConvertersList('output')
    print('Supported output formats are:', file=sys.stderr)
    for subc in outList:
        if subc.registerOutputExtensions:
            print('\tformats   : ' + ', '.join(subc.registerFormats)
                    + '\textensions: ' + ', '.join(subc.registerOutputExtensions),
                    file=sys.stderr)

def getValidOutputExtensionForFormat(form: str) -> str:
    c = converter.Converter()
    outList = c.subConvertersList('output')
    for subc in outList:
        if subc.registerOutputExtensions:
            if form in subc.registerFormats:
                return '.' + subc.registerOutputExtensions[0]
    return ''

def getOutputExtensionsListForFormat(form: str) -> t.List[str]:
    c = converter.Converter()
    outList = c.subConvertersList('output')
    result = []
    for subc in outList:
        if subc.registerOutputExtensions:
            if form in subc.registerFormats:
                for outputExt in subc.registerOutputExtensions:
                    result.append('.' + outputExt)
    return result

def printScoreSummary(score: Score) -> None:
    print(f'title: {score.title or "(none)"}')
    print(f'version: {score.version or "(unspecified)"}')
    for part in score.parts:
        noteCount: int = sum(len(measure.notes) for measure in part.measures)
        print(f'part {part.id} ({part.name or "unnamed"}): '
                + f'{len(part.measures)} measures, {noteCount} notes')


# ------------------------------------------------------------------------------

# main entry point (parse arguments and do conversion)
if __name__ == "__main__":
    # make our reader available via music21's converter.parse(..., format='musicxml21')
    musicxml21.register()

    parser = argparse.ArgumentParser(
        prog='python3 -m musicxml21',
        description='Partwise MusicXML reader (and converter, via music21)'
    )
    parser.add_argument('input_file',
                        help='input MusicXML (.musicxml, .xml or .mxl) file to read '
                            + '(\'-\' reads from stdin)')
    parser.add_argument('-o', '--output-file',
                        help='output music file to convert to (\'-\' writes to stdout). '
                            + 'If not specified, a summary of the score is printed instead.')
    parser.add_argument('-t', '--output-to',
                        choices=getOutputFormatsList(),
                        help='format of the output file (required with --output-file)')
    parser.add_argument('-w', '--warnings', action='store_true', default=False,
                        help='print the reader\'s warnings to stderr')

    print('music21 version:', VERSION_STR, file=sys.stderr)
    args = parser.parse_args()

    if args.output_file is not None and args.output_to is None:
        print('--output-to/-t is required with --output-file/-o', file=sys.stderr)
        printSupportedFormats()
        sys.exit(1)

    try:
        if args.input_file == '-':
            reader = MusicXmlReader(sys.stdin.buffer.read())
        else:
            reader = MusicXmlReader.fromFile(args.input_file)
        score: Score = reader.run()
    except MusicXmlError as e:
        print(f'Failed to read {args.input_file}: {e}', file=sys.stderr)
        sys.exit(1)

    if args.warnings:
        for warning in reader.warnings:
            print(str(warning), file=sys.stderr)
        print(reader.warningSink.createSummary(), file=sys.stderr)

    if args.output_file is None:
        printScoreSummary(score)
        sys.exit(0)

    s = M21Convert.scoreToM21(score)

    if args.output_file == '-':
        outputFile = None
    else:
        # Validate outputFile extension by hand, and if necessary change it to be valid
        # for the output format.
        outputFile = args.output_file
        outFileName, outFileExt = os.path.splitext(outputFile)
        validOutputExtList = getOutputExtensionsListForFormat(args.output_to)
        if outFileExt not in validOutputExtList:
            outputFile = outFileName + getValidOutputExtensionForFormat(args.output_to)

    actualOutFile = s.write(fmt=args.output_to, fp=outputFile, makeNotation=False)
    if outputFile is None:
        # read actualOutFile (a temp file in this case) into a string, and then write it to stdout
        with open(actualOutFile, encoding='utf-8') as f:
            outStr: str = f.read()
            sys.stdout.write(outStr)
    else:
        print('Success!  Output can be found in', outputFile, file=sys.stderr)
