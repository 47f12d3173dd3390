# -----------------------------------------------------------------------------
# Name:         musicxml/__init__.py
# Purpose:      MusicXML: a partwise MusicXML reader and its music21 conversion
#
# Authors:      Greg Chapman
#
# Copyright:    Copyright © 2023-2025 Greg Chapman
# License:      MIT, see LICENSE
# -----------------------------------------------------------------------------
'''
The :mod:`musicxml` module reads partwise MusicXML documents into an immutable
:class:`Score`, and converts that Score into music21 objects.
'''

from .mxlexceptions import MusicXmlError
from .mxlexceptions import MusicXmlStructureError
from .mxlexceptions import MusicXmlValidationError
from .mxlexceptions import MusicXmlParseError

from .mxlvalidation import RuleViolation

from .mxlvalues import Pitch
from .mxlvalues import Duration
from .mxlvalues import TimeSignature
from .mxlvalues import KeySignature
from .mxlvalues import Clef
from .mxlvalues import TimeModification

from .mxlmetadata import ScoreMetadata
from .mxlmetadata import ScorePartInfo

from .mxlscore import Slur
from .mxlscore import Tie
from .mxlscore import Articulation
from .mxlscore import Note
from .mxlscore import Beam
from .mxlscore import Barline
from .mxlscore import Ending
from .mxlscore import Direction
from .mxlscore import PrintHint
from .mxlscore import Measure
from .mxlscore import Part
from .mxlscore import Score

from .mxlwarnings import WarningSeverity
from .mxlwarnings import WarningCategories
from .mxlwarnings import MusicXmlWarning
from .mxlwarnings import WarningSink

from .mxlshared import MxlShared
from .mxlbeams import BeamFragment
from .mxlbeams import BeamReconstructor
from .mxlattributes import AttributesUpdate
from .mxlattributes import AttributesResolver
from .mxlnote import NoteFields
from .mxlnote import NoteResult
from .mxlnote import NoteResolver
from .mxlnote import buildNote
from .mxltimeline import TimelineTracker
from .mxldirections import MxlDirectionReader
from .mxlmeasure import MeasureState
from .mxlmeasure import MeasureEngine
from .mxlpart import PartWalker
from .mxlmetadatareader import MxlMetadataReader
from .mxlreader import ScoreAssembler
from .mxlreader import MusicXmlReader

from .m21convert import M21Convert
