# ------------------------------------------------------------------------------
# Purpose:       shared is a module of musicxml21 containing shared items for
#                use by the MusicXML reader and its music21 subconverter.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2021-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
__all__ = [
    'SharedConstants',
    'M21Utilities',
    'LineNumberingTreeBuilder',
]

from .sharedconstants import SharedConstants
from .m21utilities import M21Utilities
from .m21utilities import NoMusic21VersionError
from .xmlutilities import LineNumberingTreeBuilder
from .xmlutilities import SourceLineElement
from .xmlutilities import sourceLineOf
