# ------------------------------------------------------------------------------
# Name:          m21utilities.py
# Purpose:       Utility functions for music21 objects
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2021-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------

#    All methods are static.  M21Utilities is just a namespace for these utility functions and
#    look-up tables.

import music21 as m21
from music21.common.numberTools import opFrac
from music21.common.types import OffsetQL

from musicxml21.shared.sharedconstants import SharedConstants

class NoMusic21VersionError(Exception):
    pass

class M21Utilities:

    @staticmethod
    def m21VersionIsAtLeast(neededVersion: tuple[int, int, int, str]) -> bool:
        '''
        Compares music21's version tuple against neededVersion, element by element.
        The trailing string element (e.g. 'a11') is ignored.
        '''
        if len(m21.VERSION) == 0:
            raise NoMusic21VersionError('music21 version must be set!')

        for have, need in zip(m21.VERSION[:3], neededVersion[:3]):
            try:
                haveInt: int = int(have)
            except (TypeError, ValueError):
                # can't tell, assume it's fine
                return True
            if haveInt < need:
                return False
            if haveInt > need:
                return True

        return True

    @staticmethod
    def noteTypeAndDotsFromQuarterLength(ql: OffsetQL) -> tuple[str | None, int]:
        '''
        Returns the notated type for a quarterLength that is exactly one of the standard
        values, or 1.5 times one (dots=1).  Anything else is (None, 0).

        >>> M21Utilities.noteTypeAndDotsFromQuarterLength(1.0)
        ('quarter', 0)
        >>> M21Utilities.noteTypeAndDotsFromQuarterLength(3.0)
        ('half', 1)
        >>> M21Utilities.noteTypeAndDotsFromQuarterLength(5.0)
        (None, 0)
        '''
        ql = opFrac(ql)
        exact: str | None = SharedConstants._QL_TO_NOTE_TYPE.get(ql)
        if exact is not None:
            return exact, 0

        undotted: OffsetQL = opFrac(ql / 1.5)
        dotted: str | None = SharedConstants._QL_TO_NOTE_TYPE.get(undotted)
        if dotted is not None:
            return dotted, 1

        return None, 0
