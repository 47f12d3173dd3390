# ------------------------------------------------------------------------------
# Name:          mxlshared.py
# Purpose:       Shared element-access utilities for the MusicXML readers
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import re
import typing as t
from xml.etree.ElementTree import Element

from musicxml21.shared import sourceLineOf

# ASCII digits only (MusicXML integer and decimal types): no "1_000", "nan" or "inf"
_INTEGER_PATTERN: re.Pattern = re.compile(r'[+-]?[0-9]+')
_DECIMAL_PATTERN: re.Pattern = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)')

class MxlShared:
    '''
    Static helpers for reading text and attributes off MusicXML elements.  None of these
    raise: unparsable text comes back as None, and the caller decides what that means.
    '''

    @staticmethod
    def line(elem: Element | None) -> int | None:
        return sourceLineOf(elem)

    @staticmethod
    def text(elem: Element | None) -> str | None:
        '''
        Stripped text of elem, or None if elem is None.  Empty text is ''.
        '''
        if elem is None:
            return None
        if elem.text is None:
            return ''
        return elem.text.strip()

    @staticmethod
    def childText(elem: Element, tag: str) -> str | None:
        return MxlShared.text(elem.find(tag))

    @staticmethod
    def intFromText(text: str | None) -> int | None:
        '''
        >>> MxlShared.intFromText(' 480 ')
        480
        >>> MxlShared.intFromText('4.5') is None
        True
        >>> MxlShared.intFromText(None) is None
        True
        >>> MxlShared.intFromText('1_000') is None
        True
        '''
        if text is None:
            return None
        text = text.strip()
        if not _INTEGER_PATTERN.fullmatch(text):
            return None
        return int(text)

    @staticmethod
    def floatFromText(text: str | None) -> float | None:
        '''
        >>> MxlShared.floatFromText('-.5')
        -0.5
        >>> MxlShared.floatFromText('nan') is None
        True
        '''
        if text is None:
            return None
        text = text.strip()
        if not _DECIMAL_PATTERN.fullmatch(text):
            return None
        return float(text)

    @staticmethod
    def alterFromText(text: str | None) -> float | None:
        '''
        Integer alters come back as ints, microtonal ones as floats.

        >>> MxlShared.alterFromText('-1')
        -1
        >>> MxlShared.alterFromText('0.5')
        0.5
        '''
        intValue: int | None = MxlShared.intFromText(text)
        if intValue is not None:
            return intValue
        return MxlShared.floatFromText(text)

    @staticmethod
    def childInt(elem: Element, tag: str) -> int | None:
        return MxlShared.intFromText(MxlShared.childText(elem, tag))

    @staticmethod
    def childFloat(elem: Element, tag: str) -> float | None:
        return MxlShared.floatFromText(MxlShared.childText(elem, tag))

    @staticmethod
    def attrInt(elem: Element, name: str) -> int | None:
        return MxlShared.intFromText(elem.get(name))

    @staticmethod
    def attrFloat(elem: Element, name: str) -> float | None:
        return MxlShared.floatFromText(elem.get(name))

    @staticmethod
    def attrYesNo(elem: Element, name: str, default: bool) -> bool:
        value: str | None = elem.get(name)
        if value == 'yes':
            return True
        if value == 'no':
            return False
        return default

    @staticmethod
    def context(partId: str, measureNumber: str, **extra: t.Any) -> dict[str, t.Any]:
        output: dict[str, t.Any] = {'part': partId, 'measure': measureNumber}
        output.update(extra)
        return output
