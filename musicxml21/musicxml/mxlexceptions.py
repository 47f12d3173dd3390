# ------------------------------------------------------------------------------
# Name:          mxlexceptions.py
# Purpose:       Exceptions that can be raised during MusicXML parsing.
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------
import typing as t

class MusicXmlError(Exception):
    '''
    Base class for all fatal MusicXML parsing errors.  args[0] is always the message,
    so callers can compare it against the message constants in each module.
    '''
    def __init__(
        self,
        message: str,
        rule: str | None = None,
        line: int | None = None,
        element: str | None = None,
        context: dict[str, t.Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.rule: str | None = rule
        self.line: int | None = line
        self.element: str | None = element
        self.context: dict[str, t.Any] = dict(context) if context else {}

    def __str__(self) -> str:
        output: str = self.message
        if self.rule:
            output += f' [rule: {self.rule}]'
        if self.element:
            output += f' (element: {self.element}'
            if self.line is not None:
                output += f', line: {self.line}'
            output += ')'
        elif self.line is not None:
            output += f' (line: {self.line})'
        if self.context:
            output += f' [context: {self.context}]'
        return output

class MusicXmlStructureError(MusicXmlError):
    '''When a required element or attribute is missing, or its text cannot be parsed.'''
    pass

class MusicXmlValidationError(MusicXmlError):
    '''When a parsed value violates a musical rule (range, power-of-two, numbering...).'''
    pass

class MusicXmlParseError(MusicXmlError):
    '''When the document is not XML at all, or a compressed archive cannot be read.'''
    pass
