# ------------------------------------------------------------------------------
# Name:          sharedconstants.py
# Purpose:       Constants shared across musicxml21
#
# Authors:       Greg Chapman <gregc@mac.com>
#
# Copyright:     (c) 2021-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------

class SharedConstants:
    # must be kept up to date with setup.py:musicxml21version
    _MUSICXML21_NAME: str = 'musicxml21'
    _MUSICXML21_VERSION: str = '1.0.0'

    # MusicXML versions we know how to read
    _SUPPORTED_MUSICXML_VERSIONS: tuple[str, ...] = ('3.0', '3.1', '4.0')

    # first four bytes of a zip archive (i.e. a compressed .mxl file)
    _ZIP_SIGNATURE: bytes = b'PK\x03\x04'

    # type names, keyed by quarterLength; the first match wins
    _QL_TO_NOTE_TYPE: dict[float, str] = {
        16.0: 'long',
        8.0: 'breve',
        4.0: 'whole',
        2.0: 'half',
        1.0: 'quarter',
        0.5: 'eighth',
        0.25: '16th',
        0.125: '32nd',
        0.0625: '64th',
        0.03125: '128th',
        0.015625: '256th',
        0.0078125: '512th',
        0.00390625: '1024th',
    }
