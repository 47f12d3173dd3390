# ------------------------------------------------------------------------------
# Name:          setup.py
# Purpose:       install musicxml21 package
#
# Authors:       Greg Chapman
#
# Copyright:     (c) 2023-2025 Greg Chapman
# License:       MIT, see LICENSE
# ------------------------------------------------------------------------------

import setuptools

# must be kept up to date with musicxml21/shared/sharedconstants.py:_MUSICXML21_VERSION
musicxml21version = '1.0.0'

if __name__ == '__main__':
    setuptools.setup(
        name='musicxml21',
        version=musicxml21version,

        description='A partwise MusicXML reader with a measure-level engine, structured warnings, and a music21 subconverter plug-in',
        long_description=open('README.md').read(),
        long_description_content_type='text/markdown',

        author='Greg Chapman',
        author_email='gregc@mac.com',

        classifiers=[
            'Development Status :: 4 - Beta',
            'License :: OSI Approved :: MIT License',
            'Programming Language :: Python :: 3 :: Only',
            'Operating System :: OS Independent',
            'Natural Language :: English',
        ],

        keywords=[
            'music',
            'score',
            'notation',
            'MusicXML',
            'mxl',
            'parser',
            'reader',
            'validation',
            'music21',
        ],

        packages=setuptools.find_packages(exclude=['tests', 'tests.*']),

        python_requires='>=3.10',

        install_requires=[
            'music21>=10.0',
        ],

        extras_require={
            'test': ['pytest'],
        },
    )
