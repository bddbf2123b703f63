"""
IPPcode23 - Source to XML Translator
====================================

This package translates programs written in IPPcode23, a small
three-address instructional assembly language, into the XML form consumed
by IPPcode23 interpreters.

Main Components
---------------
- **isa**: The IPPcode23 instruction table (opcodes and operand kinds)
- **parser**: Normalizer, parser, operand classifier and XML builder
- **cli**: The ``ippparse`` command-line tool

Quick Start
-----------
Translate a program:
    >>> from ippcode23 import Translator
    >>> tr = Translator()
    >>> xml_text = tr.translate_file("prog.src")
    >>> tr.write_xml("prog.xml")

Or use the command-line tool:
    $ ippparse prog.src -o prog.xml
    $ ippparse < prog.src > prog.xml

Exit Codes
----------
21 - missing or incorrect ``.IPPcode23`` header
22 - unknown opcode
23 - wrong operand count or malformed operand
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from ippcode23.parser import Translator, translate, translate_file, parse_program
from ippcode23.config import TranslatorConfig, EscapeBase
from ippcode23.errors import (
    IPPError,
    ConfigError,
    TranslationError,
    HeaderError,
    UnknownOpcodeError,
    ArityError,
    OperandSyntaxError,
    SourceLocation,
)

__all__ = [
    "__version__",
    "Translator",
    "translate",
    "translate_file",
    "parse_program",
    "TranslatorConfig",
    "EscapeBase",
    "IPPError",
    "ConfigError",
    "TranslationError",
    "HeaderError",
    "UnknownOpcodeError",
    "ArityError",
    "OperandSyntaxError",
    "SourceLocation",
]
