"""
IPPcode23 Parser
================

This package translates IPPcode23 source into its XML representation.

Main Components
---------------
- **Translator**: Main class that orchestrates the translation
- **Normalizer**: Strips comments and whitespace into logical lines
- **Parser**: Validates the header, opcodes and arity; builds the Program
- **OperandClassifier**: Validates operands and classifies symbols
- **XMLBuilder**: Emits the XML document

Translation Process
-------------------
1. **Normalization (Normalizer)**: comments removed, whitespace collapsed,
   blank lines dropped
2. **Parsing (Parser + OperandClassifier)**: header check, opcode lookup,
   operand splitting, per-operand validation and classification
3. **Emission (XMLBuilder)**: one ``instruction`` element per line with
   ``argN`` children

Example Usage
-------------
>>> from ippcode23.parser import translate
>>> print(translate(".IPPcode23\\nWRITE string@hello\\\\032world"))
<?xml version='1.0' encoding='UTF-8'?>
<program language="IPPcode23">
 <instruction order="1" opcode="WRITE">
  <arg1 type="string">hello\\092032world</arg1>
 </instruction>
</program>
"""

from ippcode23.parser.translator import (
    Translator,
    decode_source,
    translate,
    translate_file,
)
from ippcode23.parser.lexer import (
    Normalizer,
    SourceLine,
    normalize_source,
    normalize_lines,
    split_line,
    split_operands,
)
from ippcode23.parser.parser import Parser, Program, Instruction, parse_program
from ippcode23.parser.operands import (
    Operand,
    Label,
    TypeName,
    Variable,
    Literal,
    OperandClassifier,
    classify_operand,
    escape_string,
    unescape_string,
    is_identifier,
)
from ippcode23.parser.xmlgen import XMLBuilder

__all__ = [
    # Main class and functions
    "Translator",
    "decode_source",
    "translate",
    "translate_file",
    # Normalizer
    "Normalizer",
    "SourceLine",
    "normalize_source",
    "normalize_lines",
    "split_line",
    "split_operands",
    # Parser
    "Parser",
    "Program",
    "Instruction",
    "parse_program",
    # Operands
    "Operand",
    "Label",
    "TypeName",
    "Variable",
    "Literal",
    "OperandClassifier",
    "classify_operand",
    "escape_string",
    "unescape_string",
    "is_identifier",
    # XML
    "XMLBuilder",
]
