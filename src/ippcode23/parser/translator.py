"""
IPPcode23 Translator - Main Interface
=====================================

This module provides the Translator class, the primary interface for
turning IPPcode23 source into its XML representation. It coordinates the
normalizer, parser and XML builder.

Example Usage
-------------
>>> from ippcode23.parser import Translator
>>>
>>> tr = Translator()
>>> xml_text = tr.translate_string('''
... .IPPcode23
... DEFVAR GF@a
... READ GF@a int
... WRITE GF@a
... ''')
>>> tr.instruction_count()
3
>>> tr.write_xml("prog.xml")

Command-Line Usage
------------------
    $ ippparse prog.src -o prog.xml
    $ ippparse < prog.src > prog.xml
"""

from pathlib import Path
from typing import Optional
import logging

from ippcode23.config import TranslatorConfig
from ippcode23.parser.parser import Program, parse_program
from ippcode23.parser.xmlgen import XMLBuilder


logger = logging.getLogger(__name__)


def decode_source(data: bytes) -> str:
    """
    Decode raw source bytes as UTF-8.

    Bytes that are not valid UTF-8 become surrogate escapes instead of
    failing; string literals later escape them as ``\\ddd`` codes of the
    original byte.
    """
    return data.decode("utf-8", errors="surrogateescape")



class Translator:
    """
    Main IPPcode23 to XML translator.

    Each translate call is independent: the translator only remembers the
    last Program and XML text so they can be inspected or written out.

    Attributes:
        config: Escape base and XML formatting settings
    """

    def __init__(self, config: Optional[TranslatorConfig] = None):
        """
        Initialize the translator.

        Args:
            config: Translator settings (default: TranslatorConfig())
        """
        self.config = config or TranslatorConfig()
        self._program: Optional[Program] = None
        self._xml: Optional[str] = None
        self._source_file: Optional[Path] = None

    # =========================================================================
    # Translation Methods
    # =========================================================================

    def parse_string(self, source: str, filename: str = "<input>") -> Program:
        """
        Validate source text and return its Program without building XML.

        Raises:
            TranslationError: If the source is invalid
        """
        return parse_program(source, filename, escape_base=self.config.escape_base)

    def translate_string(self, source: str, filename: str = "<input>") -> str:
        """
        Translate source text to XML.

        The pipeline is:
        1. Normalize source into logical lines
        2. Parse lines into a Program (header, opcodes, operands)
        3. Build and serialize the XML document

        Args:
            source: IPPcode23 source text
            filename: Virtual filename for error messages

        Returns:
            The XML document as a string

        Raises:
            TranslationError: If the source is invalid
        """
        self._program = None
        self._xml = None

        program = self.parse_string(source, filename)
        xml_text = XMLBuilder(self.config).serialize(program)

        self._program = program
        self._xml = xml_text

        logger.info(f"Translated {len(program)} instructions from {filename}")
        return xml_text

    def translate_file(self, filepath: str | Path) -> str:
        """
        Translate source code from a file.

        Args:
            filepath: Path to IPPcode23 source file

        Returns:
            The XML document as a string

        Raises:
            TranslationError: If the source is invalid
            FileNotFoundError: If the source file is not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        logger.debug(f"Reading {filepath}")
        source = decode_source(filepath.read_bytes())

        return self.translate_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_program(self) -> Optional[Program]:
        """Get the Program of the last successful translation."""
        return self._program

    def get_source_file(self) -> Optional[Path]:
        """Get the path given to the last translate_file call."""
        return self._source_file

    def get_xml(self) -> Optional[str]:
        """Get the XML text of the last successful translation."""
        return self._xml

    def instruction_count(self) -> int:
        """Number of instructions in the last successful translation."""
        return len(self._program) if self._program is not None else 0

    def write_xml(self, filepath: str | Path) -> None:
        """
        Write the XML of the last translation to a file.

        Raises:
            RuntimeError: If nothing has been translated yet
        """
        if self._xml is None:
            raise RuntimeError("No translation available; call translate_string() first")

        filepath = Path(filepath)
        filepath.write_text(self._xml + "\n", encoding="utf-8", errors="surrogateescape")
        logger.debug(f"Wrote XML to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def translate(
    source: str,
    filename: str = "<input>",
    config: Optional[TranslatorConfig] = None,
) -> str:
    """
    Convenience function to translate a source string to XML.

    Args:
        source: IPPcode23 source text
        filename: Virtual filename for error messages
        config: Translator settings

    Returns:
        The XML document as a string
    """
    return Translator(config).translate_string(source, filename)


def translate_file(
    filepath: str | Path,
    config: Optional[TranslatorConfig] = None,
) -> str:
    """
    Convenience function to translate a source file to XML.

    Args:
        filepath: Path to IPPcode23 source file
        config: Translator settings

    Returns:
        The XML document as a string
    """
    return Translator(config).translate_file(filepath)
