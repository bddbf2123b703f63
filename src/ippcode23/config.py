"""
IPPcode23 Translator Configuration
==================================

Translator settings: string escape base and XML output formatting.
Configuration can come from:
- Default values (defined here)
- Environment variables (``TranslatorConfig.from_env``)
- Command-line options (applied by the CLI on top of the above)

Escape Base
-----------
String literals are re-encoded byte by byte: every byte <= 32, ``#`` (35)
and ``\\`` (92) becomes a backslash followed by three digits.

| Base    | space  | ``#``  | ``\\``  |
|---------|--------|--------|---------|
| decimal | \\032  | \\035  | \\092   |
| octal   | \\040  | \\043  | \\134   |

Decimal is what IPPcode23 consumers expect. Octal reproduces the output of
older translators that printed the octal digits of the byte.
"""

from dataclasses import dataclass
from enum import Enum
import os

from ippcode23.errors import ConfigError


HEADER = ".IPPcode23"
LANGUAGE = "IPPcode23"


class EscapeBase(Enum):
    """Numeric base used for the three digits of a string escape."""
    DECIMAL = "decimal"
    OCTAL = "octal"

    @classmethod
    def parse(cls, value: "str | EscapeBase") -> "EscapeBase":
        """
        Convert a user-supplied name to an EscapeBase.

        Raises:
            ConfigError: If the name is not a known base
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(base.value for base in cls)
            raise ConfigError(
                f"invalid escape base '{value}' (expected one of: {choices})"
            ) from None


_FALSE_WORDS = frozenset({"0", "false", "no", "off"})
_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})


@dataclass
class TranslatorConfig:
    """
    Configuration for a translation run.

    Attributes:
        escape_base: Base of the digits in string escapes (default: decimal)
        indent: Indentation unit for pretty-printed XML; empty string
                produces compact output (default: one space)
        xml_declaration: Emit the ``<?xml ...?>`` declaration (default: True)
    """

    escape_base: EscapeBase = EscapeBase.DECIMAL
    indent: str = " "
    xml_declaration: bool = True

    def __post_init__(self) -> None:
        self.escape_base = EscapeBase.parse(self.escape_base)

    @property
    def pretty(self) -> bool:
        return bool(self.indent)

    @classmethod
    def from_env(cls) -> "TranslatorConfig":
        """
        Create TranslatorConfig from environment variables.

        Environment variables (all optional):
            IPPCODE23_ESCAPE_BASE: "decimal" or "octal"
            IPPCODE23_INDENT: number of spaces, or "none" for compact output
            IPPCODE23_XML_DECLARATION: "0"/"false"/"no" to omit the declaration

        Returns:
            TranslatorConfig with values from environment variables

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        config = cls()

        if escape_base := os.environ.get("IPPCODE23_ESCAPE_BASE"):
            config.escape_base = EscapeBase.parse(escape_base)

        if indent := os.environ.get("IPPCODE23_INDENT"):
            if indent.strip().lower() == "none":
                config.indent = ""
            else:
                try:
                    width = int(indent)
                except ValueError:
                    raise ConfigError(
                        f"invalid IPPCODE23_INDENT '{indent}' "
                        "(expected a number of spaces or 'none')"
                    ) from None
                if width < 0:
                    raise ConfigError(f"IPPCODE23_INDENT must not be negative, got {width}")
                config.indent = " " * width

        if declaration := os.environ.get("IPPCODE23_XML_DECLARATION"):
            word = declaration.strip().lower()
            if word in _FALSE_WORDS:
                config.xml_declaration = False
            elif word in _TRUE_WORDS:
                config.xml_declaration = True
            else:
                raise ConfigError(
                    f"invalid IPPCODE23_XML_DECLARATION '{declaration}'"
                )

        return config
