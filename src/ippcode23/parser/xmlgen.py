"""
IPPcode23 XML Document Builder
==============================

This module builds the XML representation of a parsed Program:

    <?xml version='1.0' encoding='UTF-8'?>
    <program language="IPPcode23">
     <instruction order="1" opcode="DEFVAR">
      <arg1 type="var">GF@a</arg1>
     </instruction>
     <instruction order="2" opcode="BREAK" />
    </program>

Operand elements are numbered ``arg1`` .. ``argN`` in declared order.
Instructions without operands have no child elements. The builder only
receives validated data and never fails.
"""

from typing import Optional
import xml.etree.ElementTree as ET

from ippcode23.config import TranslatorConfig
from ippcode23.parser.parser import Instruction, Program


class XMLBuilder:
    """
    Builds and serializes the XML document for one Program.

    A builder is created per translation and keeps no state between calls.

    Usage:
        builder = XMLBuilder(config)
        xml_text = builder.serialize(program)
    """

    def __init__(self, config: Optional[TranslatorConfig] = None):
        self._config = config or TranslatorConfig()

    def build(self, program: Program) -> ET.Element:
        """
        Build the element tree for a program.

        Returns:
            The root ``program`` element
        """
        root = ET.Element("program", {"language": program.language})
        for instruction in program.instructions:
            self._add_instruction(root, instruction)
        return root

    def serialize(self, program: Program) -> str:
        """
        Build and serialize a program to XML text.

        Returns:
            The UTF-8 XML document as a string
        """
        root = self.build(program)

        if self._config.pretty:
            ET.indent(root, space=self._config.indent)

        data = ET.tostring(
            root,
            encoding="UTF-8",
            xml_declaration=self._config.xml_declaration,
        )
        return data.decode("utf-8")

    def _add_instruction(self, root: ET.Element, instruction: Instruction) -> None:
        element = ET.SubElement(root, "instruction", {
            "order": str(instruction.order),
            "opcode": instruction.opcode.upper(),
        })

        for index, operand in enumerate(instruction.operands, start=1):
            arg = ET.SubElement(element, f"arg{index}", {"type": operand.type_tag})
            arg.text = operand.text
