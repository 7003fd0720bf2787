"""Dalvik assembly (smali-style) renderer."""

from __future__ import annotations

import re
from typing import Sequence

from dv_core.highlight import HighlightRule
from dv_core.model import AnnotationDef, ClassDef, FieldDef, MethodDef
from dv_renderers.formatting import dex_flags, join_nonempty, type_descriptor
from dv_renderers.interface import ClassDisplayOptions, Renderer


class DexRenderer(Renderer):
    """Renders classes and methods as a smali-style listing."""

    @property
    def name(self) -> str:
        return "Dex"

    def declare_highlight_rules(self) -> Sequence[HighlightRule]:
        return (
            HighlightRule.compile(r"^[ \t]*(\.end \w+|\.\w+)", "#7f0055", re.MULTILINE),
            HighlightRule.compile(r"^[ \t]+([a-z][a-z0-9/-]*)(?= [^=]|$)", "#00007f", re.MULTILINE),
            HighlightRule.compile(r"\b([vp]\d+)\b", "#0000c0"),
            HighlightRule.compile(r"(\[*L[\w/$]+;)", "#007f7f"),
            HighlightRule.compile(r'("(?:[^"\\\n]|\\.)*")', "#2a00ff"),
            HighlightRule.compile(r"(#[^\n]*)", "#3f7f5f"),
        )

    def write_class(self, class_def: ClassDef, options: ClassDisplayOptions) -> list[str]:
        sections: list[list[str]] = []
        if ClassDisplayOptions.NAME in options:
            sections.append(
                [join_nonempty(".class", dex_flags(class_def.access), type_descriptor(class_def.name))]
            )
        if ClassDisplayOptions.DETAILS in options:
            details: list[str] = []
            if class_def.superclass:
                details.append(f".super {type_descriptor(class_def.superclass)}")
            if class_def.source_file:
                details.append(f'.source "{class_def.source_file}"')
            if class_def.interfaces:
                details.append("# interfaces")
                details.extend(f".implements {type_descriptor(name)}" for name in class_def.interfaces)
            if details:
                sections.append(details)
        if ClassDisplayOptions.ANNOTATIONS in options and class_def.annotations:
            lines = ["# annotations"]
            for annotation in class_def.annotations:
                lines.extend(self._annotation_lines(annotation, 0))
            sections.append(lines)
        if ClassDisplayOptions.FIELDS in options and class_def.fields:
            lines = ["# fields"]
            for field in class_def.fields:
                lines.extend(self._field_lines(field))
            sections.append(lines)
        if ClassDisplayOptions.METHODS in options and class_def.methods:
            lines = ["# methods"]
            for index, method in enumerate(class_def.methods):
                if index:
                    lines.append("")
                lines.extend(self._method_lines(method, 0))
            sections.append(lines)

        output: list[str] = []
        for section in sections:
            if output:
                output.append("")
            output.extend(section)
        return output

    def write_method(
        self,
        class_def: ClassDef,
        method: MethodDef,
        indent_level: int,
        standalone: bool,
    ) -> list[str]:
        if standalone:
            return self._method_lines(method, indent_level)
        return self._body_lines(method, indent_level)

    def _annotation_lines(self, annotation: AnnotationDef, level: int) -> list[str]:
        pad = self.indent(level)
        lines = [f"{pad}.annotation {annotation.visibility} {type_descriptor(annotation.type_name)}"]
        inner = self.indent(level + 1)
        lines.extend(f"{inner}{key} = {value}" for key, value in annotation.elements)
        lines.append(f"{pad}.end annotation")
        return lines

    def _field_lines(self, field: FieldDef) -> list[str]:
        declaration = join_nonempty(
            ".field", dex_flags(field.access), f"{field.name}:{type_descriptor(field.type_name)}"
        )
        if field.initial_value is not None:
            declaration += f" = {field.initial_value}"
        if not field.annotations:
            return [declaration]
        lines = [declaration]
        for annotation in field.annotations:
            lines.extend(self._annotation_lines(annotation, 1))
        lines.append(".end field")
        return lines

    def _prototype(self, method: MethodDef) -> str:
        params = "".join(type_descriptor(param.type_name) for param in method.parameters)
        return f"{method.name}({params}){type_descriptor(method.return_type)}"

    def _method_lines(self, method: MethodDef, level: int) -> list[str]:
        pad = self.indent(level)
        lines = [f"{pad}{join_nonempty('.method', dex_flags(method.access), self._prototype(method))}"]
        lines.extend(self._body_lines(method, level + 1))
        lines.append(f"{pad}.end method")
        return lines

    def _body_lines(self, method: MethodDef, level: int) -> list[str]:
        pad = self.indent(level)
        lines: list[str] = []
        if method.registers:
            lines.append(f"{pad}.registers {method.registers}")
        for annotation in method.annotations:
            lines.extend(self._annotation_lines(annotation, level))
        for instruction in method.instructions:
            operands = ", ".join(instruction.operands)
            lines.append(f"{pad}{join_nonempty(instruction.opcode, operands)}")
        return lines
