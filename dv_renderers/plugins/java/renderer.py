"""Java-like pseudo-source renderer."""

from __future__ import annotations

import re
from typing import Sequence

from dv_core.highlight import HighlightRule
from dv_core.model import AccessFlags, AnnotationDef, ClassDef, FieldDef, Instruction, MethodDef
from dv_renderers.formatting import java_modifiers, join_nonempty, simple_type
from dv_renderers.interface import ClassDisplayOptions, Renderer

JAVA_KEYWORDS = (
    "public", "private", "protected", "static", "final", "synchronized",
    "volatile", "transient", "native", "abstract", "class", "interface",
    "enum", "extends", "implements", "package", "return", "new", "throw",
    "goto", "if", "this", "null", "void", "boolean", "byte", "char", "short",
    "int", "long", "float", "double",
)

_IF_OPERATORS = {
    "eq": "==",
    "ne": "!=",
    "lt": "<",
    "ge": ">=",
    "gt": ">",
    "le": "<=",
}


def _format_annotation(annotation: AnnotationDef) -> str:
    text = f"@{simple_type(annotation.type_name)}"
    if annotation.elements:
        args = ", ".join(f"{key} = {value}" for key, value in annotation.elements)
        text += f"({args})"
    return text


def _statement(instruction: Instruction) -> str:
    """Best-effort Java statement for one instruction."""
    op = instruction.opcode
    args = instruction.operands
    if op == "return-void":
        return "return;"
    if op.startswith("return") and args:
        return f"return {args[0]};"
    if op.startswith("const") and len(args) >= 2:
        return f"{args[0]} = {args[1]};"
    if op.startswith("move-result") and args:
        return f"{args[0]} = $result;"
    if op.startswith("move") and len(args) >= 2:
        return f"{args[0]} = {args[1]};"
    if op.startswith("invoke") and args:
        target, registers = args[0], args[1:]
        return f"$result = {target}({', '.join(registers)});"
    if op == "new-instance" and len(args) >= 2:
        return f"{args[0]} = new {simple_type(args[1])}();"
    if op == "throw" and args:
        return f"throw {args[0]};"
    if op.startswith("goto") and args:
        return f"goto {args[0]};"
    if op.startswith("if-"):
        condition = op[3:]
        zero_compare = condition.endswith("z")
        operator = _IF_OPERATORS.get(condition.rstrip("z"))
        if operator is not None:
            if zero_compare and len(args) >= 2:
                return f"if ({args[0]} {operator} 0) goto {args[1]};"
            if len(args) >= 3:
                return f"if ({args[0]} {operator} {args[1]}) goto {args[2]};"
    if args:
        return f"/* {op} {', '.join(args)} */"
    return f"/* {op} */"


class JavaRenderer(Renderer):
    """Renders classes and methods as Java-like pseudo-source.

    Listed as "Java" in language pickers; the output is not compilable Java.
    """

    @property
    def name(self) -> str:
        return "Java"

    def declare_highlight_rules(self) -> Sequence[HighlightRule]:
        keywords = "|".join(JAVA_KEYWORDS)
        return (
            HighlightRule.compile(rf"\b({keywords})\b", "#7f0055"),
            HighlightRule.compile(r"(@[\w.$]+)", "#646464"),
            HighlightRule.compile(r"(?<![\w.$])(-?(?:0x[0-9a-fA-F]+|\d+)[LlFfDd]?)\b", "#0000c0"),
            HighlightRule.compile(r'("(?:[^"\\\n]|\\.)*")', "#2a00ff"),
            HighlightRule.compile(r"(//[^\n]*)", "#3f7f5f"),
            HighlightRule.compile(r"(/\*.*?\*/)", "#3f7f5f", re.DOTALL),
        )

    def write_class(self, class_def: ClassDef, options: ClassDisplayOptions) -> list[str]:
        lines: list[str] = []
        show_name = ClassDisplayOptions.NAME in options
        show_details = ClassDisplayOptions.DETAILS in options

        if show_name and class_def.package:
            lines.extend([f"package {class_def.package};", ""])
        if show_details and class_def.source_file:
            lines.append(f'// Compiled from "{class_def.source_file}"')
        if ClassDisplayOptions.ANNOTATIONS in options:
            lines.extend(_format_annotation(ann) for ann in class_def.annotations)

        extends, implements = self._supertypes(class_def)
        if show_name:
            header = self._class_header(class_def)
            if show_details:
                header = join_nonempty(header, extends, implements)
            lines.append(f"{header} {{")
        elif show_details:
            lines.extend(f"// {clause}" for clause in (extends, implements) if clause)

        member_level = 1 if show_name else 0
        if ClassDisplayOptions.FIELDS in options and class_def.fields:
            if lines:
                lines.append("")
            for field in class_def.fields:
                lines.extend(self._field_lines(field, member_level))
        if ClassDisplayOptions.METHODS in options:
            for method in class_def.methods:
                if lines:
                    lines.append("")
                lines.extend(self._method_lines(class_def, method, member_level))

        if show_name:
            lines.append("}")
        return lines

    def write_method(
        self,
        class_def: ClassDef,
        method: MethodDef,
        indent_level: int,
        standalone: bool,
    ) -> list[str]:
        if standalone:
            return self._method_lines(class_def, method, indent_level)
        return self._body_lines(method, indent_level)

    def _class_header(self, class_def: ClassDef) -> str:
        access = class_def.access
        if AccessFlags.ANNOTATION in access:
            kind = "@interface"
        elif AccessFlags.INTERFACE in access:
            kind = "interface"
        elif AccessFlags.ENUM in access:
            kind = "enum"
        else:
            kind = "class"
        # Interfaces are implicitly abstract.
        exclude = AccessFlags.ABSTRACT if AccessFlags.INTERFACE in access else AccessFlags.NONE
        return join_nonempty(java_modifiers(access, exclude), kind, class_def.simple_name)

    def _supertypes(self, class_def: ClassDef) -> tuple[str, str]:
        extends = ""
        if class_def.superclass and class_def.superclass != "java.lang.Object":
            extends = f"extends {simple_type(class_def.superclass)}"
        implements = ""
        if class_def.interfaces:
            keyword = "extends" if AccessFlags.INTERFACE in class_def.access else "implements"
            names = ", ".join(simple_type(name) for name in class_def.interfaces)
            implements = f"{keyword} {names}"
        return extends, implements

    def _field_lines(self, field: FieldDef, level: int) -> list[str]:
        pad = self.indent(level)
        lines = [f"{pad}{_format_annotation(ann)}" for ann in field.annotations]
        declaration = join_nonempty(
            java_modifiers(field.access), simple_type(field.type_name), field.name
        )
        if field.initial_value is not None:
            declaration += f" = {field.initial_value}"
        lines.append(f"{pad}{declaration};")
        return lines

    def _signature(self, class_def: ClassDef, method: MethodDef) -> str:
        params = ", ".join(
            f"{simple_type(param.type_name)} {param.name or f'p{index}'}"
            for index, param in enumerate(method.parameters)
        )
        if method.name == "<clinit>":
            return "static"
        modifiers = java_modifiers(method.access)
        if method.name == "<init>":
            return join_nonempty(modifiers, f"{class_def.simple_name}({params})")
        return join_nonempty(
            modifiers, simple_type(method.return_type), f"{method.name}({params})"
        )

    def _method_lines(self, class_def: ClassDef, method: MethodDef, level: int) -> list[str]:
        pad = self.indent(level)
        lines = [f"{pad}{_format_annotation(ann)}" for ann in method.annotations]
        signature = self._signature(class_def, method)
        if method.access & (AccessFlags.ABSTRACT | AccessFlags.NATIVE):
            lines.append(f"{pad}{signature};")
            return lines
        lines.append(f"{pad}{signature} {{")
        lines.extend(self._body_lines(method, level + 1))
        lines.append(f"{pad}}}")
        return lines

    def _body_lines(self, method: MethodDef, level: int) -> list[str]:
        pad = self.indent(level)
        return [f"{pad}{_statement(instruction)}" for instruction in method.instructions]
