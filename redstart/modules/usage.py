"""Plain-text usage information for modules."""

from typing import List

from .base import FieldSpec, Module


def _field_lines(spec: FieldSpec) -> List[str]:
    lines = [f"  {spec.name} ({spec.type})"]
    lines.extend(f"      {line}" for line in spec.description.split('\n'))
    if spec.choices:
        shown = (choice or '""' for choice in spec.choices)
        lines.append(f"      Choices: {', '.join(shown)}")
    return lines


def format_usage(module: Module) -> str:
    """Describe a module and the options it takes."""
    lines = [module.name, '']
    lines.extend(module.description.split('\n'))

    if module.required_fields:
        lines.extend(['', 'Required Fields'])
        for spec in module.required_fields:
            lines.extend(_field_lines(spec))

    if module.optional_fields:
        lines.extend(['', 'Optional Fields'])
        for spec in module.optional_fields:
            lines.extend(_field_lines(spec))

    return '\n'.join(lines)
