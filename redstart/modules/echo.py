"""The ``echo`` module: write a message to stdout."""

import click

from .base import FieldSpec, Module, StepContext, check_fields


COLORS = {
    'red': 'bright_red',
    'green': 'bright_green',
    'yellow': 'bright_yellow',
    'blue': 'bright_blue',
    'white': 'bright_white',
    'black': 'bright_black',
    'purple': 'bright_magenta',
    'aqua': 'bright_cyan',
}


class Echo(Module):
    name = 'echo'
    description = 'Write to stdout'
    required_fields = [
        FieldSpec('message', 'The message to write'),
    ]
    optional_fields = [
        FieldSpec(
            'color',
            'The color of the message\n'
            'Available options: red, green, yellow, blue, white, black, '
            'purple and aqua',
            choices=list(COLORS),
        ),
    ]

    def validate(self, context: StepContext) -> bool:
        if check_fields(self, context) is not None:
            return False
        if context.options['message'] == '':
            context.logger.error("'message' must not be empty")
            return False
        return True

    def initiate(self, context: StepContext) -> None:
        message = context.options['message']
        color = context.options.get('color')
        if color in COLORS:
            message = click.style(message, fg=COLORS[color])
        click.echo(message)
