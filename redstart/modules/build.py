"""The ``@build/generic`` module: run any build program."""

import subprocess

from redstart.exceptions import StepFailedError
from .base import FieldSpec, Module, StepContext, as_list, check_fields


class GenericBuild(Module):
    """Run ``command`` with ``arguments`` in the step's directory.

    Example:
        @build/generic {
            command: "gcc"
            arguments: "-O2" "-o" "app" "main.c"
            cwd: "src"
        }
    """

    name = '@build/generic'
    description = 'Use any build system to build your application.'
    required_fields = [
        FieldSpec(
            'command',
            'The path or name of the program (e.g. g++ or /usr/opt/compiler)',
        ),
    ]
    optional_fields = [
        FieldSpec(
            'arguments',
            'The arguments to be passed to the command',
            type='list',
        ),
    ]

    def validate(self, context: StepContext) -> bool:
        return check_fields(self, context) is None

    def initiate(self, context: StepContext) -> None:
        """Run the build program.

        Raises:
            StepFailedError: If the program cannot be started or exits with
                a non-zero status
        """
        command = [context.options['command']]
        command.extend(str(arg) for arg in as_list(context.options.get('arguments', [])))

        with context.stage(f"Running {' '.join(command)}"):
            try:
                result = subprocess.run(
                    command,
                    cwd=context.cwd,
                    capture_output=True,
                    text=True,
                )
            except OSError as e:
                raise StepFailedError(self.name, f"Could not run {command[0]}: {e}")

        for line in (result.stdout + result.stderr).splitlines():
            context.logger.info(line)

        if result.returncode != 0:
            raise StepFailedError(
                self.name,
                f"Error during build ({command[0]} exited with {result.returncode})",
            )
