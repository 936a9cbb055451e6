"""The ``@build/c`` and ``@build/cpp`` modules: compile a source tree.

Every source file below ``sourceDirectory`` is passed to the compiler in one
invocation, producing the executable ``fileName``.

Example:
    @build/c {
        fileName: "app"
        sourceDirectory: "src"
        buildDirectory: "out"
        optimizations: 2
    }
"""

import subprocess
from pathlib import Path
from typing import List, Tuple

from redstart.exceptions import StepFailedError
from .base import FieldSpec, Module, StepContext, check_fields


OPTIMIZATION_LEVELS = ['0', '1', '2', '3', 'fast', 'g', 's']
DEFAULT_OPTIMIZATION = '1'


class CompilerBuild(Module):
    """Shared behaviour of the compiler wrappers.

    Subclasses set ``compiler`` and the ``extensions`` of the files it gets.
    Headers are found by the compiler through the includes and are never
    passed on the command line.
    """

    compiler: str = ''
    extensions: Tuple[str, ...] = ()

    required_fields = [
        FieldSpec('fileName', 'The name of the runnable executable'),
        FieldSpec(
            'sourceDirectory',
            'The directory that houses all your source and header files',
        ),
    ]
    optional_fields = [
        FieldSpec(
            'optimizations',
            'The optimization level (standard: 1)',
            type='scalar',
            choices=OPTIMIZATION_LEVELS,
        ),
        FieldSpec(
            'buildDirectory',
            'The directory, you want to have your executable in',
        ),
    ]

    def validate(self, context: StepContext) -> bool:
        return check_fields(self, context) is None

    def _run(self, args: List[str], cwd: Path) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.compiler] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
        )

    def find_sources(self, directory: Path) -> List[str]:
        """Return the absolute paths of the sources below ``directory``."""
        if not directory.is_dir():
            return []
        return sorted(
            str(path) for path in directory.rglob('*')
            if path.is_file() and path.suffix in self.extensions
        )

    def initiate(self, context: StepContext) -> None:
        """Compile the sources.

        Raises:
            StepFailedError: If the compiler is missing, there is nothing to
                compile or the compiler reports an error
        """
        options = context.options
        level = str(options.get('optimizations', DEFAULT_OPTIMIZATION)).lower()

        with context.stage(f'Checking for {self.compiler}'):
            try:
                found = self._run(['-v'], context.cwd).returncode == 0
            except OSError:
                found = False
            if not found:
                raise StepFailedError(self.name, f'Compiler ({self.compiler}) not found')

        with context.stage('Finding files'):
            files = self.find_sources(context.cwd / options['sourceDirectory'])
            if not files:
                raise StepFailedError(self.name, 'No files found')
            context.logger.debug("found %d files", len(files))

        build_dir = context.cwd
        if 'buildDirectory' in options:
            build_dir = context.cwd / options['buildDirectory']
            build_dir.mkdir(parents=True, exist_ok=True)

        with context.stage('Compiling'):
            result = self._run(
                [f'-O{level}', '-o', options['fileName']] + files, build_dir
            )

        if result.returncode != 0:
            for line in (result.stdout + result.stderr).splitlines():
                context.logger.error(line)
            raise StepFailedError(self.name, 'Compilation failed')


class CBuild(CompilerBuild):
    name = '@build/c'
    description = 'Compile your c-program'
    compiler = 'gcc'
    extensions = ('.c',)


class CppBuild(CompilerBuild):
    name = '@build/cpp'
    description = 'Compile your cpp-program'
    compiler = 'g++'
    extensions = ('.c', '.cpp')
