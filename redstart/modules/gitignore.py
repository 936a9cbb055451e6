"""The ``@git/gitignore`` module: write a ``.gitignore`` from a preset."""

from typing import Dict, List

from .base import FieldSpec, Module, StepContext, as_list, check_fields


JAVASCRIPT = [
    'node_modules/',
    'npm-debug.log*',
    'yarn-debug.log*',
    'yarn-error.log*',
    'lerna-debug.log*',
    '.pnpm-debug-lock*',
    'report.[0-9]*.[0-9]*.[0-9]*.[0-9]*.json',
    'pids',
    '*.pid',
    '*.seed',
    '*.pid.lock',
    'build/',
    'jspm_packages/',
    'web_modules/',
    '*.tsbuildinfo',
    '.npm',
    '.eslintcache',
    '.node_repl_history',
    '*.tgz',
    '.env',
    '.env.development.local',
    '.env.test.local',
    '.env.production.local',
    '.env.local',
    '.next',
    'out',
    '.nuxt',
    'dist',
    '.cache/',
    '.vuepress/dist',
    '.temp',
    '.cache',
    '.serverless/',
    '.fusebox/',
]

TYPESCRIPT = JAVASCRIPT + ['*.js']

PRESETS: Dict[str, List[str]] = {
    '': [],
    'javascript': JAVASCRIPT,
    'js': JAVASCRIPT,
    'typescript': TYPESCRIPT,
    'ts': TYPESCRIPT,
}

FILENAME = '.gitignore'


class GitIgnore(Module):
    """Create ``.gitignore`` in the step's directory.

    An existing file is left untouched.
    """

    name = '@git/gitignore'
    description = 'Configure the .gitignore file'
    required_fields = [
        FieldSpec(
            'language',
            'The language you intend to write your program in. It selects '
            'the preset for the language. Leave empty to use none.',
            choices=list(PRESETS),
        ),
    ]
    optional_fields = [
        FieldSpec(
            'additional',
            'Additional .gitignore entries\n'
            'Example:\nadditional: "*.mjs" ".rscache"',
            type='list',
        ),
    ]

    def validate(self, context: StepContext) -> bool:
        return check_fields(self, context) is None

    def initiate(self, context: StepContext) -> None:
        path = context.cwd / FILENAME
        if path.exists():
            context.logger.warning("%s already found. aborting", FILENAME)
            return

        entries = list(PRESETS[context.options['language']])
        for value in as_list(context.options.get('additional', [])):
            entry = str(value).strip()
            if entry and entry not in entries:
                entries.append(entry)

        with context.stage(f'Writing {FILENAME}'):
            path.write_text('\n'.join(entries))
