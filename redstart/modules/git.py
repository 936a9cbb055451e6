"""The ``@git/fetch`` module: fetch a remote repository into the step's directory."""

import subprocess
from typing import List

from redstart.exceptions import StepFailedError
from .base import FieldSpec, Module, StepContext, check_fields


class GitFetch(Module):
    name = '@git/fetch'
    description = 'Fetch a remote repository'
    required_fields = [
        FieldSpec(
            'repository',
            'The URL of the git repository\nUsually ends in .git',
        ),
    ]
    optional_fields = [
        FieldSpec(
            'branch',
            'The branch to pull from, required when there are multiple branches',
        ),
    ]

    def validate(self, context: StepContext) -> bool:
        return check_fields(self, context) is None

    def _git(self, context: StepContext, args: List[str]) -> subprocess.CompletedProcess:
        context.logger.debug("git %s", ' '.join(args))
        try:
            return subprocess.run(
                ['git'] + args,
                cwd=context.cwd,
                capture_output=True,
                text=True,
            )
        except OSError:
            raise StepFailedError(self.name, 'Git is not installed')

    def initiate(self, context: StepContext) -> None:
        repository = context.options['repository']
        branch = context.options.get('branch')

        with context.stage('Checking git'):
            self._git(context, ['--version'])

        if self._git(context, ['remote', 'get-url', 'origin']).returncode != 0:
            with context.stage('Initializing repository'):
                if self._git(context, ['init']).returncode != 0:
                    raise StepFailedError(self.name, "Couldn't initialize git repository")
                added = self._git(context, ['remote', 'add', 'origin', repository])
                if added.returncode != 0:
                    raise StepFailedError(
                        self.name, f"Couldn't add remote origin {repository}"
                    )

        with context.stage('Fetching repository'):
            if self._git(context, ['fetch', 'origin']).returncode != 0:
                raise StepFailedError(self.name, "Couldn't fetch remote repository")
            if branch:
                if self._git(context, ['checkout', branch]).returncode != 0:
                    raise StepFailedError(self.name, f"Branch {branch} not found")
                pull = self._git(context, ['pull', 'origin', branch])
            else:
                pull = self._git(context, ['pull', 'origin'])
            if pull.returncode != 0:
                raise StepFailedError(self.name, "Couldn't fetch remote repository")

        context.logger.info('Successfully fetched remote repository')
