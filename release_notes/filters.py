##########################################################################################
#
# Module: release_notes/filters.py
#
# Description: Immutable description of the issues to collect for a release.
#
# Author: Cornelis Networks
#
##########################################################################################

import logging
import os
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional, Tuple, Union

from release_notes.errors import ValidationError

# Logging config - follows jira_utils.py pattern
log = logging.getLogger(os.path.basename(sys.argv[0]))

DEFAULT_MAX_RESULTS = 50


class VersionKind(Enum):
    '''Which form of version filter was requested.'''
    NONE = 'none'
    EXACT = 'exact'
    PATTERN = 'pattern'


@dataclass(frozen=True)
class VersionSelector:
    '''
    Fix version filter: nothing, an exact version name, or a regular expression
    matched against the project's version names.

    Attributes:
        kind: The selector kind.
        name: Version name (EXACT only).
        regex: Compiled pattern (PATTERN only).
    '''
    kind: VersionKind = VersionKind.NONE
    name: str = ''
    regex: Optional['re.Pattern'] = None

    @classmethod
    def none(cls) -> 'VersionSelector':
        return cls()

    @classmethod
    def exact(cls, name: str) -> 'VersionSelector':
        if not name:
            return cls()
        return cls(kind=VersionKind.EXACT, name=name)

    @classmethod
    def pattern(cls, regex: Union[str, 're.Pattern']) -> 'VersionSelector':
        if isinstance(regex, str):
            regex = re.compile(regex)
        return cls(kind=VersionKind.PATTERN, regex=regex)

    @property
    def is_none(self) -> bool:
        return self.kind == VersionKind.NONE

    @property
    def is_exact(self) -> bool:
        return self.kind == VersionKind.EXACT

    @property
    def is_pattern(self) -> bool:
        return self.kind == VersionKind.PATTERN

    def __str__(self) -> str:
        if self.is_pattern:
            return f'/{self.regex.pattern}/'
        return self.name


def version_selector_from(value: Any) -> VersionSelector:
    '''
    Build a VersionSelector from a loosely typed version value.

    Input:
        value: None, a version name string, a compiled regex, or a VersionSelector.

    Output:
        VersionSelector. An empty string selects no version.

    Raises:
        ValidationError: If the value is of any other type.
    '''
    if value is None:
        return VersionSelector.none()
    if isinstance(value, VersionSelector):
        return value
    if isinstance(value, re.Pattern):
        return VersionSelector.pattern(value)
    if isinstance(value, str):
        return VersionSelector.exact(value)
    raise ValidationError(
        f"'version' value must be a String or Regexp! Found {type(value).__name__} instead.")


def split_list(value: Union[None, str, Iterable[str]]) -> Tuple[str, ...]:
    '''
    Normalize a comma-separated string or a list of strings into a tuple,
    dropping blanks and surrounding whitespace.
    '''
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(',')
    return tuple(item.strip() for item in value if item and item.strip())


@dataclass(frozen=True)
class FilterSpec:
    '''
    The issue filter for one release notes run.

    Attributes:
        project: Jira project key. Always required.
        version: Fix version selector. Ignored when in_last_unreleased is set.
        status: Status names, in order.
        components: Component names, in order.
        in_last_unreleased: Select issues fixed in any unreleased version.
        in_open_sprint: Restrict to issues in a currently open sprint.
        max_results: Maximum number of issues to fetch.
    '''
    project: str
    version: VersionSelector = field(default_factory=VersionSelector.none)
    status: Tuple[str, ...] = ()
    components: Tuple[str, ...] = ()
    in_last_unreleased: bool = False
    in_open_sprint: bool = False
    max_results: int = DEFAULT_MAX_RESULTS

    @classmethod
    def create(cls, project, version=None, status=None, components=None,
               in_last_unreleased=False, in_open_sprint=False,
               max_results=DEFAULT_MAX_RESULTS) -> 'FilterSpec':
        '''
        Validate and normalize raw filter values.

        Input:
            project: Jira project key.
            version: None, version name, compiled regex or VersionSelector.
            status: Comma-separated string or list of status names.
            components: Comma-separated string or list of component names.
            in_last_unreleased: Use the project's unreleased versions.
            in_open_sprint: Only issues in open sprints.
            max_results: Positive integer (or its string form).

        Output:
            FilterSpec instance.

        Raises:
            ValidationError: If project is missing, version has an unsupported
                type, or max_results is not a positive integer.
        '''
        log.debug(f'Entering FilterSpec.create(project={project}, version={version}, status={status}, '
                  f'components={components}, in_last_unreleased={in_last_unreleased}, '
                  f'in_open_sprint={in_open_sprint}, max_results={max_results})')

        if not project or not str(project).strip():
            raise ValidationError('No Jira project name')

        try:
            max_results = int(max_results)
        except (TypeError, ValueError):
            raise ValidationError(f'Maximum number of issues must be an integer, got "{max_results}"')
        if max_results <= 0:
            raise ValidationError(f'Maximum number of issues must be positive, got {max_results}')

        return cls(
            project=str(project).strip(),
            version=version_selector_from(version),
            status=split_list(status),
            components=split_list(components),
            in_last_unreleased=bool(in_last_unreleased),
            in_open_sprint=bool(in_open_sprint),
            max_results=max_results,
        )
