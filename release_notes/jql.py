##########################################################################################
#
# Module: release_notes/jql.py
#
# Description: Builds the JQL query for a FilterSpec.
#
#              Clause order is fixed: project, fix version, status, component, sprint.
#              Values are quoted but not escaped; names containing quotes or other
#              JQL metacharacters must be avoided by the caller.
#
# Author: Cornelis Networks
#
##########################################################################################

import logging
import os
import sys
from typing import Callable, Iterable, List, Optional

from release_notes.filters import FilterSpec

# Logging config - follows jira_utils.py pattern
log = logging.getLogger(os.path.basename(sys.argv[0]))

UNRELEASED_VERSIONS_CLAUSE = 'fixVersion in unreleasedVersions()'
OPEN_SPRINTS_CLAUSE = 'sprint in openSprints()'

# resolve_versions(project_key) -> iterable of objects (or dicts) with a name
VersionResolver = Callable[[str], Iterable]


def _version_name(version) -> str:
    if isinstance(version, dict):
        return version.get('name', '') or ''
    return getattr(version, 'name', '') or ''


def match_versions(versions: Iterable, regex) -> List[str]:
    '''
    Return the names of versions matching regex, keeping the resolver's order.
    The regex is searched anywhere in the name; anchor it to match a prefix.
    '''
    return [name for name in (_version_name(v) for v in versions) if regex.search(name)]


def _version_clause(spec: FilterSpec, resolve_versions: Optional[VersionResolver]) -> Optional[str]:
    if spec.in_last_unreleased:
        return UNRELEASED_VERSIONS_CLAUSE

    selector = spec.version
    if selector.is_pattern:
        if resolve_versions is None:
            raise TypeError('resolve_versions is required for a version pattern')
        names = match_versions(resolve_versions(spec.project), selector.regex)
        log.debug(f'Versions matching {selector}: {names}')
        if not names:
            log.warning(f'No versions of project "{spec.project}" match {selector}; query will match no issues')
        versions = ', '.join(f"'{name}'" for name in names)
        return f'fixVersion in ({versions})'

    if selector.is_exact and selector.name:
        return f"fixVersion = '{selector.name}'"

    return None


def compile_jql(spec: FilterSpec, resolve_versions: Optional[VersionResolver] = None) -> str:
    '''
    Translate a FilterSpec into a JQL query string.

    Input:
        spec: The filter to compile.
        resolve_versions: Callable returning the project's versions. Only called
            when spec.version is a pattern and in_last_unreleased is not set.

    Output:
        JQL string, e.g.
        "PROJECT = 'ABC' AND fixVersion = '1.0' AND status in (Open, Done)".
    '''
    log.debug(f'Entering compile_jql(spec={spec})')

    clauses = [f"PROJECT = '{spec.project}'"]

    version_clause = _version_clause(spec, resolve_versions)
    if version_clause:
        clauses.append(version_clause)

    if spec.status:
        clauses.append(f'status in ({", ".join(spec.status)})')

    if spec.components:
        components = ', '.join(f'"{c}"' for c in spec.components)
        clauses.append(f'component in ({components})')

    if spec.in_open_sprint:
        clauses.append(OPEN_SPRINTS_CLAUSE)

    jql = ' AND '.join(clauses)
    log.debug(f'JQL query: {jql}')
    return jql
