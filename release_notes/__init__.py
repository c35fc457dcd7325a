##########################################################################################
#
# Module: release_notes
#
# Description: Jira release notes: filter, JQL compilation, fetch and formatting.
#
# Author: Cornelis Networks
#
##########################################################################################

import logging
import os
import sys

from release_notes.errors import Error, JiraConnectionError, TransportError, ValidationError
from release_notes.fetcher import IssueFetcher
from release_notes.filters import FilterSpec, VersionSelector, version_selector_from
from release_notes.formatter import OutputFormat, format_issues
from release_notes.jql import compile_jql

# Logging config - follows jira_utils.py pattern
log = logging.getLogger(os.path.basename(sys.argv[0]))


def fetch_release_issues(spec: FilterSpec, fetcher: IssueFetcher):
    '''
    Compile the JQL for spec and run it once.

    Input:
        spec: FilterSpec describing the issues.
        fetcher: Object with fetch(jql, max_results) and project_versions(key).

    Output:
        Tuple of (jql, issues).

    Raises:
        TransportError: If fetching fails. Nothing is retried.
    '''
    log.debug(f'Entering fetch_release_issues(spec={spec})')
    log.info(f"Fetch issues from JIRA project '{spec.project}', version '{spec.version}'")

    jql = compile_jql(spec, fetcher.project_versions)
    log.info(f"jql '{jql}'")

    issues = fetcher.fetch(jql, spec.max_results)
    log.info(f"{len(issues)} issues from JIRA project '{spec.project}', version '{spec.version}', "
             f"status '{', '.join(spec.status)}', components '{', '.join(spec.components)}'")
    return jql, issues


def get_release_notes(spec: FilterSpec, fetcher: IssueFetcher, fmt='plain', base_url=''):
    '''
    Fetch the issues selected by spec and render them as release notes.

    Input:
        spec: FilterSpec describing the issues.
        fetcher: Object with fetch(jql, max_results) and project_versions(key).
        fmt: 'plain', 'html', or anything else for the raw issue list.
        base_url: Jira site URL used for issue links.

    Output:
        Formatted string, or the list of issues for the raw format.
    '''
    _, issues = fetch_release_issues(spec, fetcher)
    return format_issues(issues, fmt, base_url)


__all__ = [
    'Error',
    'FilterSpec',
    'IssueFetcher',
    'JiraConnectionError',
    'OutputFormat',
    'TransportError',
    'ValidationError',
    'VersionSelector',
    'compile_jql',
    'fetch_release_issues',
    'format_issues',
    'get_release_notes',
    'version_selector_from',
]
