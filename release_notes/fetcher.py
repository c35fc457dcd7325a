##########################################################################################
#
# Module: release_notes/fetcher.py
#
# Description: Boundary to the Jira server. Runs one JQL search and lists project
#              versions through the jira client library.
#
# Author: Cornelis Networks
#
##########################################################################################

import logging
import os
import sys
from typing import Any, List, Protocol, runtime_checkable

import requests
from jira import JIRA
from jira.exceptions import JIRAError

from release_notes.errors import JiraConnectionError, translate_jira_error

# Logging config - follows jira_utils.py pattern
log = logging.getLogger(os.path.basename(sys.argv[0]))


@runtime_checkable
class IssueFetcher(Protocol):
    '''Capability used by the pipeline to reach Jira.'''

    def fetch(self, jql: str, max_results: int) -> List[Any]:
        ...

    def project_versions(self, project_key: str) -> List[Any]:
        ...


class JiraIssueFetcher:
    '''
    IssueFetcher backed by a jira.JIRA client.

    Retries, pagination and authentication are left to the client. Each call is
    made exactly once; failures are raised as TransportError.
    '''

    def __init__(self, jira: JIRA):
        self.jira = jira

    def fetch(self, jql: str, max_results: int) -> List[Any]:
        '''
        Run a JQL search.

        Input:
            jql: Query string.
            max_results: Maximum number of issues to return.

        Output:
            List of jira Issue resources.

        Raises:
            TransportError: If the search fails.
        '''
        log.debug(f'Entering fetch(jql={jql}, max_results={max_results})')
        try:
            issues = self.jira.search_issues(jql, maxResults=max_results)
        except (JIRAError, requests.exceptions.RequestException) as e:
            log.error(f'Failed to run JQL query: {e}')
            raise translate_jira_error(e) from e
        log.debug(f'Retrieved {len(issues)} issues')
        return list(issues)

    def project_versions(self, project_key: str) -> List[Any]:
        '''
        List the versions (releases) of a project.

        Raises:
            TransportError: If the request fails.
        '''
        log.debug(f'Entering project_versions(project_key={project_key})')
        try:
            versions = self.jira.project_versions(project_key)
        except (JIRAError, requests.exceptions.RequestException) as e:
            log.error(f'Failed to get versions: {e}')
            raise translate_jira_error(e) from e
        log.debug(f'Found {len(versions)} versions')
        return list(versions)


def connect_to_jira(url: str, username: str, password: str) -> JIRA:
    '''
    Establish a connection to Jira with basic authentication.

    Input:
        url: Jira site URL.
        username: User name or email.
        password: Password or API token.

    Output:
        JIRA client.

    Raises:
        JiraConnectionError: If the client cannot be created.
    '''
    log.debug('Entering connect_to_jira()')
    log.info(f'Connecting to Jira at {url}...')
    try:
        jira = JIRA(server=url, basic_auth=(username, password))
    except (JIRAError, requests.exceptions.RequestException) as e:
        raise JiraConnectionError(str(e))
    log.info('Successfully connected to Jira')
    return jira
