#!/usr/bin/env python3
##########################################################################################
#
# Script name: jira_release_notes.py
#
# Description: Fetch Jira issues for a release and print them as release notes.
#
# Author: Cornelis Networks
#
# Credentials:
#   Set the following environment variables (or put them in a .env file):
#      export FL_JIRA_SITE="https://yourcompany.atlassian.net"
#      export FL_JIRA_USERNAME="your.email@yourcompany.com"
#      export FL_JIRA_PASSWORD="your_api_token_here"
#
#   NEVER commit credentials to version control.
#
##########################################################################################

import argparse
import json
import logging
import os
import re
import sys

from config.settings import Settings, configure_logging
from release_notes import fetch_release_issues
from release_notes.errors import Error, JiraConnectionError, TransportError, ValidationError
from release_notes.fetcher import JiraIssueFetcher, connect_to_jira
from release_notes.filters import FilterSpec, VersionSelector, split_list
from release_notes.formatter import format_issues

# ****************************************************************************************
# Global data and configuration
# ****************************************************************************************

# Logging config
log = logging.getLogger(os.path.basename(sys.argv[0]))

# Output control - set by handle_args()
_quiet_mode = False


def output(message=''):
    '''
    Print user-facing output, respecting quiet mode.

    Input:
        message: String to output (default empty for blank line).
    '''
    if message:
        log.debug(f'OUTPUT: {message}')
    if not _quiet_mode:
        print(message)


def _raw_issue(issue):
    return getattr(issue, 'raw', issue)


def handle_args(argv=None, settings=None):
    '''
    Parse CLI arguments. Defaults come from the FL_* environment variables.

    Input:
        argv: Argument list (defaults to sys.argv[1:]).
        settings: Settings providing defaults (defaults to Settings.from_env()).

    Output:
        argparse.Namespace containing parsed arguments.
    '''
    global _quiet_mode
    log.debug('Entering handle_args()')

    settings = settings or Settings.from_env()

    parser = argparse.ArgumentParser(
        description='Jira release notes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s --project ABC --version 1.0                  Plain text notes for ABC 1.0
  %(prog)s --project ABC --version-regex "^1\\."        Notes for every 1.x version
  %(prog)s --project ABC --in-last-unreleased --format html
                                                        HTML notes for unreleased versions
  %(prog)s --project ABC --status "Done, Closed" --components UI API --in-open-sprint
                                                        Done/Closed UI and API issues in open sprints

Note: a --version-regex that matches no versions produces a query that matches
no issues; it is not reported as an error.
''')

    jira_group = parser.add_argument_group('Jira connection')
    jira_group.add_argument('--url', default=settings.jira_url,
                            help='URL for Jira instance [FL_JIRA_SITE]')
    jira_group.add_argument('--username', default=settings.jira_username,
                            help='Username for Jira instance [FL_JIRA_USERNAME]')
    jira_group.add_argument('--password', default=settings.jira_password,
                            help='Password or api token for Jira [FL_JIRA_PASSWORD]')

    filter_group = parser.add_argument_group('Filter')
    filter_group.add_argument('--project', default=settings.project,
                              help='Jira project key [FL_JIRA_PROJECT]')
    version_group = filter_group.add_mutually_exclusive_group()
    version_group.add_argument('--version', default=settings.version,
                               help='Jira project version [FL_JIRA_PROJECT_VERSION]')
    version_group.add_argument('--version-regex', default=None,
                               help='Regular expression selecting project versions by name')
    filter_group.add_argument('--status', default=settings.status,
                              help='Jira issue statuses, comma separated [FL_JIRA_STATUS]')
    filter_group.add_argument('--components', nargs='*', default=settings.components,
                              help='Jira issue components, space or comma separated [FL_JIRA_COMPONENTS]')
    filter_group.add_argument('--in-last-unreleased', action=argparse.BooleanOptionalAction, default=settings.in_last_unreleased,
                              help='Search fix versions among unreleased versions; --version is ignored [FL_IN_LAST_UNRELEASED]')
    filter_group.add_argument('--in-open-sprint', action=argparse.BooleanOptionalAction, default=settings.in_open_sprint,
                              help='Only issues in a currently open sprint [FL_IN_OPEN_SPRINT]')
    filter_group.add_argument('--max-results', default=settings.max_results,
                              help='Maximum number of issues [FL_JIRA_RELEASE_NOTES_MAX_RESULTS]')

    output_group = parser.add_argument_group('Output')
    output_group.add_argument('--format', default=settings.format,
                              help='plain, html, or anything else for raw JSON [FL_JIRA_RELEASE_NOTES_FORMAT]')
    output_group.add_argument('--output', dest='output_file', default=None,
                              help='Write release notes to this file')
    output_group.add_argument('--show-jql', action='store_true',
                              help='Print the JQL query that was run')
    output_group.add_argument('-q', '--quiet', action='store_true',
                              help='Do not print release notes to stdout')

    args = parser.parse_args(argv)
    _quiet_mode = args.quiet

    log.debug(f'Parsed arguments: project={args.project}, version={args.version}, '
              f'version_regex={args.version_regex}, status={args.status}, components={args.components}, '
              f'format={args.format}, max_results={args.max_results}')
    return args


def build_filter(args):
    '''
    Build the FilterSpec for parsed arguments.

    Raises:
        ValidationError: If a value is invalid (including a bad regex).
    '''
    if args.version_regex:
        try:
            version = VersionSelector.pattern(args.version_regex)
        except re.error as e:
            raise ValidationError(f'Invalid version regex "{args.version_regex}": {e}')
    else:
        version = args.version

    # "--components UI,API" and "--components UI API" name the same two components
    components = args.components
    if components and not isinstance(components, str):
        components = [name for item in components for name in split_list(item)]

    return FilterSpec.create(
        project=args.project,
        version=version,
        status=args.status,
        components=components,
        in_last_unreleased=args.in_last_unreleased,
        in_open_sprint=args.in_open_sprint,
        max_results=args.max_results,
    )


def render(notes):
    '''Turn pipeline output into printable text. Raw issue lists become JSON.'''
    if isinstance(notes, str):
        return notes
    return json.dumps([_raw_issue(issue) for issue in notes], indent=2, default=str)


def main(argv=None):
    '''
    Entrypoint that wires together dependencies and launches the CLI.

    Sequence:
        1. Parse command line arguments
        2. Validate settings and build the filter
        3. Connect to Jira and fetch issues
        4. Print (or write) the release notes

    Output:
        Exit code 0 on success, 1 on failure.
    '''
    settings = Settings.from_env()
    configure_logging(settings)
    args = handle_args(argv, settings)
    log.debug('Entering main()')

    try:
        settings.jira_url = args.url
        settings.jira_username = args.username
        settings.jira_password = args.password
        settings.project = args.project
        settings.validate()
        spec = build_filter(args)

        jira = connect_to_jira(args.url, args.username, args.password)
        fetcher = JiraIssueFetcher(jira)

        jql, issues = fetch_release_issues(spec, fetcher)
        text = render(format_issues(issues, args.format, args.url))

        if args.output_file:
            with open(args.output_file, 'w', encoding='utf-8') as f:
                f.write(text)
            log.info(f'Wrote release notes to: {args.output_file}')

        output(text)

        if args.show_jql:
            output('')
            output('=' * 80)
            output('Equivalent JQL Query:')
            output('=' * 80)
            output(jql)
            output('=' * 80)

    except ValidationError as e:
        log.error(e.message)
        output('')
        output('ERROR: ' + e.message)
        output('')
        sys.exit(1)
    except (JiraConnectionError, TransportError) as e:
        log.error(e.message)
        output('')
        output('ERROR: ' + e.message)
        output('')
        sys.exit(1)
    except Error as e:
        log.error(f'Unexpected error: {e}')
        output(f'ERROR: {e}')
        sys.exit(1)

    log.info('Operation complete.')
    return 0


if __name__ == '__main__':
    sys.exit(main())
