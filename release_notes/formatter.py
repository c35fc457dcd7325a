##########################################################################################
#
# Module: release_notes/formatter.py
#
# Description: Renders fetched issues as plain text or HTML release notes.
#
# Author: Cornelis Networks
#
##########################################################################################

import html
import logging
import os
import sys
from enum import Enum
from typing import Any, List, Sequence, Union

# Logging config - follows jira_utils.py pattern
log = logging.getLogger(os.path.basename(sys.argv[0]))


class OutputFormat(Enum):
    '''Release notes output format.'''
    PLAIN = 'plain'
    HTML = 'html'
    RAW = 'raw'

    @classmethod
    def parse(cls, value) -> 'OutputFormat':
        '''Map "plain" and "html" (any case) to their format; anything else is RAW.'''
        if isinstance(value, cls):
            return value
        name = str(value or '').strip().lower()
        if name == 'plain':
            return cls.PLAIN
        if name == 'html':
            return cls.HTML
        return cls.RAW


def _get(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def issue_key(issue: Any) -> str:
    '''Key of a jira Issue resource or issue dict, or '' if missing.'''
    return str(_get(issue, 'key') or '')


def issue_summary(issue: Any) -> str:
    '''
    Summary (title) of an issue, or '' if missing.

    Accepts jira Issue resources (issue.fields.summary), REST JSON dicts
    ({'fields': {'summary': ...}}) and flat dicts ({'summary'} or {'title'}).
    '''
    summary = _get(_get(issue, 'fields'), 'summary')
    if summary is None:
        summary = _get(issue, 'summary')
    if summary is None:
        summary = _get(issue, 'title')
    return str(summary or '')


def issue_url(base_url: str, key: str) -> str:
    '''Browse URL for an issue key: <base_url>/browse/<key>.'''
    return f'{(base_url or "").rstrip("/")}/browse/{key}'


def plain_format(issues: Sequence[Any]) -> str:
    '''One "- <summary> (<key>)" line per issue, in fetch order.'''
    return '\n'.join(f'- {issue_summary(issue)} ({issue_key(issue)})' for issue in issues)


def html_format(issues: Sequence[Any], base_url: str) -> str:
    '''
    Unordered HTML list with each summary linked to its issue.

    Input:
        issues: Fetched issues.
        base_url: Jira site URL.

    Output:
        HTML string. Summaries and links are escaped.
    '''
    items = []
    for issue in issues:
        href = html.escape(issue_url(base_url, issue_key(issue)), quote=True)
        title = html.escape(issue_summary(issue), quote=False)
        items.append(f'<li><a href="{href}">{title}</a></li>')
    return f'<ul>{"".join(items)}</ul>'


def format_issues(issues: Sequence[Any], fmt: Union[str, OutputFormat] = OutputFormat.PLAIN,
                  base_url: str = '') -> Union[str, List[Any]]:
    '''
    Render issues in the requested format.

    Input:
        issues: Fetched issues.
        fmt: 'plain', 'html', or anything else for the raw list.
        base_url: Jira site URL, used by the HTML format.

    Output:
        String for PLAIN and HTML; the issues themselves for RAW.
    '''
    output_format = OutputFormat.parse(fmt)
    log.debug(f'Entering format_issues(count={len(issues)}, format={output_format.value})')

    if output_format == OutputFormat.PLAIN:
        return plain_format(issues)
    if output_format == OutputFormat.HTML:
        return html_format(issues, base_url)
    return issues
