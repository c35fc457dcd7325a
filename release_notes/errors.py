##########################################################################################
#
# Module: release_notes/errors.py
#
# Description: Exceptions for the release notes pipeline and translation of
#              Jira transport failures into a single user-facing error.
#
# Author: Cornelis Networks
#
##########################################################################################

import logging
import os
import sys

from jira.exceptions import JIRAError

# Logging config - follows jira_utils.py pattern
log = logging.getLogger(os.path.basename(sys.argv[0]))


# ****************************************************************************************
# Exceptions
# ****************************************************************************************

class Error(Exception):
    '''
    Base class for exceptions in this package.
    '''
    pass


class ValidationError(Error):
    '''
    Exception raised when a required setting is missing or a filter value is invalid.
    '''
    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class JiraConnectionError(Error):
    '''
    Exception raised when the Jira client cannot be created.
    '''
    def __init__(self, message):
        self.message = f'Jira connection failed: {message}'
        super().__init__(self.message)


class TransportError(Error):
    '''
    Exception raised when a call to Jira fails.

    Attributes:
        code: HTTP status code, or 0 when no response was received.
        reason: Short message describing the failure.
        body: Raw response body when it was JSON, otherwise None.
        message: Combined user-facing message.
    '''
    def __init__(self, message, code=0, reason='', body=None):
        self.message = message
        self.code = code
        self.reason = reason
        self.body = body
        super().__init__(self.message)


# ****************************************************************************************
# Functions
# ****************************************************************************************

def _is_json_response(response):
    if response is None:
        return False
    headers = getattr(response, 'headers', None) or {}
    content_type = headers.get('Content-Type', '') or ''
    return 'application/json' in content_type.lower()


def translate_jira_error(exc):
    '''
    Map a JIRAError (or a bare requests exception) to a TransportError.

    str(JIRAError) carries request headers and the raw response text, so it is
    never used for the message.

    Input:
        exc: Exception raised by the jira client or by requests.

    Output:
        TransportError whose message is "<prefix> <code>, <reason>[, <body>]".
        The body is only included when the response is JSON.
    '''
    response = getattr(exc, 'response', None)

    code = getattr(exc, 'status_code', None)
    if code is None:
        code = getattr(response, 'status_code', None) or 0

    body = None
    if _is_json_response(response):
        body = response.text

    if isinstance(exc, JIRAError):
        prefix = f'JiraError HTTP {code}'
        # JIRAError.text holds the raw body when Jira did not answer with JSON
        if response is None or body is not None:
            reason = exc.text or getattr(response, 'reason', None) or 'Jira request failed'
        else:
            reason = getattr(response, 'reason', None) or 'Jira request failed'
    else:
        prefix = type(exc).__name__
        reason = getattr(response, 'reason', None) or str(exc)

    fields = [str(code), reason]
    if body is not None:
        fields.append(body)

    message = f'{prefix} {", ".join(fields)}'
    log.debug(f'Translated {type(exc).__name__} -> code={code}, reason={reason}, body={body}')
    return TransportError(message, code=code, reason=reason, body=body)
