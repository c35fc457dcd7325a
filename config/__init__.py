##########################################################################################
#
# Module: config
#
# Description: Configuration management for Jira release notes.
#
# Author: Cornelis Networks
#
##########################################################################################

from config.settings import Settings, configure_logging, get_settings

__all__ = [
    'Settings',
    'configure_logging',
    'get_settings',
]
