##########################################################################################
#
# Module: config/settings.py
#
# Description: Release notes settings loaded from the environment (and .env).
#
# Author: Cornelis Networks
#
##########################################################################################

import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from release_notes.errors import ValidationError

# Load environment variables
load_dotenv()

# Logging config - follows jira_utils.py pattern
log = logging.getLogger(os.path.basename(sys.argv[0]))

LOG_FORMAT = '%(asctime)-15s [%(funcName)25s:%(lineno)-5s] %(levelname)-8s %(message)s'


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class Settings:
    '''
    Release notes settings loaded from environment variables.
    '''
    # Jira connection
    jira_url: Optional[str] = None
    jira_username: Optional[str] = None
    jira_password: Optional[str] = None

    # Filter
    project: Optional[str] = None
    version: str = ''
    status: str = ''
    components: str = ''
    in_last_unreleased: bool = False
    in_open_sprint: bool = False
    max_results: str = '50'

    # Output
    format: str = 'plain'

    # Logging
    log_file: str = 'jira_release_notes.log'
    log_level: str = 'DEBUG'

    @classmethod
    def from_env(cls) -> 'Settings':
        '''
        Create settings from environment variables.

        Output:
            Settings instance populated from environment.
        '''
        return cls(
            # Jira
            jira_url=os.getenv('FL_JIRA_SITE'),
            jira_username=os.getenv('FL_JIRA_USERNAME'),
            jira_password=os.getenv('FL_JIRA_PASSWORD'),

            # Filter
            project=os.getenv('FL_JIRA_PROJECT'),
            version=os.getenv('FL_JIRA_PROJECT_VERSION', ''),
            status=os.getenv('FL_JIRA_STATUS', ''),
            components=os.getenv('FL_JIRA_COMPONENTS', ''),
            in_last_unreleased=_env_bool('FL_IN_LAST_UNRELEASED'),
            in_open_sprint=_env_bool('FL_IN_OPEN_SPRINT'),
            max_results=os.getenv('FL_JIRA_RELEASE_NOTES_MAX_RESULTS', '50'),

            # Output
            format=os.getenv('FL_JIRA_RELEASE_NOTES_FORMAT', 'plain'),

            # Logging
            log_file=os.getenv('LOG_FILE', 'jira_release_notes.log'),
            log_level=os.getenv('LOG_LEVEL', 'DEBUG'),
        )

    def validate(self) -> bool:
        '''
        Validate that required settings are present.

        Output:
            True if all required settings are valid.

        Raises:
            ValidationError: If required settings are missing.
        '''
        errors = []

        if not self.jira_url:
            errors.append('No url for Jira given')
        if not self.jira_username:
            errors.append('No username')
        if not self.jira_password:
            errors.append('No password')
        if not self.project:
            errors.append('No Jira project name')

        if errors:
            for error in errors:
                log.error(f'Configuration error: {error}')
            raise ValidationError(f'Configuration errors: {", ".join(errors)}')

        return True

    def to_dict(self) -> Dict[str, Any]:
        '''Convert settings to dictionary (masking sensitive values).'''
        return {
            'jira_url': self.jira_url,
            'jira_username': self.jira_username,
            'jira_password': '***' if self.jira_password else None,
            'project': self.project,
            'version': self.version,
            'status': self.status,
            'components': self.components,
            'in_last_unreleased': self.in_last_unreleased,
            'in_open_sprint': self.in_open_sprint,
            'max_results': self.max_results,
            'format': self.format,
        }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    '''
    Get the global settings instance.

    Output:
        Settings instance (creates from environment if not exists).
    '''
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure_logging(settings: Optional[Settings] = None, console_level: str = 'WARNING') -> None:
    '''
    Configure logging based on settings.

    Input:
        settings: Optional settings instance (uses global if not provided).
        console_level: Level for the stderr handler.
    '''
    settings = settings or get_settings()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper()))

    # File handler
    fh = logging.FileHandler(settings.log_file, mode='w')
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(fh)

    # Console handler for warnings and above
    ch = logging.StreamHandler()
    ch.setLevel(getattr(logging, console_level.upper()))
    ch.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger.addHandler(ch)

    log.info(f'Logging configured: file={settings.log_file}, level={settings.log_level}')
