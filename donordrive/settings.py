"""
Django settings for the donordrive project.

Only configuration, logging and the management-command/test tooling are
used; the project serves no HTTP routes and keeps no database tables.
Values can be overridden through environment variables (or a local .env
file, loaded by manage.py).
"""

import os


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name, default):
    value = os.environ.get(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split('|') if item.strip()]


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'donordrive-dev-only-secret-key')

DEBUG = _env_bool('DJANGO_DEBUG', False)

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'donors',
]

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Internationalization / time
# "Today" for donor eligibility is the local date of TIME_ZONE.

LANGUAGE_CODE = 'en-us'

TIME_ZONE = os.environ.get('DJANGO_TIME_ZONE', 'Asia/Karachi')

USE_I18N = True

USE_TZ = True


# Logging

LOG_LEVEL = os.environ.get('DONORDRIVE_LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'donors': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}


# Donor tooling

DONOR_EXPORT_FILENAME_PREFIX = os.environ.get('DONOR_EXPORT_FILENAME_PREFIX', 'blood_donors')

# Pipe-separated overrides, e.g. DONOR_DEMO_CITIES="Karachi|Hyderabad"
DONOR_DEMO_UNIVERSITIES = _env_list('DONOR_DEMO_UNIVERSITIES', [
    'University of Karachi',
    'NED University of Engineering & Technology',
    'Sindh University',
    'Dow University of Health Sciences',
    'Aga Khan University',
    'Institute of Business Administration (IBA)',
    'Hamdard University',
    'Sir Syed University of Engineering & Technology',
    'Jinnah University for Women',
    'Federal Urdu University',
])

DONOR_DEMO_CITIES = _env_list('DONOR_DEMO_CITIES', [
    'Karachi',
    'Hyderabad',
    'Lahore',
    'Islamabad',
    'Sukkur',
])
