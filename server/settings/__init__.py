"""Main entry point for Django settings.

Settings are split into components and merged with django-split-settings.
Values that change between deployments are read with python-decouple.
"""

from split_settings.tools import include

include(
    'components/common.py',
    'components/storages.py',
    'components/server.py',
    'components/logging.py',
)
