from __future__ import annotations

from flagalias.constants import FLAG_KEY_PLACEHOLDER
from flagalias.config.rules import rule_from_mapping, rules_from_config, validate_rule
from flagalias.config.settings import ResolverConfig
from flagalias.core import *  # noqa: F401,F403
from flagalias.core import __all__ as _core_all
from flagalias.core.report import ResolutionReport
from flagalias.logging.helpers import get_logger, setup_base_logger
from flagalias.runtime.resolver import AliasResolver, generate_aliases

__version__ = '0.1.0'

__all__ = [
    'FLAG_KEY_PLACEHOLDER',
    'AliasResolver',
    'ResolutionReport',
    'ResolverConfig',
    'generate_aliases',
    'get_logger',
    'rule_from_mapping',
    'rules_from_config',
    'setup_base_logger',
    'validate_rule',
    *_core_all,
]
