"""
Domain logic netcfg.

Чистая логика без SSH/SNMP:
- matching: выбор команд для устройства по правилам
"""

from .matching import MatchOutcome, NO_MATCH, rule_matches, select_commands

__all__ = [
    "MatchOutcome",
    "NO_MATCH",
    "rule_matches",
    "select_commands",
]
