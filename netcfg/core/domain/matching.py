"""
Domain logic выбора команд для устройства.

Правила проверяются в порядке объявления, побеждает ПОСЛЕДНЕЕ
подходящее правило. Generic правило (без селекторов) подходит
любому устройству и участвует в этом порядке наравне с остальными:
объявленное после специфичного правила - перекрывает его,
если специфичные правила не подошли - работает как fallback.

Не зависит от SSH/SNMP - работает с Rule и Identity.

Пример использования:
    outcome = select_commands(rules, identity)
    if outcome.matched:
        runner.run(connection, outcome.commands)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..models import Identity, Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchOutcome:
    """
    Результат выбора команд.

    Attributes:
        commands: Команды победившего правила
        rule: Победившее правило (None если ничего не подошло)
    """
    commands: Tuple[str, ...] = ()
    rule: Optional[Rule] = None

    @property
    def matched(self) -> bool:
        return self.rule is not None

    @property
    def generic(self) -> bool:
        """Победило generic правило."""
        return self.rule is not None and self.rule.is_generic


NO_MATCH = MatchOutcome()


def _normalize(value: str) -> str:
    return value.strip().lower()


def _field_matches(expected: str, actual: str) -> bool:
    # Пустой селектор не ограничивает
    if not expected:
        return True
    return _normalize(expected) == _normalize(actual)


def rule_matches(rule: Rule, identity: Identity) -> bool:
    """
    Проверяет одиночное (развёрнутое по моделям) правило.

    Args:
        rule: Правило с не более чем одной моделью
        identity: Идентификация устройства

    Returns:
        bool: True если все заполненные поля правила совпали
    """
    return (
        _field_matches(rule.address, identity.address)
        and _field_matches(rule.hostname, identity.hostname)
        and _field_matches(rule.vendor, identity.vendor)
        and _field_matches(rule.os, identity.os)
        and _field_matches(rule.model, identity.model)
        and _field_matches(rule.version, identity.version)
    )


def select_commands(rules: Sequence[Rule], identity: Identity) -> MatchOutcome:
    """
    Выбирает команды для устройства.

    Args:
        rules: Правила в порядке объявления
        identity: Идентификация устройства

    Returns:
        MatchOutcome: Команды последнего подходящего правила
    """
    outcome = NO_MATCH
    for rule in rules:
        for candidate in rule.expand():
            if rule_matches(candidate, identity):
                outcome = MatchOutcome(commands=candidate.commands, rule=candidate)

    if outcome.matched:
        logger.debug(
            f"{identity.address or '?'}: выбрано правило [{outcome.rule.selector()}], "
            f"команд: {len(outcome.commands)}"
        )
    else:
        logger.debug(f"{identity.address or '?'}: ни одно правило не подошло")
    return outcome
