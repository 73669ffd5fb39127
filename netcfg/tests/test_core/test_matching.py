"""
Tests for select_commands.

Проверяет выбор команд:
- Совпадение без учёта регистра и пробелов по краям
- Незаполненные поля правила не ограничивают
- Разворачивание правила по моделям
- Последнее подходящее правило побеждает
- Generic правило как fallback
"""

import pytest

from netcfg.core.domain import NO_MATCH, rule_matches, select_commands
from netcfg.core.models import Identity, Rule


@pytest.fixture
def c2960s():
    return Identity(
        address="10.0.0.1",
        hostname="sw1.example.net",
        vendor="CISCO",
        os="IOS",
        model="C2960S",
        version="C2960S-UNIVERSALK9-M Version 15.0(2)SE10a RELEASE SOFTWARE (fc3)",
    )


@pytest.mark.unit
class TestRuleMatches:
    """Проверка одного правила."""

    def test_case_insensitive(self, c2960s):
        """Регистр не важен."""
        rule = Rule(vendor="cisco", os="ios", models=("c2960s",), commands=("x",))
        assert rule_matches(rule, c2960s)

    def test_surrounding_whitespace_ignored(self, c2960s):
        """Пробелы по краям игнорируются с обеих сторон."""
        rule = Rule(vendor="  Cisco ", models=(" C2960S",), commands=("x",))
        identity = Identity(vendor="CISCO ", model="c2960s")
        assert rule_matches(rule, identity)
        assert rule_matches(rule, c2960s)

    def test_unset_fields_are_wildcards(self, c2960s):
        """Незаполненные поля не ограничивают."""
        assert rule_matches(Rule(vendor="cisco", commands=("x",)), c2960s)
        assert rule_matches(Rule(commands=("x",)), c2960s)

    def test_single_mismatch_fails(self, c2960s):
        """Одно несовпавшее поле - правило не подходит."""
        rule = Rule(vendor="cisco", os="nx-os", commands=("x",))
        assert not rule_matches(rule, c2960s)

    def test_set_field_against_unknown_identity(self):
        """Заполненное поле не совпадает с неизвестным значением."""
        rule = Rule(vendor="cisco", commands=("x",))
        assert not rule_matches(rule, Identity(address="10.0.0.9"))

    def test_address_and_hostname(self, c2960s):
        """Выбор по адресу и имени."""
        assert rule_matches(Rule(address="10.0.0.1", commands=("x",)), c2960s)
        assert rule_matches(Rule(hostname="SW1.example.net", commands=("x",)), c2960s)
        assert not rule_matches(Rule(address="10.0.0.2", commands=("x",)), c2960s)

    def test_version_exact(self, c2960s):
        """Версия сравнивается целиком, не по префиксу."""
        rule = Rule(version="c2960s-universalk9-m version 15.0(2)se10a release software (fc3)", commands=("x",))
        assert rule_matches(rule, c2960s)
        assert not rule_matches(Rule(version="15.0(2)SE10a", commands=("x",)), c2960s)


@pytest.mark.unit
class TestSelectCommands:
    """Выбор команд по набору правил."""

    def test_model_list_expansion(self, c2960s):
        """Правило со списком моделей подходит каждой модели."""
        rules = [Rule(vendor="cisco", os="ios", models=("c2960s", "c3650"), commands=("c1",))]

        assert select_commands(rules, c2960s).commands == ("c1",)
        c3650 = Identity(vendor="Cisco", os="IOS", model="C3650")
        assert select_commands(rules, c3650).commands == ("c1",)
        c3850 = Identity(vendor="Cisco", os="IOS", model="C3850")
        assert select_commands(rules, c3850) == NO_MATCH

    def test_winning_rule_is_single_model(self, c2960s):
        """Победившее правило уже развёрнуто до одной модели."""
        rules = [Rule(vendor="cisco", models=("c3650", "c2960s"), commands=("c1",))]
        outcome = select_commands(rules, c2960s)
        assert outcome.rule.models == ("c2960s",)
        assert outcome.rule.model == "c2960s"

    def test_last_match_wins(self, c2960s):
        """Из нескольких подходящих правил побеждает последнее."""
        rules = [
            Rule(vendor="cisco", commands=("first",)),
            Rule(vendor="cisco", os="ios", commands=("second",)),
            Rule(vendor="hp", commands=("other",)),
        ]
        assert select_commands(rules, c2960s).commands == ("second",)

    def test_generic_fallback(self):
        """Generic правило срабатывает, если специфичные не подошли."""
        rules = [
            Rule(vendor="cisco", commands=("c1",)),
            Rule(commands=("g1",)),
        ]
        outcome = select_commands(rules, Identity(address="10.0.0.3"))
        assert outcome.matched
        assert outcome.generic
        assert outcome.commands == ("g1",)

    def test_generic_declared_last_overrides(self, c2960s):
        """Generic в конце списка перекрывает специфичное правило."""
        rules = [
            Rule(vendor="cisco", commands=("c1",)),
            Rule(commands=("g1",)),
        ]
        assert select_commands(rules, c2960s).commands == ("g1",)

    def test_specific_after_generic_wins(self, c2960s):
        """Специфичное правило после generic побеждает."""
        rules = [
            Rule(commands=("g1",)),
            Rule(vendor="cisco", commands=("c1",)),
        ]
        outcome = select_commands(rules, c2960s)
        assert outcome.commands == ("c1",)
        assert not outcome.generic

    def test_no_match(self):
        """Ни одно правило не подошло - пустой результат."""
        rules = [Rule(vendor="cisco", commands=("c1",))]
        outcome = select_commands(rules, Identity(vendor="HP"))
        assert not outcome.matched
        assert outcome.commands == ()
        assert outcome.rule is None

    def test_empty_rules(self, c2960s):
        """Пустой набор правил - нет совпадения."""
        assert select_commands([], c2960s) == NO_MATCH

    def test_commands_order_preserved(self, c2960s):
        """Порядок команд сохраняется."""
        rules = [Rule(vendor="cisco", commands=("terminal length 0", "show version", "exit"))]
        assert select_commands(rules, c2960s).commands == ("terminal length 0", "show version", "exit")
