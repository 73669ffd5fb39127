"""
Команда run: рассылка команд по хостам из конфигурации.
"""

import logging

from ...configurator import ConfigDispatcher, ResultAggregator
from ...configurator.dispatcher import check_run
from ...core.exceptions import ConfigError, format_error_for_log
from ..utils import get_credentials, prepare_run, print_plan

logger = logging.getLogger(__name__)


def cmd_run(args) -> int:
    """
    Обработчик команды run.

    Returns:
        int: 1 при фатальной ошибке конфигурации, иначе 0
            (ошибки отдельных хостов на код выхода не влияют)
    """
    try:
        plan = prepare_run(args)
    except ConfigError as e:
        logger.error(format_error_for_log(e))
        return 1

    if args.dry_run:
        print_plan(plan)
        return 0

    try:
        check_run(plan.hosts, plan.rules)
        credentials = get_credentials(plan.config)
    except ConfigError as e:
        logger.error(format_error_for_log(e))
        return 1

    dispatcher = ConfigDispatcher(
        credentials=credentials,
        rules=plan.rules,
        timeout=plan.config.timeout,
        community=plan.community,
        workers=plan.workers,
        accept=plan.config.accept,
    )
    aggregator = ResultAggregator()
    summary = aggregator.consume(dispatcher.iter_results(plan.hosts))

    if summary.failed:
        logger.warning(f"Хосты с ошибками: {', '.join(summary.failed)}")
    return 0
