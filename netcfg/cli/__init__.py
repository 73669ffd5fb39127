"""
CLI модуль netcfg.

Структура:
- utils.py: общие утилиты (настройка логирования, подготовка запуска)
- commands/: обработчики команд
  - run.py: run

Примеры использования:
    python -m netcfg run run.yml
    python -m netcfg run run.yml --dry-run
    netcfg run run.yml -c s3cret -w 4 -v
"""

import argparse
import logging
from typing import List, Optional

from .. import __version__
from .commands import cmd_run
from .utils import setup_cli_logging

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """
    Создаёт парсер аргументов командной строки.

    Returns:
        ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog="netcfg",
        description="Параллельная рассылка команд на сетевые устройства (SSH + SNMP)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  %(prog)s run run.yml
  %(prog)s run run.yml --dry-run
  %(prog)s run run.yml -c s3cret -w 4
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Подробный вывод (DEBUG)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Команды")

    # === RUN ===
    run_parser = subparsers.add_parser("run", help="Отправить команды на устройства")
    run_parser.add_argument(
        "config",
        help="Путь к YAML конфигурации запуска",
    )
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Показать правила и хосты без подключения",
    )
    run_parser.add_argument(
        "-c",
        "--community",
        default=None,
        help="SNMP community (перекрывает community из конфигурации)",
    )
    run_parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Множитель пула: cpu_count() * workers (default: 1)",
    )
    run_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Подробный вывод (DEBUG)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Главная функция CLI.

    Returns:
        int: Код выхода (0 успех, 1 фатальная ошибка)
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    setup_cli_logging(verbose=args.verbose)

    if args.command == "run":
        return cmd_run(args)

    parser.print_help()
    return 1


__all__ = [
    "setup_parser",
    "main",
    "cmd_run",
]
