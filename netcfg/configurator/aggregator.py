"""
Вывод результатов по мере поступления.

Успешный хост:
    <identity или host>
    <вывод сессии>
    --------------------------------------------------

Хост с ошибкой (stderr):
    <host> error: <описание>
"""

import logging
import sys
from typing import Iterable, Optional, TextIO

from ..core.constants import RESULT_SEPARATOR
from ..core.models import HostResult, RunSummary

logger = logging.getLogger(__name__)


class ResultAggregator:
    """
    Печатает результаты и считает итоги.

    Ошибка хоста не останавливает обработку остальных результатов.
    """

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def emit(self, result: HostResult) -> None:
        """Печатает один результат."""
        if result.success:
            text = result.output.decode("utf-8", errors="replace")
            self.out.write(f"{result.label}\n{text}\n{RESULT_SEPARATOR}\n")
            self.out.flush()
        else:
            self.err.write(f"{result.host} error: {result.error}\n")
            self.err.flush()

    def consume(self, results: Iterable[HostResult]) -> RunSummary:
        """
        Печатает все результаты потока.

        Returns:
            RunSummary: Списки успешных и неуспешных хостов
        """
        summary = RunSummary()
        for result in results:
            self.emit(result)
            if result.success:
                summary.succeeded.append(result.host)
            else:
                summary.failed.append(result.host)

        logger.info(
            f"Готово: всего {summary.total}, успешно {len(summary.succeeded)}, "
            f"с ошибками {len(summary.failed)}"
        )
        return summary
