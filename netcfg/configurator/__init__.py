"""
Рассылка команд на устройства.

- session: выполнение команд в удалённом shell
- dispatcher: параллельная обработка хостов
- aggregator: вывод результатов
"""

from .session import SessionRunner
from .dispatcher import ConfigDispatcher
from .aggregator import ResultAggregator

__all__ = [
    "SessionRunner",
    "ConfigDispatcher",
    "ResultAggregator",
]
