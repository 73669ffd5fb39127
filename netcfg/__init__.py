"""
netcfg - параллельная рассылка команд на сетевые устройства.

Для каждого хоста: SSH подключение, идентификация (SNMP sysDescr +
обратный DNS), выбор команд по правилам, выполнение в удалённом shell.
"""

__version__ = "0.1.0"
