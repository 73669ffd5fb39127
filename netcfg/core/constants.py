"""
Константы netcfg.
"""

# SSH
DEFAULT_SSH_PORT = 22
DEFAULT_TIMEOUT = 10.0

# SNMP
SNMP_PORT = 161
SYS_DESCR_OID = "1.3.6.1.2.1.1.1.0"
DEFAULT_COMMUNITY = "public"
DEFAULT_PROBE_TIMEOUT = 5.0

# Пул воркеров: cpu_count() * workers
DEFAULT_WORKERS = 1

# Разделитель блоков вывода
RESULT_SEPARATOR = "-" * 50

# Режимы проверки ключа хоста
ACCEPT_ALL = "all"
ACCEPT_KNOWN_HOSTS = "known_hosts"

# Переменные окружения
ENV_PASSWORD = "NETCFG_PASSWORD"
