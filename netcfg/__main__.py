"""
Точка входа для запуска модуля.

    python -m netcfg run run.yml
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
