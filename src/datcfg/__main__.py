"""Permite `python -m datcfg`."""

import sys

from .cli import main

sys.exit(main())
