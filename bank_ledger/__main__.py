"""Allow ``python -m bank_ledger``."""

import sys

from bank_ledger.cli import main

sys.exit(main())
