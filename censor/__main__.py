# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Run with ``python -m censor``."""

import sys

from censor.runtime.cli import main

sys.exit(main())
