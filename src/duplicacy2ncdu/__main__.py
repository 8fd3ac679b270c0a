from __future__ import annotations

import sys

from duplicacy2ncdu.main import main

sys.exit(main())
