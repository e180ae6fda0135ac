"""Allow ``python -m thermo_cf``."""

from __future__ import annotations

from thermo_cf.cli import main

raise SystemExit(main())
