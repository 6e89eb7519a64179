from __future__ import annotations

from birch.cli import main

raise SystemExit(main())
