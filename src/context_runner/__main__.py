from __future__ import annotations

from context_runner.main import main

raise SystemExit(main())
