from __future__ import annotations

from employee_roster.main import main

raise SystemExit(main())
