"""Allow ``python -m personal_training``."""

from .cli import main

raise SystemExit(main())
