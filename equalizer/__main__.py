"""Allow ``python -m equalizer``."""

from equalizer.cli import main

raise SystemExit(main())
