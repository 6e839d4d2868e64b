"""Launch the Luminex window from a source checkout."""

from __future__ import annotations

from luminex.ui.main import main

if __name__ == "__main__":
    raise SystemExit(main())
