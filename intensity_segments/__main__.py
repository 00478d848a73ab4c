"""Allow ``python -m intensity_segments``."""

from intensity_segments.main import main

if __name__ == "__main__":
    raise SystemExit(main())
