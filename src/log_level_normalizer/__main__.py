"""Module entrypoint.

Allows:
    python -m log_level_normalizer
"""

from __future__ import annotations

from log_level_normalizer.server.log_server import main

if __name__ == "__main__":
    main()
