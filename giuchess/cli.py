"""Command-line entry point: speaks XBoard by default, UCI when asked."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .uci import UciEngine
from .xboard import XBoardEngine


def main(argv: Sequence[str] | None = None) -> int:
    """Run the engine on standard input; the argument ``uci`` selects UCI."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] == "uci":
        UciEngine().run(sys.stdin)
    else:
        XBoardEngine().run(sys.stdin)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())