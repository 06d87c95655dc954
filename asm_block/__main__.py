"""Package entry point for ``python -m asm_block``.

WHY: Users render fragments with ``python -m asm_block file.s`` and start
the HTTP API with ``python -m asm_block --serve``.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
API server. Otherwise, delegates to the CLI's main() function.

RULES:
- ``--serve`` starts the HTTP API on ASM_BLOCK_HOST:ASM_BLOCK_PORT
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from asm_block.server.app import run_api
        run_api()
    else:
        from asm_block.cli import main
        main()
