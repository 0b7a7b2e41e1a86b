"""Package entry point for ``python -m binsize_tree``.

HOW: Delegates to the CLI's main(). ``--serve`` starts the HTTP API
instead.
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from binsize_tree.server.app import run_api
        run_api()
    else:
        from binsize_tree.cli import main
        main()
