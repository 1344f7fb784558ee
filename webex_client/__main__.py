"""Package entry point for ``python -m webex_client``.

WHY: Lets users run the CLI without installing the console script.

HOW: Delegates straight to webex_client.cli.main().
"""

from webex_client.cli import main

if __name__ == "__main__":
    main()
