"""vultr-cli — command-line front end for the Vultr instance API.

Built as a thin layered tool: flags are turned into request records,
sent through one API call, and rendered.
"""

from vultr_cli.version import __version__

__all__: list[str] = ["__version__"]
