"""ahndn-client — interactive diagnostic client for the AHNDN agent.

Talks to the local forwarding agent over a Unix domain socket and
renders its JSON replies as tables.
"""

from ahndn_client.version import __version__

__all__: list[str] = ["__version__"]
