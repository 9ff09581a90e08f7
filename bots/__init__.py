"""Discord-facing bot features.

`bots.futebol` holds the slash commands and attendance panel, and
`bots.runtime` builds the client that serves them.
"""

__all__ = ["config", "futebol", "runtime"]
