"""LINE chat bot that reports the status of a registered Minecraft server."""

__version__ = "0.1.0"
