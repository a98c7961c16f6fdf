"""Persistent state -- the registered server address."""

from .address_store import SERVER_URL_KEY, AddressStore

__all__ = ["SERVER_URL_KEY", "AddressStore"]
