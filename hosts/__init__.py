"""
Host adapters implementing :class:`dumpinfo.providers.ProviderSet`.
"""

from importlib import import_module

__all__ = ["HOSTS", "host_module"]

HOSTS = {
    "local": "hosts.local",
    "jenkins": "hosts.jenkins",
}


def host_module(name: str):
    return import_module(HOSTS[name])
