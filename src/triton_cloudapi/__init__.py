"""Triton CloudAPI client.

Typed Python client for the Joyent Triton CloudAPI: HTTP signature
authentication, field-name normalization and Pydantic-validated responses
for machines, images, networks, users, roles, firewall rules and volumes.
"""

__version__ = "0.1.0"
