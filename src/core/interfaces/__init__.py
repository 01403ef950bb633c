"""Contracts of the core.

- Define structural contracts (Protocol) implemented by adapters.
- The core depends on these abstractions, never on httpx directly.
"""
