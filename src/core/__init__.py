"""Core: domain models, errors, configuration and the async resource state machines.

The core depends on abstractions (`core.interfaces`); concrete HTTP and
storage live in `adapters`.
"""
