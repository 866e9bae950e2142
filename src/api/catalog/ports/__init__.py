"""Ports for the catalog bounded context.

Protocols implemented by infrastructure adapters, the exceptions they raise,
and the read models they return.
"""
