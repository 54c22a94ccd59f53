"""
Adapter implementations for the route planner.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of storage, algorithms, and caching.
"""
