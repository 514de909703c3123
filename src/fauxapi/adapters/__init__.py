"""Adapters — bridge real HTTP servers to ``Mock.handle``.

The engine's entire adapter surface is ``Mock.handle`` plus the
``MockResponse`` shape; everything here is built on those two.
"""
