"""Routing — route-key compilation and the ordered route table.

Routes are compiled once at registration and never mutated. Lookup
prefers parameter-free routes and, within each tier, the most recently
registered route.
"""
