"""Routing — compiled patterns, routes, and the prioritized route table.

Routes are registered during configuration and published as an
immutable snapshot that concurrent dispatches only ever read.
"""
