"""
Catering pricing engine.

Turns a catering configuration snapshot (package + customer selections) into
an itemized, deterministic pricing ledger. Pure Python math, no I/O.
"""
