"""
Link graph shared kernel: infrastructure settings, URL helpers and the
graph store used by the crawler service.
"""
