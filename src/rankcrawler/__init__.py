"""
Rank Crawler Service

Depth-bounded, priority-ordered crawler that builds a link graph and keeps
an approximate per-page rank as edges are discovered.
"""
