"""Infrastructure layer — edge-list sources and the lazily built graph.

This layer depends on stdlib, NetworkX, and the domain graph type.
It must never import from services, commands, or output.
"""
