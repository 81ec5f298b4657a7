"""Services Layer — orchestrates core rules around store and identity IO.

Invariants:
    - Services receive their collaborators explicitly (no module-level singletons)
    - No HTTP types cross into services
"""
