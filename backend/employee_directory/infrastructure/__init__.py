"""Infrastructure Layer — persistence, asset storage, security, and logging.

Invariants:
    - Implements core/ protocols; core/ never imports from here
    - Driver and filesystem failures mapped to typed DirectoryErrors with causes chained

Design Decisions:
    - One module per collaborator (database, employee store, assets, security, logging)
"""
