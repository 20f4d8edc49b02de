"""Infrastructure Layer — database sessions, entity store, mail transport, logging.

Invariants:
    - Infrastructure implements core protocols; core never imports infrastructure
    - Driver/transport exceptions are mapped to core/errors.py types at this boundary
"""
