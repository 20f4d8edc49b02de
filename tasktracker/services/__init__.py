"""Services Layer — managers that orchestrate the store and notifier around core rules.

Invariants:
    - Managers receive their collaborators by injection (store, dispatcher)
    - Pure rules stay in core/; managers only sequence IO around them
"""
