class SelectionError(ValueError):
    """A selection that would break the start-before-end invariant."""
