"""Configuration: fixed settings and the ``Config`` dataclass."""
