"""Infrastructure adapters: logging and the Wave API transport."""
