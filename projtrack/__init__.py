"""Project tracking service with GitHub activity synchronization."""
