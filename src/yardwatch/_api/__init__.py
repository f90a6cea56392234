"""Fleet backend endpoint helpers."""
