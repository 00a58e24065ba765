"""Service implementations for rmlwrap."""
