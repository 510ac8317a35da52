"""Object type descriptor and per-operation schema resources."""
