"""Feature slices: hashing, state, safety, prune and interactive selection."""
