"""Platform adapters: filesystem primitives, logging and terminal control."""
