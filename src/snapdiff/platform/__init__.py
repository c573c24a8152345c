"""Platform adapters: logging and HTTP."""
