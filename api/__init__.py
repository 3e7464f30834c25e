"""REST client and payload models for the todo backend."""
