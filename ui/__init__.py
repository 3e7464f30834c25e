"""Headless todo list page: document model, event bindings, rendering."""
