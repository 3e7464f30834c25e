"""Configuration management utilities for the todo UI bindings.

Provides:
- Config: base class with dict export and JSON overrides
- MarkupConventions: the names the bindings expect in server-rendered markup
- AppConfig: runtime settings loaded from environment variables
"""

import json
import os as _os
from pathlib import Path
from typing import Any, Dict, Union

# Worker threads and pooled connections are both sized from this
DEFAULT_MAX_IN_FLIGHT = 4


class Config:
    """Base configuration class for organizing application settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create a config with defaults overridden by *data*.

        Only attributes the class already defines may be overridden.

        Raises:
            ValueError: If *data* names an unknown setting
        """
        config = cls()
        known = config.to_dict()
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"unknown {cls.__name__} setting(s): {', '.join(unknown)}")
        for key, value in data.items():
            setattr(config, key, value)
        return config

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> "Config":
        """Load overrides from a JSON object file.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not a JSON object or names unknown settings
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object")
        return cls.from_dict(data)


class MarkupConventions(Config):
    """Class names and attributes shared with the server-rendered page.

    The defaults match the markup produced by ``ui/templates/todo_list.html``:

        <li>
          <input type="checkbox" id="todo_42" value="42">
          <label data-todo-id="42" data-original="Buy milk">Buy milk</label>
          <button class="invisible" value="42">&times;</button>
        </li>
    """

    def __init__(self) -> None:
        super().__init__()
        self.checkbox_id_prefix = "todo_"
        self.completed_class = "completed"
        self.invisible_class = "invisible"
        self.editable_attr = "contenteditable"
        self.item_id_attr = "data-todo-id"
        self.original_attr = "data-original"
        self.confirm_message = "Are you sure you want to delete this todo?"

    def checkbox_id(self, item_id: Any) -> str:
        """Element id of the checkbox for *item_id* (e.g. ``todo_42``)."""
        return f"{self.checkbox_id_prefix}{item_id}"


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the CLI works out of the box
    against a backend on localhost.

    Environment variables:
        TODO_API_BASE_URL: Backend origin (default: http://localhost:3000)
        TODO_COLLECTION_PATH: Path of the todo collection (default: /todos)
        TODO_PAGE_PATH: Path of the server-rendered list page (default: /todos)
        TODO_HTTP_TIMEOUT: Per-request timeout in seconds (default: 10)
        TODO_MAX_IN_FLIGHT: Worker threads for concurrent requests (default: 4)
        APP_LOG_FORMAT: Logging format — "text" or "json" (default: text)
        APP_LOG_LEVEL: Root log level (default: INFO)
    """

    def __init__(self) -> None:
        super().__init__()
        self.base_url = _os.getenv("TODO_API_BASE_URL", "http://localhost:3000").rstrip("/")
        self.collection_path = "/" + _os.getenv("TODO_COLLECTION_PATH", "/todos").strip("/")
        self.page_path = _os.getenv("TODO_PAGE_PATH", "/todos")
        self.http_timeout = float(_os.getenv("TODO_HTTP_TIMEOUT", "10"))
        self.max_in_flight = max(1, int(_os.getenv("TODO_MAX_IN_FLIGHT", str(DEFAULT_MAX_IN_FLIGHT))))
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        self.log_level = _os.getenv("APP_LOG_LEVEL", "INFO").upper()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
