"""mdprompt - turn Markdown folders into chat request payloads."""

__version__ = "0.1.0"
