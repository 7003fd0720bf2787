"""Built-in output-language renderers."""
