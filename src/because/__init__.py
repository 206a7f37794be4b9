"""Find which project files refer to a `because/` document, and link those documents into place."""
