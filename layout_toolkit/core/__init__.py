"""GUI-agnostic core: models, fragment parser, tree builder and renderers."""
