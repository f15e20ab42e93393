"""Infrastructure layer — catalog storage, templates, and the layer graph."""
