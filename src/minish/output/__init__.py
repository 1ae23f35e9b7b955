"""Output layer: Rich console for banners and error reports."""
