"""Command-line utilities built on top of the models.dev cache."""
