"""Small, dependency-light helpers shared across the package."""
