"""envtag's own settings and logging setup."""
