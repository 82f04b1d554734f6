"""herokit -- Heroku container deployment scaffolding for Rails apps."""

__version__ = "0.1.0"
