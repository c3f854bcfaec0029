"""Users and categories stored through SQLAlchemy, with a WSGI server skeleton."""

__version__ = "0.1.0"