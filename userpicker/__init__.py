"""userpicker — fuzzy user search across keyboard layouts and transliterations."""

__version__ = '1.0.0'
