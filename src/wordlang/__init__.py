"""WordLang: a little language for sets of words"""

__version__ = "0.1.0"
