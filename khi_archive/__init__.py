"""
KHI Archive: content management apps for a bilingual (Sorani/Kurmanji)
cultural archive.
"""
__version__ = "0.1.0"
