"""
Ink & Atlas - literary landmark map backend
"""

__version__ = "1.0.0"
