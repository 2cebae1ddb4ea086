"""
CodeTools - Code language detection, compaction, reformatting and formatting.
"""

__version__ = "0.1.0"
