"""
CMS - content backend for a marketing site.

Editors manage newsletters, blogs and case studies stored as TipTap
documents; inline images live in object storage and are kept in sync
with the documents that reference them.
"""

__version__ = "1.0.0"
