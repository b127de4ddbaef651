"""Quillpress blog CMS backend."""
