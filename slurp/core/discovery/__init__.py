# slurp/core/discovery/__init__.py
"""
Directory discovery for slurp.

Path sanitizing, containment checks, the exclusion set and the directory
walker used by the loader.
"""
from .containment import ContainmentGuard
from .exclusions import ExclusionSet
from .path_resolution import sanitize_path
from .walker import SourceFile, walk_source_files

__all__ = ["ContainmentGuard", "ExclusionSet", "SourceFile", "sanitize_path", "walk_source_files"]
