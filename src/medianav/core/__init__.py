"""Core functionality for medianav.

This package exposes the classification, ordering and filtering functions used
by the lister and the navigation controller.
- classify: Builds a FileEntry with mime type and category flags for a path.
- sort_entries: Orders a listing with directories first.
- FilterEngine: Applies the single active category filter.

NavigationController is imported from medianav.core.navigation directly; it
depends on medianav.fs, which imports the classifier from this package.
"""

from medianav.core.classifier import classify
from medianav.core.filters import FilterEngine
from medianav.core.sorter import sort_entries

__all__ = ["FilterEngine", "classify", "sort_entries"]
