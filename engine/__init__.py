from .bootstrap import bootstrap_categories

__all__ = ["bootstrap_categories"]
